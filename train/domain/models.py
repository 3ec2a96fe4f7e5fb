"""Core data models for plans, workouts and feedback.

This module defines the canonical data structures that represent:
- Catalog movements (immutable)
- Plan structure (plan -> weeks -> workouts -> exercise instances -> sets)
- User preferences and the validated plan input derived from them
- Pre/post workout feedback consumed by the progression engine

Plan entities are mutable pydantic models so the generator and the
progression engine can edit them in place, and so they round-trip through
JSON storage.
"""

from datetime import date
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from train.config.settings import settings
from train.domain.enums import (
    EquipmentType,
    ExerciseIntensity,
    FatigueLevel,
    JointArea,
    MovementPattern,
    MuscleGoal,
    MuscleGroup,
    SetVolumeRating,
    SplitStyle,
    TrainingExperience,
    TrainingGoal,
    WorkoutDuration,
)


def _new_id() -> str:
    return str(uuid4())


# -----------------------------
# Catalog
# -----------------------------
class Movement(BaseModel):
    """Immutable catalog movement.

    Attributes:
        name: Display name, unique within the catalog
        primary_muscles: Muscles credited with full sets
        secondary_muscles: Muscles credited with partial sets
        equipment: Equipment needed to perform the movement
        pattern: Joint action trained
        is_compound: True for multi-joint movements
    """

    model_config = ConfigDict(frozen=True)

    name: str
    primary_muscles: tuple[MuscleGroup, ...]
    secondary_muscles: tuple[MuscleGroup, ...] = ()
    equipment: EquipmentType
    pattern: MovementPattern = MovementPattern.UNKNOWN
    is_compound: bool = False

    @property
    def first_primary(self) -> MuscleGroup:
        return self.primary_muscles[0] if self.primary_muscles else MuscleGroup.UNKNOWN

    @property
    def muscles(self) -> set[MuscleGroup]:
        """All muscles the movement touches, primary and secondary."""
        return set(self.primary_muscles) | set(self.secondary_muscles)


# -----------------------------
# Feedback
# -----------------------------
class PreWorkoutFeedback(BaseModel):
    """How the user felt before starting a workout."""

    sore_muscles: list[MuscleGroup] = Field(default_factory=list)
    joint_pain: list[JointArea] = Field(default_factory=list)


class ExerciseFeedback(BaseModel):
    """Per-exercise rating captured after the exercise."""

    intensity: ExerciseIntensity
    set_volume: SetVolumeRating


class PostWorkoutFeedback(BaseModel):
    """Whole-session rating captured after a workout."""

    fatigue: FatigueLevel


# -----------------------------
# Plan Structure
# -----------------------------
class ExerciseSet(BaseModel):
    """One set of an exercise.

    Attributes:
        weight: Load in pounds (0 for unloaded bodyweight sets)
        target_reps: Prescribed repetitions
        completed_reps: Repetitions actually performed
        is_complete: True once the set has been logged
    """

    weight: float = Field(default=0.0, ge=0)
    target_reps: int = Field(default=0, ge=0)
    completed_reps: int = Field(default=0, ge=0)
    is_complete: bool = False

    @property
    def volume(self) -> float:
        """Completed reps times weight, counted only for completed sets."""
        if not self.is_complete:
            return 0.0
        return self.completed_reps * self.weight

    def fresh_copy(self) -> "ExerciseSet":
        """Copy with the same prescription and nothing logged."""
        return ExerciseSet(weight=self.weight, target_reps=self.target_reps)


class ExerciseInstance(BaseModel):
    """A movement scheduled inside a workout, with its sets."""

    id: str = Field(default_factory=_new_id)
    movement: Movement
    sets: list[ExerciseSet] = Field(default_factory=list)
    note: str | None = None
    joint_warning: bool = False
    feedback: ExerciseFeedback | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.sets) and all(s.is_complete for s in self.sets)

    @property
    def completed_set_count(self) -> int:
        return sum(1 for s in self.sets if s.is_complete)


class Workout(BaseModel):
    """A single training session."""

    id: str = Field(default_factory=_new_id)
    name: str
    scheduled_date: date | None = None
    exercises: list[ExerciseInstance] = Field(default_factory=list)
    is_complete: bool = False
    notes: str | None = None
    pre_feedback: PreWorkoutFeedback | None = None
    post_feedback: PostWorkoutFeedback | None = None

    def trains(self, muscle: MuscleGroup) -> bool:
        """True when any exercise lists the muscle as a primary."""
        return any(muscle in e.movement.primary_muscles for e in self.exercises)


class MuscleTrainingPreference(BaseModel):
    """Whether a muscle should grow or be maintained within a plan."""

    muscle: MuscleGroup
    goal: MuscleGoal


class TrainingPlan(BaseModel):
    """A named, dated sequence of workouts grouped by week.

    Attributes:
        id: Plan identifier
        name: Display name
        notes: Free-form notes
        start_date: Date of the first workout
        end_date: Date of the last workout (None for an empty plan)
        weeks: Workouts grouped by week, in day order
        training_goal: Goal the plan was generated for
        muscle_preferences: Per-muscle grow/maintain intent
    """

    id: str = Field(default_factory=_new_id)
    name: str
    notes: str | None = None
    start_date: date
    end_date: date | None = None
    weeks: list[list[Workout]] = Field(default_factory=list)
    training_goal: TrainingGoal | None = None
    muscle_preferences: list[MuscleTrainingPreference] = Field(default_factory=list)

    @property
    def workouts(self) -> list[Workout]:
        return [w for week in self.weeks for w in week]

    @property
    def length_in_weeks(self) -> int:
        return len(self.weeks)

    @property
    def prioritized_muscles(self) -> set[MuscleGroup]:
        return {p.muscle for p in self.muscle_preferences if p.goal is MuscleGoal.GROW}


# -----------------------------
# Preferences
# -----------------------------
class PlanPreferences(BaseModel):
    """Answers collected while building a plan; any of them may still be missing."""

    goal: TrainingGoal | None = None
    days_per_week: int | None = None
    duration: WorkoutDuration | None = None
    equipment: list[EquipmentType] = Field(default_factory=list)
    split: SplitStyle | None = None
    experience: TrainingExperience | None = None
    prioritized_muscles: list[MuscleGroup] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return (
            self.goal is not None
            and self.days_per_week is not None
            and self.duration is not None
            and self.split is not None
            and self.experience is not None
            and len(self.equipment) > 0
        )


class PlanInput(BaseModel):
    """Validated, complete input for the plan generator."""

    model_config = ConfigDict(frozen=True)

    goal: TrainingGoal
    days_per_week: int
    duration: WorkoutDuration
    equipment: tuple[EquipmentType, ...]
    split: SplitStyle
    experience: TrainingExperience
    prioritized_muscles: tuple[MuscleGroup, ...] = ()
    weeks: int = Field(default_factory=lambda: settings.default_plan_weeks)

    @classmethod
    def from_preferences(cls, preferences: PlanPreferences, weeks: int | None = None) -> "PlanInput | None":
        """Build plan input from preferences.

        Args:
            preferences: Collected preferences
            weeks: Plan length; defaults to DEFAULT_PLAN_WEEKS

        Returns:
            PlanInput, or None if the preferences are incomplete
        """
        if not preferences.is_complete:
            return None
        return cls(
            goal=preferences.goal,
            days_per_week=preferences.days_per_week,
            duration=preferences.duration,
            equipment=tuple(dict.fromkeys(preferences.equipment)),
            split=preferences.split,
            experience=preferences.experience,
            prioritized_muscles=tuple(dict.fromkeys(preferences.prioritized_muscles)),
            weeks=weeks if weeks is not None else settings.default_plan_weeks,
        )
