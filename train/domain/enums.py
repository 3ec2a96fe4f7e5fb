"""Canonical enums for training dimensions.

This module defines all enumerations used across the engine.
All enums are string-based to ensure JSON serialization compatibility
with stored plans and CLI options.
"""

from enum import StrEnum


# -----------------------------
# Plan Preferences
# -----------------------------
class TrainingGoal(StrEnum):
    """What the user wants the plan to develop."""

    HYPERTROPHY = "hypertrophy"
    STRENGTH = "strength"

    @property
    def label(self) -> str:
        return {
            TrainingGoal.HYPERTROPHY: "Build Muscle",
            TrainingGoal.STRENGTH: "Gain Strength",
        }[self]


class SplitStyle(StrEnum):
    """How muscle groups are distributed across training days."""

    FULL_BODY = "full_body"
    UPPER_LOWER = "upper_lower"
    PUSH_PULL_LEGS = "push_pull_legs"

    @property
    def label(self) -> str:
        return {
            SplitStyle.FULL_BODY: "Full Body",
            SplitStyle.UPPER_LOWER: "Upper/Lower",
            SplitStyle.PUSH_PULL_LEGS: "Push/Pull/Legs",
        }[self]


class WorkoutDuration(StrEnum):
    """Session length, which bounds the number of exercises per workout."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def label(self) -> str:
        return {
            WorkoutDuration.SHORT: "~30 minutes",
            WorkoutDuration.MEDIUM: "~45 minutes",
            WorkoutDuration.LONG: "~60+ minutes",
        }[self]

    @property
    def exercise_count(self) -> int:
        return {
            WorkoutDuration.SHORT: 4,
            WorkoutDuration.MEDIUM: 6,
            WorkoutDuration.LONG: 8,
        }[self]


class TrainingExperience(StrEnum):
    """Self-reported lifting experience."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def training_age(self) -> int:
        """Approximate years of consistent training."""
        return {
            TrainingExperience.BEGINNER: 0,
            TrainingExperience.INTERMEDIATE: 2,
            TrainingExperience.ADVANCED: 4,
        }[self]


# -----------------------------
# Muscles
# -----------------------------
class MuscleGroup(StrEnum):
    """Muscle groups tracked by plans and stats."""

    CHEST = "chest"
    BACK = "back"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    SHOULDERS = "shoulders"
    ABS = "abs"
    TRAPS = "traps"
    FOREARMS = "forearms"
    LOWER_BACK = "lower_back"
    OBLIQUES = "obliques"
    NECK = "neck"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        if self is MuscleGroup.LOWER_BACK:
            return "Lower Back"
        return self.value.capitalize()

    @classmethod
    def trainable(cls) -> list["MuscleGroup"]:
        """All muscle groups except the catalog fallback."""
        return [muscle for muscle in cls if muscle is not cls.UNKNOWN]


class MuscleSize(StrEnum):
    """Large muscles tolerate more weekly volume and lower rep ranges."""

    LARGE = "large"
    SMALL = "small"


class MuscleGoal(StrEnum):
    """Per-muscle intent within a plan."""

    GROW = "grow"
    MAINTAIN = "maintain"


# -----------------------------
# Movements
# -----------------------------
class EquipmentType(StrEnum):
    """Equipment a movement needs."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    CABLE = "cable"

    @property
    def weight_increment(self) -> float:
        """Smallest practical load jump in pounds."""
        return {
            EquipmentType.BARBELL: 5.0,
            EquipmentType.DUMBBELL: 2.5,
            EquipmentType.MACHINE: 5.0,
            EquipmentType.BODYWEIGHT: 0.0,
            EquipmentType.CABLE: 5.0,
        }[self]


class MovementPattern(StrEnum):
    """Joint action a movement trains."""

    HORIZONTAL_PUSH = "horizontal_push"
    VERTICAL_PUSH = "vertical_push"
    HORIZONTAL_PULL = "horizontal_pull"
    VERTICAL_PULL = "vertical_pull"
    SQUAT = "squat"
    HINGE = "hinge"
    LUNGE = "lunge"
    ADDUCTION = "adduction"
    ABDUCTION = "abduction"
    ELBOW_FLEXION = "elbow_flexion"
    ELBOW_EXTENSION = "elbow_extension"
    KNEE_EXTENSION = "knee_extension"
    KNEE_FLEXION = "knee_flexion"
    CORE = "core"
    ROTATION = "rotation"
    UNKNOWN = "unknown"

    @property
    def is_complex(self) -> bool:
        """Multi-joint patterns preferred as a workout's primary lifts."""
        return self in _COMPLEX_PATTERNS


_COMPLEX_PATTERNS = frozenset(
    {
        MovementPattern.SQUAT,
        MovementPattern.HINGE,
        MovementPattern.LUNGE,
        MovementPattern.VERTICAL_PUSH,
        MovementPattern.HORIZONTAL_PUSH,
        MovementPattern.VERTICAL_PULL,
        MovementPattern.HORIZONTAL_PULL,
    }
)


# -----------------------------
# Split Day Types
# -----------------------------
class DayType(StrEnum):
    """Kind of training day produced by a split."""

    FULL_BODY = "full_body"
    UPPER = "upper"
    LOWER = "lower"
    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"

    @property
    def workout_name(self) -> str:
        return {
            DayType.FULL_BODY: "Full Body Workout",
            DayType.UPPER: "Upper Body Workout",
            DayType.LOWER: "Lower Body Workout",
            DayType.PUSH: "Push Workout",
            DayType.PULL: "Pull Workout",
            DayType.LEGS: "Legs Workout",
        }[self]


# -----------------------------
# Workout Feedback
# -----------------------------
class ExerciseIntensity(StrEnum):
    """How hard an exercise felt."""

    TOO_EASY = "too_easy"
    MODERATE = "moderate"
    CHALLENGING = "challenging"
    FAILED = "failed"


class SetVolumeRating(StrEnum):
    """How the number of sets felt."""

    TOO_EASY = "too_easy"
    MODERATE = "moderate"
    CHALLENGING = "challenging"
    TOO_MUCH = "too_much"


class JointArea(StrEnum):
    """Joints a user can report pain in before a workout."""

    KNEE = "knee"
    ELBOW = "elbow"
    SHOULDER = "shoulder"


class FatigueLevel(StrEnum):
    """Overall fatigue after a workout."""

    FRESH = "fresh"
    NORMAL = "normal"
    WIPED = "wiped"
    COMPLETELY_DRAINED = "completely_drained"


# -----------------------------
# Sleep
# -----------------------------
class SleepStage(StrEnum):
    """Sleep sample category reported by a health source."""

    IN_BED = "in_bed"
    ASLEEP = "asleep"
    CORE = "core"
    DEEP = "deep"
    REM = "rem"
    AWAKE = "awake"

    @property
    def is_stage(self) -> bool:
        """True for detailed stage samples (core, deep, rem)."""
        return self in (SleepStage.CORE, SleepStage.DEEP, SleepStage.REM)
