"""Tests for enums, guidelines and plan entities."""

from train.domain.enums import (
    EquipmentType,
    MovementPattern,
    MuscleGroup,
    MuscleSize,
    SleepStage,
    TrainingGoal,
    WorkoutDuration,
)
from train.domain.guidelines import guideline_for, muscle_size, rep_range
from train.domain.models import ExerciseSet, PlanInput, PlanPreferences


def test_exercise_count_per_duration() -> None:
    """Durations cap exercises at 4/6/8."""
    assert WorkoutDuration.SHORT.exercise_count == 4
    assert WorkoutDuration.MEDIUM.exercise_count == 6
    assert WorkoutDuration.LONG.exercise_count == 8


def test_weight_increments() -> None:
    """Dumbbells move in 2.5 lb steps, bodyweight never changes."""
    assert EquipmentType.DUMBBELL.weight_increment == 2.5
    assert EquipmentType.BARBELL.weight_increment == 5.0
    assert EquipmentType.BODYWEIGHT.weight_increment == 0.0


def test_complex_patterns() -> None:
    """Squat and press patterns are complex, isolation patterns are not."""
    assert MovementPattern.SQUAT.is_complex
    assert MovementPattern.HORIZONTAL_PUSH.is_complex
    assert not MovementPattern.ELBOW_FLEXION.is_complex
    assert not MovementPattern.UNKNOWN.is_complex


def test_trainable_excludes_unknown() -> None:
    """The fallback muscle is never trained."""
    assert MuscleGroup.UNKNOWN not in MuscleGroup.trainable()
    assert len(MuscleGroup.trainable()) == len(MuscleGroup) - 1


def test_goal_label() -> None:
    assert TrainingGoal.HYPERTROPHY.label == "Build Muscle"
    assert TrainingGoal.STRENGTH.label == "Gain Strength"


def test_sleep_stage_detail() -> None:
    """Only core, deep and rem count as detailed stages."""
    assert {s for s in SleepStage if s.is_stage} == {SleepStage.CORE, SleepStage.DEEP, SleepStage.REM}


def test_large_muscle_ranges() -> None:
    guideline = guideline_for(MuscleGroup.CHEST)
    assert guideline.maintenance_range == (6, 8)
    assert guideline.hypertrophy_range == (10, 20)
    assert guideline.size is MuscleSize.LARGE


def test_small_muscle_ranges() -> None:
    guideline = guideline_for(MuscleGroup.BICEPS)
    assert guideline.hypertrophy_range == (8, 14)
    assert muscle_size(MuscleGroup.BICEPS) is MuscleSize.SMALL


def test_unknown_muscle_has_no_volume() -> None:
    guideline = guideline_for(MuscleGroup.UNKNOWN)
    assert guideline.maintenance_range == (0, 0)
    assert guideline.hypertrophy_range == (0, 0)


def test_rep_ranges() -> None:
    """Strength and hypertrophy ranges differ by muscle size."""
    assert rep_range(MuscleGroup.QUADS, TrainingGoal.STRENGTH) == (3, 6)
    assert rep_range(MuscleGroup.TRICEPS, TrainingGoal.STRENGTH) == (5, 8)
    assert rep_range(MuscleGroup.BACK, TrainingGoal.HYPERTROPHY) == (6, 12)
    assert rep_range(MuscleGroup.CALVES, TrainingGoal.HYPERTROPHY) == (8, 15)


def test_set_volume_only_when_complete() -> None:
    assert ExerciseSet(weight=100, completed_reps=5, is_complete=True).volume == 500
    assert ExerciseSet(weight=100, completed_reps=5, is_complete=False).volume == 0


def test_fresh_copy_clears_log() -> None:
    """A fresh copy keeps the prescription but drops what was logged."""
    logged = ExerciseSet(weight=95, target_reps=8, completed_reps=8, is_complete=True)
    copy = logged.fresh_copy()
    assert copy.weight == 95
    assert copy.target_reps == 8
    assert copy.completed_reps == 0
    assert not copy.is_complete


def test_incomplete_preferences_yield_no_input() -> None:
    """Missing equipment means no plan input."""
    preferences = PlanPreferences(
        goal=TrainingGoal.STRENGTH,
        days_per_week=3,
        duration=WorkoutDuration.SHORT,
        split="full_body",
        experience="beginner",
    )
    assert not preferences.is_complete
    assert PlanInput.from_preferences(preferences) is None


def test_complete_preferences_yield_input() -> None:
    """Duplicated equipment and muscles collapse, order kept."""
    preferences = PlanPreferences(
        goal=TrainingGoal.STRENGTH,
        days_per_week=3,
        duration=WorkoutDuration.SHORT,
        split="full_body",
        experience="beginner",
        equipment=[EquipmentType.BARBELL, EquipmentType.BARBELL, EquipmentType.DUMBBELL],
        prioritized_muscles=[MuscleGroup.BACK, MuscleGroup.BACK],
    )
    plan_input = PlanInput.from_preferences(preferences, weeks=6)
    assert plan_input is not None
    assert plan_input.equipment == (EquipmentType.BARBELL, EquipmentType.DUMBBELL)
    assert plan_input.prioritized_muscles == (MuscleGroup.BACK,)
    assert plan_input.weeks == 6
