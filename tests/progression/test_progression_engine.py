"""Tests for feedback-driven progression between plan weeks.

Tests cover:
- Weekly volume tally
- Soreness, joint pain and fatigue handling
- Volume progression and "too much" feedback
- Weight adjustments from intensity feedback
- Current week is never modified
"""

from datetime import date

import pytest

from train.domain.enums import (
    EquipmentType,
    ExerciseIntensity,
    FatigueLevel,
    JointArea,
    MuscleGroup,
    SetVolumeRating,
)
from train.domain.models import (
    ExerciseFeedback,
    PostWorkoutFeedback,
    PreWorkoutFeedback,
    TrainingPlan,
    Workout,
)
from train.progression.engine import apply_progression, progress_plan_week, volume_by_muscle, weight_adjustment

MONDAY = date(2024, 3, 11)
WEDNESDAY = date(2024, 3, 13)


@pytest.fixture
def current_week(make_workout, make_exercise) -> list[Workout]:
    """Two chest sessions: bench + curl on Monday, dumbbell bench + squat on Wednesday."""
    return [
        make_workout(
            MONDAY,
            [
                make_exercise("Barbell Bench Press", [(135, 8)] * 3),
                make_exercise("Barbell Curl", [(50, 10)] * 2),
            ],
            name="Day 1",
        ),
        make_workout(
            WEDNESDAY,
            [
                make_exercise("Dumbbell Bench Press", [(50, 10)] * 3),
                make_exercise("Barbell Back Squat", [(185, 5)] * 3),
            ],
            name="Day 2",
        ),
    ]


@pytest.fixture
def next_week(current_week: list[Workout]) -> list[Workout]:
    return [w.model_copy(deep=True) for w in current_week]


def _sets(week: list[Workout], day: int, name: str) -> int:
    return next(len(e.sets) for e in week[day].exercises if e.movement.name == name)


class TestVolumeTally:
    """Weekly set counts per muscle."""

    def test_primary_full_secondary_half(self, current_week: list[Workout]) -> None:
        volume = volume_by_muscle(current_week)
        assert volume[MuscleGroup.CHEST] == 6
        assert volume[MuscleGroup.BICEPS] == 2
        # 1.5 rounds up to 2, twice
        assert volume[MuscleGroup.TRICEPS] == 4
        assert volume[MuscleGroup.FOREARMS] == 1


class TestVolumeProgression:
    """Set additions for prioritized muscles."""

    def test_adds_up_to_two_sets(self, current_week, next_week) -> None:
        """Chest gains one set on each of its two exercises."""
        log = apply_progression(current_week, next_week, {MuscleGroup.CHEST})

        assert _sets(next_week, 0, "Barbell Bench Press") == 4
        assert _sets(next_week, 1, "Dumbbell Bench Press") == 4
        assert _sets(next_week, 0, "Barbell Curl") == 2
        assert sum("PROGRESSION: Added set" in line for line in log) == 2

    def test_added_set_copies_prescription(self, current_week, next_week) -> None:
        apply_progression(current_week, next_week, {MuscleGroup.CHEST})
        added = next_week[0].exercises[0].sets[-1]
        assert added.weight == 135
        assert added.target_reps == 8
        assert not added.is_complete

    def test_too_much_feedback_removes_a_set(self, current_week, next_week) -> None:
        current_week[0].exercises[0].feedback = ExerciseFeedback(
            intensity=ExerciseIntensity.CHALLENGING, set_volume=SetVolumeRating.TOO_MUCH
        )

        log = apply_progression(current_week, next_week, {MuscleGroup.CHEST})

        assert _sets(next_week, 0, "Barbell Bench Press") == 2
        assert any("too much" in line for line in log)

    def test_current_week_untouched(self, current_week, next_week) -> None:
        current_week[0].post_feedback = PostWorkoutFeedback(fatigue=FatigueLevel.COMPLETELY_DRAINED)
        before = [w.model_dump() for w in current_week]

        apply_progression(current_week, next_week)

        assert [w.model_dump() for w in current_week] == before


class TestFeedbackHandling:
    """Soreness, joint pain and fatigue."""

    def test_soreness_trims_earlier_session(self, current_week, next_week) -> None:
        """Sore chest on Wednesday trims Monday's bench next week and blocks chest progression."""
        current_week[1].pre_feedback = PreWorkoutFeedback(sore_muscles=[MuscleGroup.CHEST])

        log = apply_progression(current_week, next_week, {MuscleGroup.CHEST})

        assert _sets(next_week, 0, "Barbell Bench Press") == 2
        assert _sets(next_week, 1, "Dumbbell Bench Press") == 3
        assert any(line.startswith("SORENESS: Removed 1 set from Barbell Bench Press") for line in log)

    def test_soreness_without_earlier_session(self, current_week, next_week) -> None:
        current_week[0].pre_feedback = PreWorkoutFeedback(sore_muscles=[MuscleGroup.CHEST])
        log = apply_progression(current_week, next_week)
        assert "SORENESS: No previous workout found that trains chest" in log

    def test_joint_pain_flags_and_blocks(self, current_week, next_week) -> None:
        current_week[0].pre_feedback = PreWorkoutFeedback(joint_pain=[JointArea.SHOULDER])

        log = apply_progression(current_week, next_week, {MuscleGroup.CHEST})

        bench = next_week[0].exercises[0]
        curl = next_week[0].exercises[1]
        assert bench.joint_warning
        assert not curl.joint_warning
        assert len(bench.sets) == 3
        assert "PROGRESSION: Skipping chest due to joint pain warning" in log

    def test_fatigue_removes_two_sets(self, current_week, next_week) -> None:
        """A drained Monday loses two sets from its biggest exercise and gets no additions."""
        current_week[0].post_feedback = PostWorkoutFeedback(fatigue=FatigueLevel.COMPLETELY_DRAINED)

        apply_progression(current_week, next_week, {MuscleGroup.CHEST})

        assert _sets(next_week, 0, "Barbell Bench Press") == 1
        assert _sets(next_week, 0, "Barbell Curl") == 2
        assert _sets(next_week, 1, "Dumbbell Bench Press") == 4


class TestWeightProgression:
    """Load changes from intensity feedback."""

    @pytest.mark.parametrize(
        "intensity,equipment,expected",
        [
            (ExerciseIntensity.TOO_EASY, EquipmentType.BARBELL, 110.0),
            (ExerciseIntensity.TOO_EASY, EquipmentType.DUMBBELL, 105.0),
            (ExerciseIntensity.MODERATE, EquipmentType.BARBELL, 105.0),
            (ExerciseIntensity.MODERATE, EquipmentType.CABLE, 102.5),
            (ExerciseIntensity.CHALLENGING, EquipmentType.BARBELL, 100.0),
            (ExerciseIntensity.FAILED, EquipmentType.BARBELL, 95.0),
            (ExerciseIntensity.FAILED, EquipmentType.MACHINE, 97.5),
        ],
    )
    def test_weight_adjustment(self, intensity, equipment, expected) -> None:
        assert weight_adjustment(100.0, intensity, equipment) == expected

    def test_light_loads_unchanged(self) -> None:
        assert weight_adjustment(4.0, ExerciseIntensity.TOO_EASY, EquipmentType.BARBELL) == 4.0

    def test_failed_never_negative(self) -> None:
        assert weight_adjustment(5.0, ExerciseIntensity.FAILED, EquipmentType.BARBELL) == 0.0

    def test_feedback_moves_next_week_load(self, current_week, next_week) -> None:
        current_week[0].exercises[0].feedback = ExerciseFeedback(
            intensity=ExerciseIntensity.TOO_EASY, set_volume=SetVolumeRating.MODERATE
        )

        log = apply_progression(current_week, next_week, {MuscleGroup.BICEPS})

        assert all(s.weight == 145 for s in next_week[0].exercises[0].sets)
        assert any(line.startswith("WEIGHT: Barbell Bench Press weight increased from 135") for line in log)


class TestPlanWeek:
    """Progression inside a stored plan."""

    def test_last_week_has_nothing_to_progress(self, current_week) -> None:
        plan = TrainingPlan(name="One Week", start_date=MONDAY, weeks=[current_week])
        assert progress_plan_week(plan, 0) == []

    def test_progresses_following_week(self, current_week, next_week) -> None:
        plan = TrainingPlan(name="Two Weeks", start_date=MONDAY, weeks=[current_week, next_week])
        log = progress_plan_week(plan, 0)
        assert log
        assert plan.weeks[1][0].exercises[0].sets != current_week[0].exercises[0].sets
