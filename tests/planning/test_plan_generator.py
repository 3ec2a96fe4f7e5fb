"""Tests for the adaptive plan generator.

Tests cover:
- Plan shape (weeks, days, dates, names)
- Exercise caps and per-day uniqueness
- Determinism
- Progressive overload in later weeks
- Input validation
- Variety and back-to-back post-processing
"""

from datetime import date, timedelta

import pytest

from train.domain.enums import (
    EquipmentType,
    MovementPattern,
    MuscleGroup,
    SplitStyle,
    TrainingExperience,
    TrainingGoal,
    WorkoutDuration,
)
from train.domain.models import Movement, PlanInput, PlanPreferences, TrainingPlan, Workout
from train.domain.movement_library import get_movement
from train.errors import IncompletePreferencesError, InvalidPlanInputError
from train.planning.generator import generate_plan, generate_plan_from_preferences, workout_date
from train.planning.selector import (
    avoid_back_to_back,
    enforce_movement_variety,
    find_suitable_movement,
    make_exercise,
)
from train.planning.split import day_type_for, muscles_for_day

START = date(2024, 1, 1)


def _structure(plan: TrainingPlan) -> list:
    return [
        [
            (w.name, w.scheduled_date, [(e.movement.name, len(e.sets), [(s.weight, s.target_reps) for s in e.sets]) for e in w.exercises])
            for w in week
        ]
        for week in plan.weeks
    ]


def _suitable_count(plan_input: PlanInput, day: int, library: list[Movement]) -> int:
    muscles = set(muscles_for_day(day_type_for(day, plan_input.split)))
    equipment = set(plan_input.equipment)
    return sum(1 for m in library if m.equipment in equipment and muscles & set(m.primary_muscles))


class TestPlanShape:
    """Plan structure and scheduling."""

    def test_weeks_and_days(self, plan_input: PlanInput) -> None:
        plan = generate_plan(plan_input, START)
        assert plan.length_in_weeks == 4
        assert all(len(week) == 3 for week in plan.weeks)

    def test_dates_follow_week_and_day(self, plan_input: PlanInput) -> None:
        plan = generate_plan(plan_input, START)
        for week_number, week in enumerate(plan.weeks, start=1):
            for day, workout in enumerate(week, start=1):
                assert workout.scheduled_date == START + timedelta(days=(week_number - 1) * 7 + day - 1)
        assert plan.start_date == START
        assert plan.end_date == workout_date(START, 4, 3)

    def test_names_and_notes(self, plan_input: PlanInput) -> None:
        plan = generate_plan(plan_input, START)
        assert plan.name == "Custom Build Muscle Plan"
        assert plan.notes == "Generated based on your preferences"
        assert plan.weeks[0][0].name == "Full Body Workout"
        assert plan.weeks[0][0].notes.startswith("Targets: ")

    def test_muscle_preferences(self, plan_input: PlanInput) -> None:
        """Chest grows, every other trainable muscle is maintained."""
        plan = generate_plan(plan_input, START)
        assert plan.prioritized_muscles == {MuscleGroup.CHEST}
        assert len(plan.muscle_preferences) == len(MuscleGroup.trainable())

    def test_ppl_day_names(self, plan_input: PlanInput) -> None:
        ppl = plan_input.model_copy(update={"split": SplitStyle.PUSH_PULL_LEGS, "days_per_week": 3})
        plan = generate_plan(ppl, START)
        assert [w.name for w in plan.weeks[0]] == ["Push Workout", "Pull Workout", "Legs Workout"]


class TestExerciseLimits:
    """Per-day caps."""

    @pytest.mark.parametrize(
        "split,days,duration,equipment",
        [
            (SplitStyle.FULL_BODY, 3, WorkoutDuration.MEDIUM, (EquipmentType.BARBELL, EquipmentType.DUMBBELL)),
            (SplitStyle.UPPER_LOWER, 4, WorkoutDuration.LONG, (EquipmentType.BODYWEIGHT,)),
            (SplitStyle.PUSH_PULL_LEGS, 6, WorkoutDuration.SHORT, tuple(EquipmentType)),
            (SplitStyle.PUSH_PULL_LEGS, 3, WorkoutDuration.LONG, (EquipmentType.MACHINE,)),
        ],
    )
    def test_never_exceeds_cap_or_catalog(self, library, split, days, duration, equipment) -> None:
        """Exercises per day stay within the duration cap and the suitable movements available."""
        plan_input = PlanInput(
            goal=TrainingGoal.STRENGTH,
            days_per_week=days,
            duration=duration,
            equipment=equipment,
            split=split,
            experience=TrainingExperience.ADVANCED,
            prioritized_muscles=(MuscleGroup.BACK, MuscleGroup.QUADS),
            weeks=2,
        )
        plan = generate_plan(plan_input, START, library)
        for week in plan.weeks:
            for day, workout in enumerate(week, start=1):
                assert len(workout.exercises) <= duration.exercise_count
                assert len(workout.exercises) <= _suitable_count(plan_input, day, library)
                names = [e.movement.name for e in workout.exercises]
                assert len(names) == len(set(names))

    def test_every_exercise_uses_available_equipment(self, plan_input: PlanInput) -> None:
        plan = generate_plan(plan_input, START)
        for workout in plan.workouts:
            for exercise in workout.exercises:
                assert exercise.movement.equipment in plan_input.equipment
                assert 1 <= len(exercise.sets) <= 5

    def test_empty_catalog_gives_empty_workouts(self, plan_input: PlanInput) -> None:
        plan = generate_plan(plan_input, START, library=[])
        assert all(not w.exercises for w in plan.workouts)


class TestDeterminism:
    """Same input, same plan."""

    def test_same_input_same_structure(self, plan_input: PlanInput) -> None:
        first = generate_plan(plan_input, START)
        second = generate_plan(plan_input, START)
        assert _structure(first) == _structure(second)

    def test_ids_are_unique(self, plan_input: PlanInput) -> None:
        plan = generate_plan(plan_input, START)
        ids = [w.id for w in plan.workouts]
        assert len(ids) == len(set(ids))


class TestProgressiveOverload:
    """Later weeks progress prioritized muscles only."""

    def test_intermediate_week_three(self, plan_input: PlanInput) -> None:
        """Week 3 adds one set and 2 x increment pounds to chest-led exercises."""
        plan = generate_plan(plan_input, START)
        for base, later in zip(plan.weeks[0], plan.weeks[2], strict=True):
            for base_exercise, later_exercise in zip(base.exercises, later.exercises, strict=True):
                assert base_exercise.movement.name == later_exercise.movement.name
                if base_exercise.movement.first_primary is MuscleGroup.CHEST:
                    assert len(later_exercise.sets) == min(5, len(base_exercise.sets) + 1)
                    increment = base_exercise.movement.equipment.weight_increment
                    assert all(s.weight == increment * 2 for s in later_exercise.sets)
                else:
                    assert len(later_exercise.sets) == len(base_exercise.sets)
                    assert all(s.weight == 0 for s in later_exercise.sets)

    def test_beginner_adds_reps_early(self, plan_input: PlanInput) -> None:
        beginner = plan_input.model_copy(update={"experience": TrainingExperience.BEGINNER})
        plan = generate_plan(beginner, START)
        for base, week_two in zip(plan.weeks[0], plan.weeks[1], strict=True):
            for base_exercise, later_exercise in zip(base.exercises, week_two.exercises, strict=True):
                if base_exercise.movement.first_primary is MuscleGroup.CHEST:
                    assert later_exercise.sets[0].target_reps == base_exercise.sets[0].target_reps + 1
                    assert len(later_exercise.sets) == len(base_exercise.sets)

    def test_later_weeks_start_unlogged(self, plan_input: PlanInput) -> None:
        plan = generate_plan(plan_input, START)
        for workout in plan.workouts:
            assert not workout.is_complete
            assert all(not s.is_complete and s.completed_reps == 0 for e in workout.exercises for s in e.sets)


class TestValidation:
    """Invalid input is rejected."""

    @pytest.mark.parametrize(
        "update",
        [{"days_per_week": 0}, {"days_per_week": 8}, {"weeks": 0}, {"equipment": ()}],
    )
    def test_invalid_input(self, plan_input: PlanInput, update: dict) -> None:
        with pytest.raises(InvalidPlanInputError):
            generate_plan(plan_input.model_copy(update=update), START)

    def test_incomplete_preferences(self) -> None:
        with pytest.raises(IncompletePreferencesError):
            generate_plan_from_preferences(PlanPreferences(goal=TrainingGoal.STRENGTH), START)

    def test_complete_preferences(self) -> None:
        preferences = PlanPreferences(
            goal=TrainingGoal.STRENGTH,
            days_per_week=2,
            duration=WorkoutDuration.SHORT,
            equipment=[EquipmentType.DUMBBELL],
            split=SplitStyle.UPPER_LOWER,
            experience=TrainingExperience.BEGINNER,
        )
        plan = generate_plan_from_preferences(preferences, START, weeks=3)
        assert plan.length_in_weeks == 3
        assert plan.name == "Custom Gain Strength Plan"


class TestSelector:
    """Movement selection and post-processing."""

    def test_prefers_first_primary_and_complex(self, library) -> None:
        movement = find_suitable_movement(MuscleGroup.QUADS, library, (EquipmentType.BARBELL,))
        assert movement is not None
        assert movement.first_primary is MuscleGroup.QUADS
        assert movement.pattern.is_complex

    def test_isolation_request(self, library) -> None:
        movement = find_suitable_movement(MuscleGroup.BICEPS, library, (EquipmentType.DUMBBELL,), is_compound=False)
        assert movement is not None
        assert not movement.is_compound

    def test_nothing_suitable(self, library) -> None:
        assert find_suitable_movement(MuscleGroup.NECK, library, (EquipmentType.BARBELL,)) is None

    def test_variety_swaps_second_vertical_pull(self, library) -> None:
        """Two vertical pulls and no horizontal pull: one becomes a row, sets kept."""
        workout = Workout(
            name="Pull Workout",
            exercises=[
                make_exercise(get_movement("Pull-Ups"), 3, 8),
                make_exercise(get_movement("Lat Pulldown"), 3, 10),
                make_exercise(get_movement("Plank"), 2, 12),
            ],
        )
        equipment = (EquipmentType.BODYWEIGHT, EquipmentType.MACHINE, EquipmentType.BARBELL)

        enforce_movement_variety(workout, library, equipment)

        patterns = [e.movement.pattern for e in workout.exercises]
        assert MovementPattern.HORIZONTAL_PULL in patterns
        assert workout.exercises[0].movement.name == "Bent Over Row"
        assert len(workout.exercises[0].sets) == 3
        assert workout.exercises[0].sets[0].target_reps == 8

    def test_back_to_back_swap(self) -> None:
        """A day-two exercise hitting yesterday's chest moves to its other primary."""
        press_a = Movement(
            name="Press A",
            primary_muscles=(MuscleGroup.CHEST,),
            equipment=EquipmentType.BARBELL,
            pattern=MovementPattern.HORIZONTAL_PUSH,
            is_compound=True,
        )
        press_b = Movement(
            name="Press B",
            primary_muscles=(MuscleGroup.CHEST, MuscleGroup.SHOULDERS),
            equipment=EquipmentType.BARBELL,
            pattern=MovementPattern.HORIZONTAL_PUSH,
            is_compound=True,
        )
        press_c = Movement(
            name="Press C",
            primary_muscles=(MuscleGroup.SHOULDERS,),
            equipment=EquipmentType.BARBELL,
            pattern=MovementPattern.VERTICAL_PUSH,
            is_compound=True,
        )
        plan = TrainingPlan(
            name="Test",
            start_date=START,
            weeks=[
                [
                    Workout(name="Day 1", scheduled_date=START, exercises=[make_exercise(press_a, 3, 8)]),
                    Workout(
                        name="Day 2",
                        scheduled_date=START + timedelta(days=1),
                        exercises=[make_exercise(press_b, 4, 6)],
                    ),
                ]
            ],
        )

        swapped = avoid_back_to_back(plan, [press_a, press_b, press_c])

        assert swapped == 1
        replacement = plan.weeks[0][1].exercises[0]
        assert replacement.movement.name == "Press C"
        assert len(replacement.sets) == 4
        assert replacement.sets[0].target_reps == 6
