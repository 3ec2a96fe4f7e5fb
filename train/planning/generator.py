"""Adaptive plan generator.

Turns validated plan input into a multi-week TrainingPlan:
- Week 1 is built day by day from the split, per-muscle volume targets
  and the movement catalog
- Weeks 2..N copy week 1 and apply progressive overload to prioritized muscles

Generation is deterministic: the same input and start date always yield the
same plan structure (ids aside).

If input is invalid -> raises InvalidPlanInputError.
"""

from datetime import date, timedelta

from loguru import logger

from train.domain.enums import EquipmentType, MuscleGoal, MuscleGroup, MuscleSize, TrainingExperience
from train.domain.guidelines import muscle_size, rep_range
from train.domain.models import (
    ExerciseInstance,
    Movement,
    MuscleTrainingPreference,
    PlanInput,
    PlanPreferences,
    TrainingPlan,
    Workout,
)
from train.domain.movement_library import all_movements
from train.errors import IncompletePreferencesError, InvalidPlanInputError
from train.planning.selector import enforce_movement_variety, find_suitable_movement, make_exercise
from train.planning.split import day_type_for, muscles_for_day, training_frequency, workout_description
from train.planning.volume import MAX_SETS_PER_MOVEMENT, MuscleTarget, calculate_sets_for_movement, init_muscle_target


def _validate(plan_input: PlanInput) -> None:
    if not 1 <= plan_input.days_per_week <= 7:
        raise InvalidPlanInputError(f"days_per_week must be between 1 and 7, got {plan_input.days_per_week}")
    if plan_input.weeks < 1:
        raise InvalidPlanInputError(f"weeks must be >= 1, got {plan_input.weeks}")
    if not plan_input.equipment:
        raise InvalidPlanInputError("At least one equipment type is required")


def muscle_preferences_for(prioritized: tuple[MuscleGroup, ...]) -> list[MuscleTrainingPreference]:
    """Prioritized muscles grow, every other trainable muscle is maintained."""
    preferences = [MuscleTrainingPreference(muscle=m, goal=MuscleGoal.GROW) for m in prioritized]
    preferences.extend(
        MuscleTrainingPreference(muscle=m, goal=MuscleGoal.MAINTAIN)
        for m in MuscleGroup.trainable()
        if m not in prioritized
    )
    return preferences


def workout_date(start_date: date, week: int, day: int) -> date:
    """Date of a 1-based (week, day) slot."""
    return start_date + timedelta(days=(week - 1) * 7 + (day - 1))


class PlanGenerator:
    """Builds training plans from plan input.

    Compound picks are rotated across the days of a week: a movement chosen
    in the first pass on one day is not chosen in the first pass again that
    week. Isolation picks only avoid repeats within the same day.
    """

    def __init__(self, library: list[Movement] | None = None) -> None:
        self.library = library if library is not None else all_movements()
        self._week_selected: list[Movement] = []

    def generate(self, plan_input: PlanInput, start_date: date) -> TrainingPlan:
        """Generate a plan.

        Args:
            plan_input: Validated preferences
            start_date: Date of the first workout

        Returns:
            TrainingPlan with plan_input.weeks weeks of workouts

        Raises:
            InvalidPlanInputError: If days, weeks or equipment are out of range
        """
        _validate(plan_input)
        self._week_selected = []

        plan = TrainingPlan(
            name=f"Custom {plan_input.goal.label} Plan",
            notes="Generated based on your preferences",
            start_date=start_date,
            training_goal=plan_input.goal,
            muscle_preferences=muscle_preferences_for(plan_input.prioritized_muscles),
        )

        base_week = self._generate_base_week(plan_input, start_date)
        plan.weeks.append(base_week)
        for week in range(2, plan_input.weeks + 1):
            plan.weeks.append(self._copy_week(base_week, plan_input, start_date, week))

        dated = [w.scheduled_date for w in plan.workouts if w.scheduled_date is not None]
        plan.end_date = max(dated) if dated else None

        exercise_count = sum(len(w.exercises) for w in base_week)
        logger.info(
            f"Generated plan '{plan.name}': {plan.length_in_weeks} weeks, "
            f"{plan_input.days_per_week} days/week, {exercise_count} exercises in base week"
        )
        return plan

    # ----- Base week -----

    def _generate_base_week(self, plan_input: PlanInput, start_date: date) -> list[Workout]:
        frequency = training_frequency(plan_input.split, plan_input.days_per_week)
        workouts: list[Workout] = []
        for day in range(1, plan_input.days_per_week + 1):
            workouts.append(self._create_workout(plan_input, start_date, day, frequency))
        return workouts

    def _create_workout(
        self,
        plan_input: PlanInput,
        start_date: date,
        day: int,
        frequency: dict[MuscleGroup, int],
    ) -> Workout:
        day_type = day_type_for(day, plan_input.split)
        workout = Workout(
            name=day_type.workout_name,
            notes=workout_description(day_type),
            scheduled_date=workout_date(start_date, 1, day),
        )

        prioritized = frozenset(plan_input.prioritized_muscles)
        targets: dict[MuscleGroup, MuscleTarget] = {
            muscle: init_muscle_target(muscle, prioritized, plan_input.experience, frequency)
            for muscle in muscles_for_day(day_type)
        }
        self._populate(workout, targets, plan_input, frequency)
        enforce_movement_variety(workout, self.library, plan_input.equipment)

        logger.debug(f"Day {day} ({day_type}): {[e.movement.name for e in workout.exercises]}")
        return workout

    def _populate(
        self,
        workout: Workout,
        targets: dict[MuscleGroup, MuscleTarget],
        plan_input: PlanInput,
        frequency: dict[MuscleGroup, int],
    ) -> None:
        max_exercises = plan_input.duration.exercise_count
        prioritized = frozenset(plan_input.prioritized_muscles)
        order = sorted(
            targets,
            key=lambda m: (m not in prioritized, muscle_size(m) is not MuscleSize.LARGE),
        )
        selected: list[Movement] = []

        # Pass 1: best available movement per muscle, bottom of the rep range
        for muscle in order:
            if len(selected) >= max_exercises:
                break
            if targets[muscle].remaining == 0:
                continue
            movement = find_suitable_movement(
                muscle,
                self.library,
                plan_input.equipment,
                excluded=selected + self._week_selected,
            )
            if movement is None:
                continue
            selected.append(movement)
            self._week_selected.append(movement)
            min_reps, _ = rep_range(muscle, plan_input.goal)
            self._add_exercise(workout, movement, targets, plan_input, frequency, min_reps)

        # Pass 2: isolation work for whatever is still short, biggest gap first
        still_short = sorted(
            (m for m in order if targets[m].remaining > 0),
            key=lambda m: -targets[m].remaining,
        )
        for muscle in still_short:
            if len(selected) >= max_exercises or len(workout.exercises) >= max_exercises:
                break
            if targets[muscle].remaining == 0:
                continue
            movement = find_suitable_movement(
                muscle,
                self.library,
                plan_input.equipment,
                excluded=selected,
                is_compound=False,
            )
            if movement is None:
                continue
            selected.append(movement)
            min_reps, max_reps = rep_range(muscle, plan_input.goal)
            self._add_exercise(workout, movement, targets, plan_input, frequency, (min_reps + max_reps) // 2)

    def _add_exercise(
        self,
        workout: Workout,
        movement: Movement,
        targets: dict[MuscleGroup, MuscleTarget],
        plan_input: PlanInput,
        frequency: dict[MuscleGroup, int],
        target_reps: int,
    ) -> None:
        set_count = calculate_sets_for_movement(
            movement,
            targets,
            plan_input.goal,
            plan_input.experience,
            frozenset(plan_input.prioritized_muscles),
            frequency,
        )
        if set_count > 0:
            workout.exercises.append(make_exercise(movement, set_count, target_reps))

    # ----- Later weeks -----

    def _copy_week(
        self,
        base_week: list[Workout],
        plan_input: PlanInput,
        start_date: date,
        week: int,
    ) -> list[Workout]:
        copies: list[Workout] = []
        for day, base in enumerate(base_week, start=1):
            workout = Workout(
                name=base.name,
                notes=base.notes,
                scheduled_date=workout_date(start_date, week, day),
                exercises=[
                    ExerciseInstance(movement=e.movement, sets=[s.fresh_copy() for s in e.sets])
                    for e in base.exercises
                ],
            )
            apply_progressive_overload(workout, week, plan_input)
            copies.append(workout)
        return copies


def _add_progressive_set(exercise: ExerciseInstance) -> None:
    if exercise.sets and len(exercise.sets) < MAX_SETS_PER_MOVEMENT:
        exercise.sets.append(exercise.sets[-1].fresh_copy())


def apply_progressive_overload(workout: Workout, week: int, plan_input: PlanInput) -> None:
    """Apply week-over-week overload to exercises led by a prioritized muscle.

    With w = week - 1:
    - Beginner: w <= 2 adds w reps per set; later weeks add (w - 2) // 2 sets
    - Intermediate: adds w // 2 sets
    - Advanced: adds min(w, 5 - set count) sets
    Sets never exceed 5. Loaded movements also gain increment * w pounds per set.
    """
    weeks_since_start = week - 1
    prioritized = set(plan_input.prioritized_muscles)

    for exercise in workout.exercises:
        if exercise.movement.first_primary not in prioritized:
            continue

        experience = plan_input.experience
        if experience is TrainingExperience.BEGINNER:
            if weeks_since_start <= 2:
                for s in exercise.sets:
                    s.target_reps += weeks_since_start
                added = 0
            else:
                added = (weeks_since_start - 2) // 2
        elif experience is TrainingExperience.INTERMEDIATE:
            added = weeks_since_start // 2
        else:
            added = min(weeks_since_start, MAX_SETS_PER_MOVEMENT - len(exercise.sets))

        for _ in range(added):
            _add_progressive_set(exercise)

        equipment = exercise.movement.equipment
        if equipment is not EquipmentType.BODYWEIGHT:
            for s in exercise.sets:
                s.weight += equipment.weight_increment * weeks_since_start


def generate_plan(
    plan_input: PlanInput,
    start_date: date | None = None,
    library: list[Movement] | None = None,
) -> TrainingPlan:
    """Generate a training plan (starts today unless a start date is given)."""
    return PlanGenerator(library).generate(plan_input, start_date or date.today())


def generate_plan_from_preferences(
    preferences: PlanPreferences,
    start_date: date | None = None,
    weeks: int | None = None,
) -> TrainingPlan:
    """Generate a plan straight from collected preferences.

    Raises:
        IncompletePreferencesError: If any required preference is missing
    """
    plan_input = PlanInput.from_preferences(preferences, weeks)
    if plan_input is None:
        raise IncompletePreferencesError("Goal, days, duration, split, experience and equipment are all required")
    return generate_plan(plan_input, start_date)
