"""Movement selection and workout-level adjustments.

This module picks catalog movements for a target muscle and reshapes
finished workouts:
- find_suitable_movement: filter + deterministic ranking
- enforce_movement_variety: balance push/pull/squat-hinge patterns and equipment
- avoid_back_to_back: swap exercises that hit yesterday's primary muscles
"""

from collections import Counter
from collections.abc import Iterable
from datetime import timedelta

from loguru import logger

from train.domain.enums import EquipmentType, MovementPattern, MuscleGroup
from train.domain.models import ExerciseInstance, ExerciseSet, Movement, TrainingPlan, Workout

_PATTERN_PAIRS: tuple[tuple[MovementPattern, MovementPattern], ...] = (
    (MovementPattern.HORIZONTAL_PUSH, MovementPattern.VERTICAL_PUSH),
    (MovementPattern.HORIZONTAL_PULL, MovementPattern.VERTICAL_PULL),
    (MovementPattern.SQUAT, MovementPattern.HINGE),
)

DEFAULT_TARGET_REPS = 10


def find_suitable_movement(
    muscle: MuscleGroup,
    library: Iterable[Movement],
    equipment: Iterable[EquipmentType],
    excluded: Iterable[Movement] = (),
    pattern: MovementPattern | None = None,
    is_compound: bool | None = None,
) -> Movement | None:
    """Find the best catalog movement for a muscle.

    Candidates must list the muscle as a primary, use available equipment,
    not be excluded, and match the compound flag and pattern when given.

    Ranking (first wins):
    1. Muscle is the movement's first primary
    2. Complex pattern (squat, hinge, lunge, horizontal/vertical push/pull)
    3. Isolation requests prefer fewer secondaries; otherwise more secondaries
    4. Name, so ties are deterministic

    Returns:
        Best movement, or None when nothing qualifies
    """
    allowed = set(equipment)
    excluded_names = {m.name for m in excluded}

    candidates = [
        m
        for m in library
        if muscle in m.primary_muscles
        and m.equipment in allowed
        and m.name not in excluded_names
        and (is_compound is None or m.is_compound == is_compound)
        and (pattern is None or m.pattern == pattern)
    ]
    if not candidates:
        return None

    def rank(movement: Movement) -> tuple[bool, bool, int, str]:
        secondary_count = len(movement.secondary_muscles)
        focus = secondary_count if is_compound is False else -secondary_count
        return (
            movement.first_primary != muscle,
            not movement.pattern.is_complex,
            focus,
            movement.name,
        )

    return min(candidates, key=rank)


def make_exercise(movement: Movement, set_count: int, target_reps: int) -> ExerciseInstance:
    """Create an exercise instance with identical unloaded sets."""
    return ExerciseInstance(
        movement=movement,
        sets=[ExerciseSet(weight=0.0, target_reps=target_reps) for _ in range(set_count)],
    )


def _replacement(exercise: ExerciseInstance, movement: Movement) -> ExerciseInstance:
    target_reps = exercise.sets[0].target_reps if exercise.sets else DEFAULT_TARGET_REPS
    return make_exercise(movement, len(exercise.sets), target_reps)


def _replace_pattern(
    workout: Workout,
    from_pattern: MovementPattern,
    to_pattern: MovementPattern,
    library: list[Movement],
    equipment: tuple[EquipmentType, ...],
) -> bool:
    in_use = [e.movement for e in workout.exercises]
    for index, exercise in enumerate(workout.exercises):
        if exercise.movement.pattern != from_pattern:
            continue
        movement = find_suitable_movement(
            exercise.movement.first_primary,
            library,
            equipment,
            excluded=in_use,
            pattern=to_pattern,
        )
        if movement is not None:
            logger.debug(f"Variety: {exercise.movement.name} -> {movement.name} ({from_pattern} -> {to_pattern})")
            workout.exercises[index] = _replacement(exercise, movement)
            return True
    return False


def _replace_equipment(
    workout: Workout,
    from_equipment: EquipmentType,
    library: list[Movement],
    equipment: tuple[EquipmentType, ...],
) -> bool:
    other_equipment = tuple(e for e in equipment if e != from_equipment)
    in_use = [e.movement for e in workout.exercises]
    for index, exercise in enumerate(workout.exercises):
        if exercise.movement.equipment != from_equipment:
            continue
        movement = find_suitable_movement(
            exercise.movement.first_primary,
            library,
            other_equipment,
            excluded=in_use,
        )
        if movement is not None:
            logger.debug(f"Variety: {exercise.movement.name} -> {movement.name} (equipment {from_equipment})")
            workout.exercises[index] = _replacement(exercise, movement)
            return True
    return False


def enforce_movement_variety(
    workout: Workout,
    library: list[Movement],
    equipment: tuple[EquipmentType, ...],
) -> None:
    """Rebalance a workout's movement patterns and equipment in place.

    Skipped for workouts with fewer than 3 exercises. For each complementary
    pattern pair, a workout with 2+ of one side and none of the other swaps
    one exercise over. When more than two equipment types are available,
    each equipment type used 2+ times has one exercise moved to other
    equipment. Replacements keep the primary muscle, set count and reps.
    """
    if len(workout.exercises) < 3:
        return

    pattern_counts = Counter(e.movement.pattern for e in workout.exercises)
    for first, second in _PATTERN_PAIRS:
        if pattern_counts[first] >= 2 and pattern_counts[second] == 0:
            _replace_pattern(workout, first, second, library, equipment)
        if pattern_counts[second] >= 2 and pattern_counts[first] == 0:
            _replace_pattern(workout, second, first, library, equipment)

    if len(equipment) <= 2:
        return

    equipment_counts = Counter(e.movement.equipment for e in workout.exercises)
    for used, count in sorted(equipment_counts.items()):
        if count >= 2:
            _replace_equipment(workout, used, library, equipment)


def _find_alternative(
    exercise: ExerciseInstance,
    avoid: set[MuscleGroup],
    library: list[Movement],
) -> ExerciseInstance | None:
    movement = exercise.movement
    safe = [m for m in movement.primary_muscles if m not in avoid]
    if not safe:
        safe = [m for m in movement.secondary_muscles if m not in avoid]
    if not safe:
        return None

    replacement = find_suitable_movement(
        safe[0],
        library,
        (movement.equipment,),
        excluded=(movement,),
        is_compound=movement.is_compound,
    )
    if replacement is None or set(replacement.primary_muscles) & avoid:
        return None
    return _replacement(exercise, replacement)


def avoid_back_to_back(plan: TrainingPlan, library: list[Movement]) -> int:
    """Swap exercises that train the previous day's primary muscles.

    Only consecutive calendar days are compared. Exercises with no
    alternative on the same equipment are left alone.

    Returns:
        Number of exercises swapped
    """
    dated = sorted((w for w in plan.workouts if w.scheduled_date is not None), key=lambda w: w.scheduled_date)
    swapped = 0
    for previous, current in zip(dated, dated[1:], strict=False):
        if current.scheduled_date != previous.scheduled_date + timedelta(days=1):
            continue
        yesterday = {m for e in previous.exercises for m in e.movement.primary_muscles}
        for index, exercise in enumerate(current.exercises):
            if not set(exercise.movement.primary_muscles) & yesterday:
                continue
            alternative = _find_alternative(exercise, yesterday, library)
            if alternative is not None:
                current.exercises[index] = alternative
                swapped += 1

    if swapped:
        logger.info(f"Swapped {swapped} exercises to avoid back-to-back muscle use")
    return swapped
