"""Feedback-driven progression between consecutive plan weeks.

Takes the week just trained and the following week, and edits only the
following week. Workouts are paired by position (day 1 with day 1, ...).

Steps:
1. Tally current volume per muscle (primary = sets, secondary = round(sets / 2))
2. Muscles under their hypertrophy ceiling become progression candidates
3. Soreness: a sore muscle trained again trims one set from the earlier
   workout that trained it, in next week's matching slot
4. Joint pain: next-week exercises touching affected muscles get a joint
   warning; those muscles do not progress
5. Fatigue: a completely drained session loses 2 sets next week and is
   skipped for progression
6. Volume: up to +2 sets per prioritized muscle, never past the ceiling;
   "too much" set-volume feedback removes a set instead
7. Weight: adjust loads from exercise intensity feedback

Returns a human-readable log of every change.
"""

from dataclasses import dataclass

from loguru import logger

from train.domain.enums import (
    EquipmentType,
    ExerciseIntensity,
    FatigueLevel,
    JointArea,
    MuscleGroup,
    SetVolumeRating,
)
from train.domain.guidelines import guideline_for
from train.domain.models import ExerciseInstance, TrainingPlan, Workout
from train.utils.weights import round_half_up

MAX_SETS_PER_EXERCISE = 5
MAX_WEEKLY_SETS_ADDED = 2
FATIGUE_SETS_REMOVED = 2
MIN_PROGRESSIVE_WEIGHT = 5.0

JOINT_AFFECTED_MUSCLES: dict[JointArea, tuple[MuscleGroup, ...]] = {
    JointArea.KNEE: (MuscleGroup.QUADS, MuscleGroup.HAMSTRINGS, MuscleGroup.CALVES),
    JointArea.SHOULDER: (MuscleGroup.CHEST, MuscleGroup.SHOULDERS, MuscleGroup.BACK, MuscleGroup.TRICEPS),
    JointArea.ELBOW: (MuscleGroup.BICEPS, MuscleGroup.TRICEPS, MuscleGroup.FOREARMS),
}


@dataclass
class MuscleProgression:
    """Sets added or removed for one muscle during a progression run."""

    muscle: MuscleGroup
    sets_added: int = 0
    sets_removed: int = 0


def volume_by_muscle(workouts: list[Workout]) -> dict[MuscleGroup, int]:
    """Weekly set tally: full credit to primaries, rounded half credit to secondaries."""
    volume: dict[MuscleGroup, int] = {}
    for workout in workouts:
        for exercise in workout.exercises:
            count = len(exercise.sets)
            for muscle in exercise.movement.primary_muscles:
                volume[muscle] = volume.get(muscle, 0) + count
            for muscle in exercise.movement.secondary_muscles:
                volume[muscle] = volume.get(muscle, 0) + round_half_up(count * 0.5)
    return volume


def weight_adjustment(current_weight: float, intensity: ExerciseIntensity, equipment: EquipmentType) -> float:
    """New load for next week given this week's load and intensity feedback.

    Loads under 5 lb are left as is. Barbells move in bigger jumps.
    """
    if current_weight < MIN_PROGRESSIVE_WEIGHT:
        return current_weight

    is_barbell = equipment is EquipmentType.BARBELL
    if intensity is ExerciseIntensity.TOO_EASY:
        increment = 10.0 if is_barbell else 5.0
    elif intensity is ExerciseIntensity.MODERATE:
        increment = 5.0 if is_barbell else 2.5
    elif intensity is ExerciseIntensity.FAILED:
        increment = -5.0 if is_barbell else -2.5
    else:
        increment = 0.0
    return max(0.0, current_weight + increment)


def _find_by_movement(workout: Workout, name: str) -> ExerciseInstance | None:
    return next((e for e in workout.exercises if e.movement.name == name), None)


def _process_soreness(
    current_week: list[Workout],
    next_week: list[Workout],
    progressions: dict[MuscleGroup, MuscleProgression],
    log: list[str],
) -> None:
    processed: set[MuscleGroup] = set()
    for index, workout in enumerate(current_week):
        if workout.pre_feedback is None or workout.scheduled_date is None:
            continue
        for muscle in workout.pre_feedback.sore_muscles:
            if muscle in processed or not workout.trains(muscle):
                continue

            earlier = [
                (i, w)
                for i, w in enumerate(current_week)
                if i != index
                and w.scheduled_date is not None
                and w.scheduled_date < workout.scheduled_date
                and w.trains(muscle)
            ]
            if not earlier:
                log.append(f"SORENESS: No previous workout found that trains {muscle}")
                continue

            prev_index, previous = max(earlier, key=lambda pair: pair[1].scheduled_date)
            if prev_index >= len(next_week):
                continue
            source = next(e for e in previous.exercises if muscle in e.movement.primary_muscles)
            target = _find_by_movement(next_week[prev_index], source.movement.name)
            if target is None:
                continue
            if len(target.sets) <= 1:
                log.append(f"SORENESS: Cannot reduce sets in {target.movement.name} - only 1 set available")
                continue

            target.sets.pop()
            processed.add(muscle)
            progressions.setdefault(muscle, MuscleProgression(muscle)).sets_removed += 1
            log.append(
                f"SORENESS: Removed 1 set from {target.movement.name} in '{previous.name}' due to soreness in {muscle}"
            )


def _process_joint_pain(current_week: list[Workout], next_week: list[Workout], log: list[str]) -> set[MuscleGroup]:
    reported = {area for w in current_week if w.pre_feedback for area in w.pre_feedback.joint_pain}
    warned: set[MuscleGroup] = set()
    for area in sorted(reported):
        affected = set(JOINT_AFFECTED_MUSCLES[area])
        warned |= affected
        for workout in next_week:
            for exercise in workout.exercises:
                if exercise.movement.muscles & affected:
                    exercise.joint_warning = True
                    log.append(f"JOINT PAIN: Flagged {exercise.movement.name} with warning for {area} pain")
    return warned


def _process_fatigue(current_week: list[Workout], next_week: list[Workout], log: list[str]) -> set[int]:
    reduced: set[int] = set()
    for index, workout in enumerate(current_week):
        if index >= len(next_week):
            continue
        if workout.post_feedback is None or workout.post_feedback.fatigue is not FatigueLevel.COMPLETELY_DRAINED:
            continue

        log.append(f"FATIGUE: Workout {workout.name} reported completely drained, removing {FATIGUE_SETS_REMOVED} sets")
        remaining = FATIGUE_SETS_REMOVED
        for exercise in sorted(next_week[index].exercises, key=lambda e: -len(e.sets)):
            if remaining == 0:
                break
            removable = min(remaining, len(exercise.sets) - 1)
            if removable <= 0:
                continue
            del exercise.sets[-removable:]
            remaining -= removable
            reduced.add(index)
            log.append(f"FATIGUE: Removed {removable} sets from {exercise.movement.name}")
    return reduced


def _apply_volume_progression(
    current_week: list[Workout],
    next_week: list[Workout],
    current_volume: dict[MuscleGroup, int],
    progressions: dict[MuscleGroup, MuscleProgression],
    prioritized: set[MuscleGroup],
    warned: set[MuscleGroup],
    fatigue_reduced: set[int],
    log: list[str],
) -> None:
    trimmed: set[str] = set()
    for muscle in sorted(progressions):
        progression = progressions[muscle]
        if muscle in warned:
            log.append(f"PROGRESSION: Skipping {muscle} due to joint pain warning")
            continue
        if progression.sets_removed > 0:
            continue
        if prioritized and muscle not in prioritized:
            continue

        ceiling = guideline_for(muscle).max_hypertrophy_sets
        allowed = min(MAX_WEEKLY_SETS_ADDED, ceiling - current_volume.get(muscle, 0))
        if allowed <= 0:
            continue

        eligible = [
            (index, exercise)
            for index, workout in enumerate(next_week)
            if index not in fatigue_reduced
            for exercise in workout.exercises
            if not exercise.joint_warning and muscle in exercise.movement.primary_muscles
        ]
        eligible.sort(key=lambda pair: len(pair[1].sets))

        for index, exercise in eligible:
            if progression.sets_added >= allowed:
                break
            if len(exercise.sets) >= MAX_SETS_PER_EXERCISE or not exercise.sets:
                continue

            previous = _find_by_movement(current_week[index], exercise.movement.name) if index < len(current_week) else None
            if previous is not None and previous.feedback and previous.feedback.set_volume is SetVolumeRating.TOO_MUCH:
                if exercise.id not in trimmed and len(exercise.sets) > 1:
                    trimmed.add(exercise.id)
                    exercise.sets.pop()
                    log.append(f"PROGRESSION: Removed 1 set from {exercise.movement.name} due to 'too much' feedback")
                continue

            exercise.sets.append(exercise.sets[-1].fresh_copy())
            progression.sets_added += 1
            log.append(f"PROGRESSION: Added set to {exercise.movement.name} for {muscle} (now {len(exercise.sets)} sets)")


def _apply_weight_progression(current_week: list[Workout], next_week: list[Workout], log: list[str]) -> None:
    for index, workout in enumerate(current_week):
        if index >= len(next_week):
            continue
        for current in workout.exercises:
            if current.movement.equipment is EquipmentType.BODYWEIGHT or current.feedback is None or not current.sets:
                continue
            upcoming = _find_by_movement(next_week[index], current.movement.name)
            if upcoming is None:
                continue

            for set_index, upcoming_set in enumerate(upcoming.sets):
                reference = current.sets[min(set_index, len(current.sets) - 1)].weight
                new_weight = weight_adjustment(reference, current.feedback.intensity, current.movement.equipment)
                if new_weight != reference:
                    upcoming_set.weight = new_weight
                    direction = "increased" if new_weight > reference else "decreased"
                    log.append(
                        f"WEIGHT: {current.movement.name} weight {direction} from {reference} to {new_weight} "
                        f"based on {current.feedback.intensity} feedback"
                    )


def apply_progression(
    current_week: list[Workout],
    next_week: list[Workout],
    prioritized_muscles: set[MuscleGroup] | None = None,
) -> list[str]:
    """Adjust next week's workouts from this week's feedback.

    Args:
        current_week: Workouts just trained, with feedback attached (not modified)
        next_week: Following week's workouts (modified in place)
        prioritized_muscles: Muscles allowed to gain volume; empty or None
            means every muscle may progress

    Returns:
        Log lines describing each change
    """
    log: list[str] = []
    prioritized = set(prioritized_muscles or ())

    current_volume = volume_by_muscle(current_week)
    progressions = {
        muscle: MuscleProgression(muscle)
        for muscle, volume in current_volume.items()
        if volume < guideline_for(muscle).max_hypertrophy_sets
    }

    _process_soreness(current_week, next_week, progressions, log)
    warned = _process_joint_pain(current_week, next_week, log)
    fatigue_reduced = _process_fatigue(current_week, next_week, log)
    _apply_volume_progression(
        current_week, next_week, current_volume, progressions, prioritized, warned, fatigue_reduced, log
    )
    _apply_weight_progression(current_week, next_week, log)

    added = sum(p.sets_added for p in progressions.values())
    logger.info(f"Progression applied: +{added} sets, {len(log)} changes logged")
    return log


def progress_plan_week(plan: TrainingPlan, week_index: int) -> list[str]:
    """Apply progression from plan week `week_index` (0-based) to the next week.

    Returns an empty log when there is no following week.
    """
    if week_index + 1 >= len(plan.weeks):
        logger.debug(f"No week after index {week_index}, skipping progression")
        return []
    return apply_progression(plan.weeks[week_index], plan.weeks[week_index + 1], plan.prioritized_muscles)
