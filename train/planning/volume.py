"""Set volume allocation for plan generation.

Weekly targets per muscle:
- prioritized muscles start at the bottom of their hypertrophy range,
  scaled by experience (0.7 / 0.85 / 1.0)
- other muscles sit at the top of their maintenance range
- both get a 10% bump, at least 1 set, capped at 20 (small) or 30 (large)

Per-workout targets split the weekly target across the days a muscle is
trained. Sets for a single movement are derived from the remaining need of
every muscle it touches, then credited back 1:1 to primaries and
ceil(sets / 2) to secondaries.
"""

import math
from dataclasses import dataclass

from loguru import logger

from train.domain.enums import MuscleGroup, MuscleSize, TrainingExperience, TrainingGoal
from train.domain.guidelines import guideline_for
from train.domain.models import Movement

MAX_SETS_PER_MOVEMENT = 5
WEEKLY_PROGRESSION_FACTOR = 1.1

_PRIORITY_EXPERIENCE_FACTOR: dict[TrainingExperience, float] = {
    TrainingExperience.BEGINNER: 0.7,
    TrainingExperience.INTERMEDIATE: 0.85,
    TrainingExperience.ADVANCED: 1.0,
}

_WEEKLY_CAP: dict[MuscleSize, int] = {
    MuscleSize.SMALL: 20,
    MuscleSize.LARGE: 30,
}


@dataclass
class MuscleTarget:
    """Running set tally for one muscle inside a workout being built.

    Attributes:
        target: Sets wanted in this workout
        current: Sets credited so far
    """

    target: int
    current: int = 0

    @property
    def remaining(self) -> int:
        return max(0, self.target - self.current)


def weekly_volume_target(
    muscle: MuscleGroup,
    is_prioritized: bool,
    experience: TrainingExperience,
) -> int:
    """Calculate the weekly set target for a muscle.

    Args:
        muscle: Muscle group
        is_prioritized: True when the user wants the muscle to grow
        experience: Training experience

    Returns:
        Weekly sets, between 1 and the size cap
    """
    guideline = guideline_for(muscle)
    if is_prioritized:
        base = guideline.min_hypertrophy_sets
        factor = _PRIORITY_EXPERIENCE_FACTOR[experience]
    else:
        base = guideline.max_maintenance_sets
        factor = 1.0

    target = max(1, int(base * factor * WEEKLY_PROGRESSION_FACTOR))
    return min(target, _WEEKLY_CAP[guideline.size])


def per_workout_target(weekly_target: int, frequency: int) -> int:
    return math.ceil(weekly_target / max(1, frequency))


def init_muscle_target(
    muscle: MuscleGroup,
    prioritized: set[MuscleGroup] | frozenset[MuscleGroup],
    experience: TrainingExperience,
    frequency: dict[MuscleGroup, int],
) -> MuscleTarget:
    weekly = weekly_volume_target(muscle, muscle in prioritized, experience)
    return MuscleTarget(target=per_workout_target(weekly, frequency.get(muscle, 1)))


def calculate_sets_for_movement(
    movement: Movement,
    targets: dict[MuscleGroup, MuscleTarget],
    goal: TrainingGoal,
    experience: TrainingExperience,
    prioritized: set[MuscleGroup] | frozenset[MuscleGroup],
    frequency: dict[MuscleGroup, int],
) -> int:
    """Allocate sets to a movement and credit them to the muscles it trains.

    Algorithm:
    1. Initialize a target for any touched muscle that has none yet
    2. Need per muscle = max(0, target - current); all zero -> 0 sets
    3. Average primary need >= 3 -> min(5, avg); else min(5, max(2, avg of all needs))
    4. Hypertrophy compounds cap at 4
    5. Beginners cap at 3 (compound) / 2 (isolation); advanced get +1 (max 5)
    6. Credit primaries +sets, secondaries (not also primary) +ceil(sets / 2)

    Args:
        movement: Movement being added
        targets: Per-muscle tallies for the workout (updated in place)
        goal: Plan training goal
        experience: Training experience
        prioritized: Muscles the user wants to grow
        frequency: Days per week each muscle is trained

    Returns:
        Number of sets to assign (0 when no touched muscle needs volume)
    """
    touched = list(dict.fromkeys(movement.primary_muscles + movement.secondary_muscles))
    needs: dict[MuscleGroup, int] = {}
    for muscle in touched:
        if muscle not in targets:
            targets[muscle] = init_muscle_target(muscle, prioritized, experience, frequency)
        needs[muscle] = targets[muscle].remaining

    if not needs or all(n == 0 for n in needs.values()):
        return 0

    primary_needs = [needs[m] for m in movement.primary_muscles if m in needs]
    avg_primary = sum(primary_needs) // len(primary_needs) if primary_needs else 0

    if avg_primary >= 3:
        sets = min(MAX_SETS_PER_MOVEMENT, avg_primary)
    else:
        avg_all = sum(needs.values()) // max(1, len(needs))
        sets = min(MAX_SETS_PER_MOVEMENT, max(2, avg_all))

    if movement.is_compound and goal is TrainingGoal.HYPERTROPHY:
        sets = min(sets, 4)

    if experience is TrainingExperience.BEGINNER:
        sets = min(sets, 3 if movement.is_compound else 2)
    elif experience is TrainingExperience.ADVANCED:
        sets = min(sets + 1, MAX_SETS_PER_MOVEMENT)

    for muscle in movement.primary_muscles:
        targets[muscle].current += sets
    for muscle in movement.secondary_muscles:
        if muscle in movement.primary_muscles:
            continue
        targets[muscle].current += math.ceil(sets / 2)

    logger.debug(f"Allocated {sets} sets to {movement.name}")
    return sets
