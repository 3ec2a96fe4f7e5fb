"""Per-muscle weekly volume guidelines and rep ranges.

Weekly set counts are expressed as two ranges per muscle:
- maintenance: enough volume to hold current size and strength
- hypertrophy: productive range for growth

Large muscles (chest, back, quads, hamstrings, glutes) tolerate more weekly
volume and are trained in lower rep ranges than small muscles.
"""

from dataclasses import dataclass

from train.domain.enums import MuscleGroup, MuscleSize, TrainingGoal

LARGE_MUSCLES = frozenset(
    {
        MuscleGroup.CHEST,
        MuscleGroup.BACK,
        MuscleGroup.QUADS,
        MuscleGroup.HAMSTRINGS,
        MuscleGroup.GLUTES,
    }
)


@dataclass(frozen=True)
class MuscleTrainingGuideline:
    """Immutable weekly set guideline for one muscle group.

    Attributes:
        muscle: Muscle group the guideline applies to
        min_maintenance_sets: Lower bound of the maintenance range
        max_maintenance_sets: Upper bound of the maintenance range
        min_hypertrophy_sets: Lower bound of the growth range
        max_hypertrophy_sets: Upper bound of the growth range
        size: Large or small muscle
    """

    muscle: MuscleGroup
    min_maintenance_sets: int
    max_maintenance_sets: int
    min_hypertrophy_sets: int
    max_hypertrophy_sets: int
    size: MuscleSize

    @property
    def maintenance_range(self) -> tuple[int, int]:
        return (self.min_maintenance_sets, self.max_maintenance_sets)

    @property
    def hypertrophy_range(self) -> tuple[int, int]:
        return (self.min_hypertrophy_sets, self.max_hypertrophy_sets)


# (maintenance min, maintenance max, hypertrophy min, hypertrophy max)
_SET_RANGES: dict[MuscleGroup, tuple[int, int, int, int]] = {
    MuscleGroup.CHEST: (6, 8, 10, 20),
    MuscleGroup.BACK: (6, 8, 10, 20),
    MuscleGroup.QUADS: (6, 8, 10, 20),
    MuscleGroup.HAMSTRINGS: (6, 8, 10, 20),
    MuscleGroup.GLUTES: (6, 8, 10, 20),
    MuscleGroup.CALVES: (6, 8, 8, 16),
    MuscleGroup.BICEPS: (4, 6, 8, 14),
    MuscleGroup.TRICEPS: (4, 6, 8, 14),
    MuscleGroup.SHOULDERS: (6, 8, 8, 18),
    MuscleGroup.ABS: (4, 6, 6, 12),
    MuscleGroup.TRAPS: (4, 6, 6, 12),
    MuscleGroup.FOREARMS: (2, 4, 4, 10),
    MuscleGroup.LOWER_BACK: (2, 4, 4, 8),
    MuscleGroup.OBLIQUES: (2, 4, 4, 8),
    MuscleGroup.NECK: (0, 2, 2, 6),
    MuscleGroup.UNKNOWN: (0, 0, 0, 0),
}


def muscle_size(muscle: MuscleGroup) -> MuscleSize:
    return MuscleSize.LARGE if muscle in LARGE_MUSCLES else MuscleSize.SMALL


def guideline_for(muscle: MuscleGroup) -> MuscleTrainingGuideline:
    """Get the weekly set guideline for a muscle group."""
    min_maint, max_maint, min_hyp, max_hyp = _SET_RANGES[muscle]
    return MuscleTrainingGuideline(
        muscle=muscle,
        min_maintenance_sets=min_maint,
        max_maintenance_sets=max_maint,
        min_hypertrophy_sets=min_hyp,
        max_hypertrophy_sets=max_hyp,
        size=muscle_size(muscle),
    )


def rep_range(muscle: MuscleGroup, goal: TrainingGoal) -> tuple[int, int]:
    """Get the target rep range for a muscle under a training goal.

    Args:
        muscle: Muscle group being trained
        goal: Plan training goal

    Returns:
        (min_reps, max_reps) tuple
    """
    is_large = muscle_size(muscle) is MuscleSize.LARGE
    if goal is TrainingGoal.STRENGTH:
        return (3, 6) if is_large else (5, 8)
    return (6, 12) if is_large else (8, 15)
