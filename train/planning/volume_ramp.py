"""Volume ramp strategy for multi-week plans.

Growth muscles ramp through four phases, one per quarter of the plan:
60% -> 75% -> 90% -> 100% of their baseline volume. Plans shorter than four
weeks hold a flat 85%. Maintained muscles always train at 100%.

Also provides baseline weekly sets, rep ranges and intensity targets by
goal and experience.
"""

from train.domain.enums import MuscleGoal, MuscleGroup, TrainingExperience, TrainingGoal
from train.domain.guidelines import guideline_for
from train.utils.weights import round_half_up

SHORT_PLAN_MULTIPLIER = 0.85
PHASE_MULTIPLIERS = (0.6, 0.75, 0.9, 1.0)
EMPHASIS_FACTOR = 1.3

_EXPERIENCE_FACTOR: dict[TrainingExperience, float] = {
    TrainingExperience.BEGINNER: 0.7,
    TrainingExperience.INTERMEDIATE: 0.9,
    TrainingExperience.ADVANCED: 1.0,
}

_INTENSITY: dict[TrainingGoal, tuple[float, float, float]] = {
    TrainingGoal.HYPERTROPHY: (0.65, 0.70, 0.75),
    TrainingGoal.STRENGTH: (0.75, 0.80, 0.85),
}


def ramp_multiplier(week: int, total_weeks: int) -> float:
    """Volume multiplier for a 1-based week.

    Args:
        week: Week number (1-based)
        total_weeks: Plan length in weeks

    Returns:
        Fraction of baseline volume for that week
    """
    if total_weeks < 4:
        return SHORT_PLAN_MULTIPLIER
    quarter = max(1, total_weeks // 4)
    phase = min((week - 1) // quarter, len(PHASE_MULTIPLIERS) - 1)
    return PHASE_MULTIPLIERS[max(0, phase)]


def weekly_volume_percentage(muscle_goal: MuscleGoal, week: int, total_weeks: int) -> int:
    """Weekly volume as a percentage of baseline (maintenance is always 100)."""
    if muscle_goal is MuscleGoal.MAINTAIN:
        return 100
    return round_half_up(ramp_multiplier(week, total_weeks) * 100)


def baseline_sets(
    muscle: MuscleGroup,
    goal: TrainingGoal,
    experience: TrainingExperience,
    emphasized: bool = False,
) -> int:
    """Baseline weekly sets before ramping.

    Hypertrophy starts from the bottom of the hypertrophy range; strength from
    the bottom of the maintenance range plus two. Experience scales it down
    (0.7 / 0.9 / 1.0) and emphasis scales it up by 30%.
    """
    guideline = guideline_for(muscle)
    if goal is TrainingGoal.HYPERTROPHY:
        base = float(guideline.min_hypertrophy_sets)
    else:
        base = float(guideline.min_maintenance_sets + 2)

    base *= _EXPERIENCE_FACTOR[experience]
    if emphasized:
        base *= EMPHASIS_FACTOR
    return max(1, round_half_up(base))


def ramped_sets(
    muscle: MuscleGroup,
    goal: TrainingGoal,
    experience: TrainingExperience,
    muscle_goal: MuscleGoal,
    week: int,
    total_weeks: int,
) -> int:
    """Baseline sets for a week after applying the ramp (at least 1)."""
    baseline = baseline_sets(muscle, goal, experience, emphasized=muscle_goal is MuscleGoal.GROW)
    percentage = weekly_volume_percentage(muscle_goal, week, total_weeks)
    return max(1, round_half_up(baseline * percentage / 100))


def rep_range_for(goal: TrainingGoal, experience: TrainingExperience) -> tuple[int, int]:
    if experience is TrainingExperience.BEGINNER:
        return (8, 15) if goal is TrainingGoal.HYPERTROPHY else (5, 12)
    return (5, 30) if goal is TrainingGoal.HYPERTROPHY else (2, 5)


def intensity_for(goal: TrainingGoal, experience: TrainingExperience) -> float:
    """Target load as a fraction of one-rep max."""
    beginner, intermediate, advanced = _INTENSITY[goal]
    return {
        TrainingExperience.BEGINNER: beginner,
        TrainingExperience.INTERMEDIATE: intermediate,
        TrainingExperience.ADVANCED: advanced,
    }[experience]
