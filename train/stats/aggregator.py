"""Training history statistics for charts.

This module folds completed workouts into:
- Estimated one-rep max (Epley: weight * (1 + reps / 30))
- Weekly sets per muscle group over the last N weeks (weeks start Monday)
- Monthly sets per muscle group over the last N months with data
- Weekly lifted volume over the last N weeks with data
- Current-week set counts per muscle against hypertrophy targets
- Best estimated one-rep max per movement

Only completed workouts with a scheduled date are counted. Primary muscles
get full credit for a set; secondary muscles get half credit.

Properties:
- Deterministic: Same history and reference date produce the same output
- Missing data handling: empty history yields empty or zero-filled series
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

from loguru import logger
from pydantic import BaseModel

from train.config.settings import settings
from train.domain.guidelines import guideline_for
from train.domain.enums import MuscleGroup
from train.domain.models import ExerciseInstance, Movement, Workout

SECONDARY_CREDIT = 0.5


class WeeklyMuscleSets(BaseModel):
    """Sets per muscle for one week (every muscle present, zero when untrained)."""

    week_start: date
    sets: dict[MuscleGroup, float]


class MonthlyMuscleSets(BaseModel):
    """Whole sets per muscle for one calendar month."""

    month_start: date
    sets: dict[MuscleGroup, int]


class WeeklyVolume(BaseModel):
    """Total lifted volume (reps x weight) for one week."""

    week_start: date
    volume: float


class MuscleGroupVolume(BaseModel):
    """Current-week work for one muscle.

    Attributes:
        muscle: Muscle group
        volume: Lifted volume (secondary muscles get half)
        set_count: Sets credited (secondary muscles get half, rounded down)
        optimal_min_sets: Bottom of the weekly hypertrophy range
        optimal_max_sets: Top of the weekly hypertrophy range
        is_within_optimal_range: set_count falls inside the hypertrophy range
    """

    muscle: MuscleGroup
    volume: float
    set_count: int
    optimal_min_sets: int
    optimal_max_sets: int
    is_within_optimal_range: bool


class OneRepMaxEstimate(BaseModel):
    """Best one-rep max estimate for a movement and the set it came from."""

    movement: Movement
    weight: float
    reps: int
    estimated_one_rep_max: float
    date: date


def one_rep_max(weight: float, reps: int) -> float:
    """Estimate one-rep max with the Epley formula.

    Args:
        weight: Load lifted
        reps: Repetitions completed

    Returns:
        weight * (1 + reps / 30), or 0 when reps < 1
    """
    if reps < 1:
        return 0.0
    return weight * (1.0 + reps / 30.0)


def exercise_volume(exercise: ExerciseInstance) -> float:
    return sum(s.volume for s in exercise.sets)


def workout_volume(workout: Workout) -> float:
    return sum(exercise_volume(e) for e in workout.exercises)


def week_start(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())


def month_start(day: date) -> date:
    return day.replace(day=1)


def _completed(workouts: Iterable[Workout]) -> list[Workout]:
    return [w for w in workouts if w.is_complete and w.scheduled_date is not None]


def weekly_muscle_sets(
    workouts: Iterable[Workout],
    weeks: int | None = None,
    today: date | None = None,
) -> list[WeeklyMuscleSets]:
    """Sets per muscle for each of the last `weeks` weeks, oldest first.

    Only fully completed exercises count. Each completed set credits its
    primary muscles 1 and its secondary muscles 0.5.

    Args:
        workouts: Workout history
        weeks: Window length including the current week (default STATS_WEEKLY_WINDOW)
        today: Reference date (default today)

    Returns:
        One entry per week, including weeks with no training
    """
    if weeks is None:
        weeks = settings.stats_weekly_window
    if weeks <= 0:
        return []
    current = week_start(today or date.today())
    starts = [current - timedelta(weeks=offset) for offset in range(weeks - 1, -1, -1)]
    buckets: dict[date, dict[MuscleGroup, float]] = {
        start: {muscle: 0.0 for muscle in MuscleGroup} for start in starts
    }

    for workout in _completed(workouts):
        bucket = buckets.get(week_start(workout.scheduled_date))
        if bucket is None:
            continue
        for exercise in workout.exercises:
            if not exercise.is_complete:
                continue
            completed = float(exercise.completed_set_count)
            for muscle in exercise.movement.primary_muscles:
                bucket[muscle] += completed
            for muscle in exercise.movement.secondary_muscles:
                bucket[muscle] += completed * SECONDARY_CREDIT

    return [WeeklyMuscleSets(week_start=start, sets=buckets[start]) for start in starts]


def monthly_muscle_sets(workouts: Iterable[Workout], months: int | None = None) -> list[MonthlyMuscleSets]:
    """Sets per muscle for the most recent `months` months that have training, oldest first.

    Every set of a completed workout counts. Secondary muscles get
    int(sets * 0.5) per exercise.
    """
    if months is None:
        months = settings.stats_monthly_window
    if months <= 0:
        return []
    by_month: dict[date, dict[MuscleGroup, int]] = defaultdict(lambda: defaultdict(int))

    for workout in _completed(workouts):
        bucket = by_month[month_start(workout.scheduled_date)]
        for exercise in workout.exercises:
            count = len(exercise.sets)
            for muscle in exercise.movement.primary_muscles:
                bucket[muscle] += count
            for muscle in exercise.movement.secondary_muscles:
                bucket[muscle] += int(count * SECONDARY_CREDIT)

    recent = sorted(by_month)[-months:]
    return [
        MonthlyMuscleSets(
            month_start=start,
            sets={muscle: by_month[start].get(muscle, 0) for muscle in MuscleGroup},
        )
        for start in recent
    ]


def weekly_volume(workouts: Iterable[Workout], weeks: int = 12) -> list[WeeklyVolume]:
    """Lifted volume for the most recent `weeks` weeks that have training, oldest first."""
    if weeks <= 0:
        return []
    by_week: dict[date, float] = defaultdict(float)
    for workout in _completed(workouts):
        by_week[week_start(workout.scheduled_date)] += workout_volume(workout)
    recent = sorted(by_week)[-weeks:]
    return [WeeklyVolume(week_start=start, volume=by_week[start]) for start in recent]


def current_week_muscle_volume(workouts: Iterable[Workout], today: date | None = None) -> list[MuscleGroupVolume]:
    """Per-muscle sets and volume for the current week, most sets first."""
    start = week_start(today or date.today())
    end = start + timedelta(days=7)
    volume: dict[MuscleGroup, float] = defaultdict(float)
    sets: dict[MuscleGroup, int] = defaultdict(int)

    for workout in _completed(workouts):
        if not start <= workout.scheduled_date < end:
            continue
        for exercise in workout.exercises:
            lifted = exercise_volume(exercise)
            count = len(exercise.sets)
            for muscle in exercise.movement.primary_muscles:
                volume[muscle] += lifted
                sets[muscle] += count
            for muscle in exercise.movement.secondary_muscles:
                volume[muscle] += lifted * SECONDARY_CREDIT
                sets[muscle] += int(count * SECONDARY_CREDIT)

    result = []
    for muscle in MuscleGroup:
        guideline = guideline_for(muscle)
        result.append(
            MuscleGroupVolume(
                muscle=muscle,
                volume=volume[muscle],
                set_count=sets[muscle],
                optimal_min_sets=guideline.min_hypertrophy_sets,
                optimal_max_sets=guideline.max_hypertrophy_sets,
                is_within_optimal_range=guideline.min_hypertrophy_sets <= sets[muscle] <= guideline.max_hypertrophy_sets,
            )
        )
    result.sort(key=lambda v: (-v.set_count, v.muscle.value))
    return result


def best_one_rep_maxes(workouts: Iterable[Workout]) -> list[OneRepMaxEstimate]:
    """Best estimated one-rep max per movement, highest first.

    Only completed sets with weight > 0 and reps > 0 are considered. Ties
    keep the earliest set.
    """
    best: dict[str, OneRepMaxEstimate] = {}
    for workout in sorted(_completed(workouts), key=lambda w: w.scheduled_date):
        for exercise in workout.exercises:
            for s in exercise.sets:
                if not (s.is_complete and s.weight > 0 and s.completed_reps > 0):
                    continue
                estimate = one_rep_max(s.weight, s.completed_reps)
                current = best.get(exercise.movement.name)
                if current is None or estimate > current.estimated_one_rep_max:
                    best[exercise.movement.name] = OneRepMaxEstimate(
                        movement=exercise.movement,
                        weight=s.weight,
                        reps=s.completed_reps,
                        estimated_one_rep_max=estimate,
                        date=workout.scheduled_date,
                    )

    result = sorted(best.values(), key=lambda e: (-e.estimated_one_rep_max, e.movement.name))
    logger.debug(f"Computed one-rep max estimates for {len(result)} movements")
    return result
