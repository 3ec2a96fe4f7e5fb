"""Duplicate external workout reconciliation.

When several sources record the same session (a watch and a phone app, for
example), each record shows up separately. This module collapses them:

Algorithm:
1. Sort records by start time (id breaks ties)
2. Walk the sorted list; a record starting within the tolerance of the
   previous record joins its group, otherwise it opens a new group
3. Keep one record per group, ranked by:
   a. source priority (earlier in the list wins; unknown sources rank last)
   b. has heart rate or calorie data
   c. earliest start
   d. id
4. Return kept records newest first

Grouping is transitive, so consecutive groups start more than the tolerance
apart and no two kept records fall inside one tolerance window.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, tzinfo

from loguru import logger

from train.config.settings import settings
from train.errors import ReconciliationError
from train.health.types import DiscardedDuplicate, ExternalWorkout, ReconciliationResult


def source_rank(source_name: str, source_priority: Sequence[str]) -> int:
    """Position of a source in the priority list; unknown sources rank after all known ones."""
    try:
        return list(source_priority).index(source_name)
    except ValueError:
        return len(source_priority)


def _best_record(group: list[ExternalWorkout], source_priority: Sequence[str]) -> ExternalWorkout:
    return min(
        group,
        key=lambda w: (source_rank(w.source_name, source_priority), not w.has_data, w.start, w.id),
    )


def group_duplicates(workouts: Iterable[ExternalWorkout], tolerance_seconds: float) -> list[list[ExternalWorkout]]:
    """Cluster records whose start times chain together within the tolerance.

    Raises:
        ReconciliationError: If tolerance is negative
    """
    if tolerance_seconds < 0:
        raise ReconciliationError(f"Tolerance must be >= 0 seconds, got {tolerance_seconds}")

    ordered = sorted(workouts, key=lambda w: (w.start, w.id))
    groups: list[list[ExternalWorkout]] = []
    for workout in ordered:
        if groups and (workout.start - groups[-1][-1].start).total_seconds() <= tolerance_seconds:
            groups[-1].append(workout)
        else:
            groups.append([workout])
    return groups


def reconcile_duplicates(
    workouts: Iterable[ExternalWorkout],
    source_priority: Sequence[str] | None = None,
    tolerance_seconds: float | None = None,
) -> ReconciliationResult:
    """Collapse duplicate external workouts to one record per session.

    Args:
        workouts: Records from any number of sources
        source_priority: Source names, most trusted first (defaults to DEFAULT_SOURCE_PRIORITY)
        tolerance_seconds: Start-time window for duplicates (defaults to DUPLICATE_TOLERANCE_SECONDS)

    Returns:
        ReconciliationResult with kept records newest first

    Raises:
        ReconciliationError: If tolerance is negative
    """
    priority = list(source_priority) if source_priority is not None else settings.source_priority
    tolerance = settings.duplicate_tolerance_seconds if tolerance_seconds is None else tolerance_seconds

    groups = group_duplicates(workouts, tolerance)
    result = ReconciliationResult(groups=groups)

    for group in groups:
        best = _best_record(group, priority)
        result.kept.append(best)
        for workout in group:
            if workout is best:
                continue
            result.duplicates.append(DiscardedDuplicate(workout=workout, kept_id=best.id))
            logger.debug(
                f"Duplicate {workout.id} ({workout.source_name}) replaced by {best.id} ({best.source_name})"
            )

    unknown = sorted({w.source_name for g in groups for w in g} - set(priority))
    if unknown:
        logger.warning(f"Sources missing from priority list, ranked last: {unknown}")

    result.kept.sort(key=lambda w: (w.start, w.id), reverse=True)
    logger.info(
        f"Reconciled {sum(len(g) for g in groups)} external workouts into {len(result.kept)} "
        f"({len(result.duplicates)} duplicates removed)"
    )
    return result


def filter_by_day(workouts: Iterable[ExternalWorkout], day: date, tz: tzinfo | None = None) -> list[ExternalWorkout]:
    """Records whose start falls on a calendar day (in `tz`, or the record's own zone)."""
    return [w for w in workouts if (w.start.astimezone(tz) if tz else w.start).date() == day]


def filter_by_range(workouts: Iterable[ExternalWorkout], start: datetime, end: datetime) -> list[ExternalWorkout]:
    """Records starting in [start, end], both ends included."""
    return [w for w in workouts if start <= w.start <= end]
