"""Health source priority management.

The priority list ranks recording sources, most trusted first. Sources seen
in incoming data but missing from the list are appended alphabetically,
so the user's own ordering is never disturbed.
"""

from collections.abc import Iterable, Sequence

from loguru import logger

from train.health.types import ExternalWorkout


def detect_sources(workouts: Iterable[ExternalWorkout]) -> list[str]:
    """Unique source names, sorted."""
    return sorted({w.source_name for w in workouts})


def merge_detected_sources(priority: Sequence[str], detected: Iterable[str]) -> list[str]:
    """Extend a priority list with newly detected sources (alphabetically, at the end)."""
    merged = list(dict.fromkeys(priority))
    new_sources = sorted(set(detected) - set(merged))
    if new_sources:
        logger.info(f"New workout sources detected: {new_sources}")
    return merged + new_sources


def detected_in_priority_order(priority: Sequence[str], workouts: Iterable[ExternalWorkout]) -> tuple[list[str], list[str]]:
    """Merge sources seen in `workouts` into the priority list.

    Returns:
        (updated priority list, detected sources in priority order)
    """
    detected = set(detect_sources(workouts))
    updated = merge_detected_sources(priority, detected)
    return updated, [s for s in updated if s in detected]


def move_source(priority: Sequence[str], source: str, new_index: int) -> list[str]:
    """Move a source to a new position (clamped to the list bounds).

    Raises:
        ValueError: If the source is not in the list
    """
    reordered = list(priority)
    if source not in reordered:
        raise ValueError(f"Source '{source}' is not in the priority list")
    reordered.remove(source)
    index = max(0, min(new_index, len(reordered)))
    reordered.insert(index, source)
    return reordered
