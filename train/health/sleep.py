"""Sleep and vitals aggregation.

Several sources can report the same night. One source is picked:
1. Sources with detailed stages (core/deep/rem), the longest total first
2. Sources with plain "asleep" samples
3. Sources with "in bed" samples only

The chosen source's intervals of its best category are merged where they
overlap, then summed.
"""

from collections import defaultdict
from collections.abc import Iterable

from loguru import logger

from train.domain.enums import SleepStage
from train.health.types import SleepSample


def _stage_seconds(samples: list[SleepSample]) -> float:
    return sum(s.duration_seconds for s in samples if s.stage.is_stage)


def _source_rank(samples: list[SleepSample]) -> tuple[int, float]:
    stages = {s.stage for s in samples}
    if any(stage.is_stage for stage in stages):
        return (0, -_stage_seconds(samples))
    if SleepStage.ASLEEP in stages:
        return (1, 0.0)
    if SleepStage.IN_BED in stages:
        return (2, 0.0)
    return (3, 0.0)


def best_sleep_source(samples: Iterable[SleepSample]) -> str | None:
    """Pick the most informative source (None when there are no samples)."""
    by_source: dict[str, list[SleepSample]] = defaultdict(list)
    for sample in samples:
        by_source[sample.source_name].append(sample)
    if not by_source:
        return None
    return min(by_source, key=lambda name: (_source_rank(by_source[name]), name))


def _best_category(samples: list[SleepSample]) -> list[SleepSample]:
    stage_samples = [s for s in samples if s.stage.is_stage]
    if stage_samples:
        return stage_samples
    asleep = [s for s in samples if s.stage is SleepStage.ASLEEP]
    if asleep:
        return asleep
    return [s for s in samples if s.stage is SleepStage.IN_BED]


def total_sleep_hours(samples: Iterable[SleepSample]) -> float | None:
    """Hours slept according to the best source, overlaps counted once.

    Returns:
        Hours, or None when no source reported sleep
    """
    samples = list(samples)
    source = best_sleep_source(samples)
    if source is None:
        return None

    chosen = sorted(_best_category([s for s in samples if s.source_name == source]), key=lambda s: s.start)
    if not chosen:
        return None

    merged: list[list] = []
    for sample in chosen:
        if merged and sample.start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], sample.end)
        else:
            merged.append([sample.start, sample.end])

    total_seconds = sum((end - start).total_seconds() for start, end in merged)
    logger.debug(f"Sleep from '{source}': {len(chosen)} samples merged into {len(merged)} intervals")
    return total_seconds / 3600.0


def average(values: Iterable[float]) -> float | None:
    """Mean of vitals readings (HRV, resting heart rate); None when empty."""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)
