"""Split layout helpers.

Maps a (1-based) training day to its day type for each split style, and a
day type to the muscles it targets:
- full body: every day trains everything
- upper/lower: odd days upper, even days lower
- push/pull/legs: day % 3 == 1 push, == 2 pull, == 0 legs
"""

from train.domain.enums import DayType, MuscleGroup, SplitStyle

_DAY_MUSCLES: dict[DayType, tuple[MuscleGroup, ...]] = {
    DayType.UPPER: (
        MuscleGroup.CHEST,
        MuscleGroup.BACK,
        MuscleGroup.SHOULDERS,
        MuscleGroup.BICEPS,
        MuscleGroup.TRICEPS,
        MuscleGroup.FOREARMS,
        MuscleGroup.TRAPS,
    ),
    DayType.LOWER: (
        MuscleGroup.QUADS,
        MuscleGroup.HAMSTRINGS,
        MuscleGroup.GLUTES,
        MuscleGroup.CALVES,
        MuscleGroup.ABS,
        MuscleGroup.OBLIQUES,
        MuscleGroup.LOWER_BACK,
    ),
    DayType.PUSH: (
        MuscleGroup.CHEST,
        MuscleGroup.SHOULDERS,
        MuscleGroup.TRICEPS,
    ),
    DayType.PULL: (
        MuscleGroup.BACK,
        MuscleGroup.BICEPS,
        MuscleGroup.FOREARMS,
        MuscleGroup.TRAPS,
    ),
    DayType.LEGS: (
        MuscleGroup.QUADS,
        MuscleGroup.HAMSTRINGS,
        MuscleGroup.GLUTES,
        MuscleGroup.CALVES,
        MuscleGroup.LOWER_BACK,
    ),
    DayType.FULL_BODY: tuple(MuscleGroup.trainable()),
}


def day_type_for(day: int, split: SplitStyle) -> DayType:
    """Get the day type for a 1-based training day."""
    if split is SplitStyle.FULL_BODY:
        return DayType.FULL_BODY
    if split is SplitStyle.UPPER_LOWER:
        return DayType.UPPER if day % 2 == 1 else DayType.LOWER
    remainder = day % 3
    if remainder == 1:
        return DayType.PUSH
    if remainder == 2:
        return DayType.PULL
    return DayType.LEGS


def muscles_for_day(day_type: DayType) -> tuple[MuscleGroup, ...]:
    return _DAY_MUSCLES[day_type]


def workout_description(day_type: DayType) -> str:
    """Short description naming the first three targeted muscles."""
    names = [m.display_name for m in muscles_for_day(day_type)[:3]]
    return "Targets: " + ", ".join(names)


def training_frequency(split: SplitStyle, days_per_week: int) -> dict[MuscleGroup, int]:
    """Count how many days per week each muscle is trained.

    Muscles never trained by the split are absent from the result.
    """
    frequency: dict[MuscleGroup, int] = {}
    for day in range(1, days_per_week + 1):
        for muscle in muscles_for_day(day_type_for(day, split)):
            frequency[muscle] = frequency.get(muscle, 0) + 1
    return frequency
