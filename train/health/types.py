"""External workout and reconciliation result models.

This module defines the data structures for:
- Workouts recorded by third-party sources (watches, apps)
- Duplicate reconciliation results (kept records, discarded duplicates, groups)
- Sleep samples reported by health sources
"""

from datetime import datetime, timedelta

from pydantic import AwareDatetime, BaseModel, Field

from train.domain.enums import SleepStage


class ExternalWorkout(BaseModel):
    """Workout recorded by an external source.

    Attributes:
        id: Source-assigned identifier
        title: Activity name (e.g., "Traditional Strength Training")
        start: Start time (timezone-aware)
        duration_seconds: Elapsed duration
        source_name: Recording source (e.g., "Apple Watch", "Strava")
        average_heart_rate: Average heart rate in bpm (if recorded)
        total_energy_kcal: Active energy burned in kcal (if recorded)
    """

    id: str
    title: str
    start: AwareDatetime
    duration_seconds: float = Field(default=0.0, ge=0)
    source_name: str
    average_heart_rate: float | None = None
    total_energy_kcal: float | None = None

    @property
    def end(self) -> datetime:
        return self.start + timedelta(seconds=self.duration_seconds)

    @property
    def has_data(self) -> bool:
        """True when heart rate or calorie data is present."""
        return self.average_heart_rate is not None or self.total_energy_kcal is not None


class DiscardedDuplicate(BaseModel):
    """A record dropped in favor of a better copy of the same workout."""

    workout: ExternalWorkout
    kept_id: str


class ReconciliationResult(BaseModel):
    """Outcome of duplicate reconciliation.

    Attributes:
        kept: One record per workout, newest first
        duplicates: Records discarded, with the id of the record kept instead
        groups: Every cluster of records judged to be the same workout, in start order
    """

    kept: list[ExternalWorkout] = Field(default_factory=list)
    duplicates: list[DiscardedDuplicate] = Field(default_factory=list)
    groups: list[list[ExternalWorkout]] = Field(default_factory=list)


class SleepSample(BaseModel):
    """One sleep interval reported by a health source."""

    source_name: str
    start: datetime
    end: datetime
    stage: SleepStage

    @property
    def duration_seconds(self) -> float:
        return max(0.0, (self.end - self.start).total_seconds())
