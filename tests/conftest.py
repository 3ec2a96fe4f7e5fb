"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

import pytest

from train.config.settings import settings
from train.db.session import get_engine, reset_engine
from train.domain.enums import (
    EquipmentType,
    MuscleGroup,
    SplitStyle,
    TrainingExperience,
    TrainingGoal,
    WorkoutDuration,
)
from train.domain.models import ExerciseInstance, ExerciseSet, Movement, PlanInput, Workout
from train.domain.movement_library import all_movements, get_movement
from train.health.types import ExternalWorkout


@pytest.fixture
def library() -> list[Movement]:
    """Full movement catalog."""
    return all_movements()


@pytest.fixture
def plan_input() -> PlanInput:
    """Three-day full body hypertrophy input for an intermediate lifter."""
    return PlanInput(
        goal=TrainingGoal.HYPERTROPHY,
        days_per_week=3,
        duration=WorkoutDuration.MEDIUM,
        equipment=(EquipmentType.BARBELL, EquipmentType.DUMBBELL, EquipmentType.CABLE),
        split=SplitStyle.FULL_BODY,
        experience=TrainingExperience.INTERMEDIATE,
        prioritized_muscles=(MuscleGroup.CHEST,),
        weeks=4,
    )


@pytest.fixture
def monday() -> date:
    """A fixed Monday used as the reference date in stats tests."""
    return date(2024, 3, 11)


@pytest.fixture
def make_exercise() -> Callable[..., ExerciseInstance]:
    """Factory for logged exercises.

    Usage:
        make_exercise("Barbell Bench Press", [(135, 8), (135, 8)])
        make_exercise("Barbell Curl", [(40, 10)], complete=False)
    """

    def _make(name: str, sets: list[tuple[float, int]], complete: bool = True) -> ExerciseInstance:
        return ExerciseInstance(
            movement=get_movement(name),
            sets=[
                ExerciseSet(weight=weight, target_reps=reps, completed_reps=reps, is_complete=complete)
                for weight, reps in sets
            ],
        )

    return _make


@pytest.fixture
def make_workout() -> Callable[..., Workout]:
    """Factory for workouts on a given date."""

    def _make(
        scheduled_date: date | None,
        exercises: list[ExerciseInstance],
        complete: bool = True,
        name: str = "Full Body Workout",
    ) -> Workout:
        return Workout(name=name, scheduled_date=scheduled_date, exercises=exercises, is_complete=complete)

    return _make


@pytest.fixture
def make_external() -> Callable[..., ExternalWorkout]:
    """Factory for external workouts starting `offset_seconds` after 2024-03-11 07:00 UTC."""
    base = datetime(2024, 3, 11, 7, 0, tzinfo=UTC)

    def _make(
        workout_id: str,
        source: str,
        offset_seconds: float = 0,
        heart_rate: float | None = None,
        energy: float | None = None,
    ) -> ExternalWorkout:
        return ExternalWorkout(
            id=workout_id,
            title="Traditional Strength Training",
            start=base + timedelta(seconds=offset_seconds),
            duration_seconds=3600,
            source_name=source,
            average_heart_rate=heart_rate,
            total_energy_kcal=energy,
        )

    return _make


@pytest.fixture
def temp_database(monkeypatch):
    """Point storage at a fresh in-memory SQLite database for one test.

    Usage:
        def test_something(temp_database):
            save_plan(plan)
    """
    monkeypatch.setattr(settings, "database_url", "sqlite:///:memory:")
    reset_engine()
    try:
        yield get_engine()
    finally:
        reset_engine()
