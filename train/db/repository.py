"""Persistence for plans, workout history and user preferences.

Plans and workouts are stored as JSON payloads produced by their pydantic
models, with a few metadata columns for listing and date filtering.
"""

from __future__ import annotations

from datetime import date

from loguru import logger
from pydantic import BaseModel
from sqlalchemy import select

from train.config.settings import settings
from train.db.models import CompletedWorkoutRecord, TrainingPlanRecord, UserPreference
from train.db.session import get_session
from train.domain.models import TrainingPlan, Workout
from train.errors import PlanNotFoundError

SOURCE_PRIORITY_KEY = "source_priority"


class PlanSummary(BaseModel):
    id: str
    name: str
    start_date: date
    end_date: date | None
    total_weeks: int


# -----------------------------
# Plans
# -----------------------------
def save_plan(plan: TrainingPlan) -> str:
    """Insert or replace a plan. Returns the plan id."""
    payload = plan.model_dump(mode="json")
    with get_session() as session:
        record = session.get(TrainingPlanRecord, plan.id)
        if record is None:
            record = TrainingPlanRecord(id=plan.id)
            session.add(record)
        record.name = plan.name
        record.training_goal = plan.training_goal.value if plan.training_goal else None
        record.start_date = plan.start_date
        record.end_date = plan.end_date
        record.total_weeks = plan.length_in_weeks
        record.plan_data = payload
    logger.info(f"Saved plan {plan.id} ('{plan.name}')")
    return plan.id


def load_plan(plan_id: str) -> TrainingPlan:
    """Load a stored plan.

    Raises:
        PlanNotFoundError: If no plan has this id
    """
    with get_session() as session:
        record = session.get(TrainingPlanRecord, plan_id)
        payload = record.plan_data if record is not None else None
    if payload is None:
        raise PlanNotFoundError(f"No stored plan with id {plan_id}")
    return TrainingPlan.model_validate(payload)


def list_plans() -> list[PlanSummary]:
    """Stored plans, most recent start date first."""
    with get_session() as session:
        records = session.scalars(
            select(TrainingPlanRecord).order_by(TrainingPlanRecord.start_date.desc(), TrainingPlanRecord.name)
        ).all()
        return [
            PlanSummary(
                id=r.id,
                name=r.name,
                start_date=r.start_date,
                end_date=r.end_date,
                total_weeks=r.total_weeks,
            )
            for r in records
        ]


def delete_plan(plan_id: str) -> None:
    """Delete a stored plan.

    Raises:
        PlanNotFoundError: If no plan has this id
    """
    with get_session() as session:
        record = session.get(TrainingPlanRecord, plan_id)
        found = record is not None
        if found:
            session.delete(record)
    if not found:
        raise PlanNotFoundError(f"No stored plan with id {plan_id}")
    logger.info(f"Deleted plan {plan_id}")


# -----------------------------
# Workout history
# -----------------------------
def save_completed_workout(workout: Workout, plan_id: str | None = None) -> None:
    with get_session() as session:
        record = session.get(CompletedWorkoutRecord, workout.id)
        if record is None:
            record = CompletedWorkoutRecord(id=workout.id)
            session.add(record)
        record.plan_id = plan_id
        record.name = workout.name
        record.scheduled_date = workout.scheduled_date
        record.is_complete = workout.is_complete
        record.workout_data = workout.model_dump(mode="json")
    logger.debug(f"Saved workout {workout.id} ({workout.name})")


def list_completed_workouts(since: date | None = None) -> list[Workout]:
    """Completed workouts, oldest first, optionally only those on or after `since`."""
    query = select(CompletedWorkoutRecord).where(CompletedWorkoutRecord.is_complete.is_(True))
    if since is not None:
        query = query.where(CompletedWorkoutRecord.scheduled_date >= since)
    query = query.order_by(CompletedWorkoutRecord.scheduled_date, CompletedWorkoutRecord.id)
    with get_session() as session:
        return [Workout.model_validate(r.workout_data) for r in session.scalars(query).all()]


# -----------------------------
# Preferences
# -----------------------------
def get_source_priority() -> list[str]:
    """Stored source priority, or DEFAULT_SOURCE_PRIORITY when none is stored."""
    with get_session() as session:
        record = session.get(UserPreference, SOURCE_PRIORITY_KEY)
        if record is None or not isinstance(record.value, list):
            return settings.source_priority
        return [str(v) for v in record.value]


def set_source_priority(priority: list[str]) -> None:
    with get_session() as session:
        record = session.get(UserPreference, SOURCE_PRIORITY_KEY)
        if record is None:
            session.add(UserPreference(key=SOURCE_PRIORITY_KEY, value=list(priority)))
        else:
            record.value = list(priority)
    logger.info(f"Source priority set to {priority}")
