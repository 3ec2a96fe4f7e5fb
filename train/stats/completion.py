"""End-of-plan summary statistics."""

from loguru import logger
from pydantic import BaseModel

from train.domain.models import Movement, TrainingPlan, Workout
from train.stats.aggregator import workout_volume


class MovementImprovement(BaseModel):
    """Change in top working weight for a movement across a plan."""

    movement: Movement
    starting_weight: float
    ending_weight: float
    improvement: float


class PlanCompletionStats(BaseModel):
    """Summary shown when a plan is finished.

    Attributes:
        completed_workouts: Number of completed workouts
        total_pounds_lifted: Sum of completed reps x weight over completed workouts
        biggest_improvement: Movement whose heaviest set grew the most, if any grew
    """

    completed_workouts: int
    total_pounds_lifted: float
    biggest_improvement: MovementImprovement | None = None


def _heaviest_completed_set(workout: Workout, movement_name: str) -> float:
    return max(
        (
            s.weight
            for e in workout.exercises
            if e.movement.name == movement_name
            for s in e.sets
            if s.is_complete
        ),
        default=0.0,
    )


def biggest_improvement(workouts: list[Workout]) -> MovementImprovement | None:
    """Movement with the largest gain between its first and last heaviest set.

    Only sessions where the movement had a completed set heavier than 0 count.
    Returns None when nothing improved.
    """
    ordered = sorted(
        (w for w in workouts if w.is_complete and w.scheduled_date is not None),
        key=lambda w: w.scheduled_date,
    )
    history: dict[str, tuple[Movement, list[float]]] = {}
    for workout in ordered:
        for exercise in workout.exercises:
            name = exercise.movement.name
            heaviest = _heaviest_completed_set(workout, name)
            if heaviest <= 0:
                continue
            _, weights = history.setdefault(name, (exercise.movement, []))
            weights.append(heaviest)

    best: MovementImprovement | None = None
    for name in sorted(history):
        movement, weights = history[name]
        delta = weights[-1] - weights[0]
        if delta > 0 and (best is None or delta > best.improvement):
            best = MovementImprovement(
                movement=movement,
                starting_weight=weights[0],
                ending_weight=weights[-1],
                improvement=delta,
            )
    return best


def plan_completion_stats(plan: TrainingPlan) -> PlanCompletionStats:
    completed = [w for w in plan.workouts if w.is_complete]
    stats = PlanCompletionStats(
        completed_workouts=len(completed),
        total_pounds_lifted=sum(workout_volume(w) for w in completed),
        biggest_improvement=biggest_improvement(completed),
    )
    logger.info(
        f"Plan '{plan.name}' completion: {stats.completed_workouts} workouts, "
        f"{stats.total_pounds_lifted:.0f} lb lifted"
    )
    return stats
