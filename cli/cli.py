"""CLI for the training engine.

Developer CLI to generate plans, reconcile exported health workouts and
inspect training statistics locally.
"""

import json
from datetime import date
from pathlib import Path

import typer
from loguru import logger
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from train.config.settings import settings
from train.core.logger import setup_logger
from train.db.repository import get_source_priority, save_plan, set_source_priority
from train.domain.enums import (
    EquipmentType,
    MuscleGroup,
    SplitStyle,
    TrainingExperience,
    TrainingGoal,
    WorkoutDuration,
)
from train.domain.models import PlanInput, TrainingPlan, Workout
from train.domain.movement_library import movements_for
from train.errors import TrainError
from train.health.reconciler import reconcile_duplicates
from train.health.sources import detected_in_priority_order
from train.health.types import ExternalWorkout
from train.planning.generator import generate_plan
from train.stats.aggregator import best_one_rep_maxes, one_rep_max, weekly_muscle_sets, weekly_volume

console = Console()

app = typer.Typer(
    name="train",
    help="Training engine CLI - plans, reconciliation and stats",
    add_completion=False,
)


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)


def _fail(error: Exception) -> None:
    console.print(f"[red]Error:[/red] {error}", style="bold red")
    raise typer.Exit(1) from error


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        _fail(e)


def _print_plan(plan: TrainingPlan) -> None:
    console.print(
        Panel(
            f"{plan.notes}\n{plan.start_date} -> {plan.end_date} ({plan.length_in_weeks} weeks)",
            title=f"[bold cyan]{plan.name}[/bold cyan]",
        )
    )
    for day, workout in enumerate(plan.weeks[0], start=1):
        table = Table(title=f"Day {day}: {workout.name} ({workout.scheduled_date})")
        table.add_column("Movement", style="cyan")
        table.add_column("Sets", justify="right")
        table.add_column("Reps", justify="right")
        for exercise in workout.exercises:
            reps = exercise.sets[0].target_reps if exercise.sets else 0
            table.add_row(exercise.movement.name, str(len(exercise.sets)), str(reps))
        console.print(table)


@app.command("generate-plan")
def generate_plan_cmd(
    goal: TrainingGoal = typer.Option(TrainingGoal.HYPERTROPHY, "--goal", help="Training goal"),
    days: int = typer.Option(3, "--days", "-d", help="Training days per week (1-7)"),
    duration: WorkoutDuration = typer.Option(WorkoutDuration.MEDIUM, "--duration", help="Workout length"),
    split: SplitStyle = typer.Option(SplitStyle.FULL_BODY, "--split", help="Split style"),
    experience: TrainingExperience = typer.Option(
        TrainingExperience.INTERMEDIATE, "--experience", help="Training experience"
    ),
    equipment: list[EquipmentType] = typer.Option(
        [EquipmentType.BARBELL, EquipmentType.DUMBBELL], "--equipment", "-e", help="Available equipment (repeatable)"
    ),
    prioritize: list[MuscleGroup] = typer.Option([], "--prioritize", "-p", help="Muscles to grow (repeatable)"),
    weeks: int = typer.Option(settings.default_plan_weeks, "--weeks", "-w", help="Plan length in weeks"),
    start: str | None = typer.Option(None, "--start", help="First workout date (YYYY-MM-DD, default today)"),
    save: bool = typer.Option(False, "--save", help="Store the plan in the database"),
    as_json: bool = typer.Option(False, "--json", help="Print the full plan as JSON"),
) -> None:
    """Generate a multi-week training plan.

    Examples:
        python cli/cli.py generate-plan --days 4 --split upper_lower -e barbell -e dumbbell -p chest
    """
    try:
        start_date = date.fromisoformat(start) if start else date.today()
        plan_input = PlanInput(
            goal=goal,
            days_per_week=days,
            duration=duration,
            equipment=tuple(equipment),
            split=split,
            experience=experience,
            prioritized_muscles=tuple(prioritize),
            weeks=weeks,
        )
        plan = generate_plan(plan_input, start_date)
    except (TrainError, ValueError) as e:
        _fail(e)

    if as_json:
        console.print_json(plan.model_dump_json())
    else:
        _print_plan(plan)

    if save:
        try:
            plan_id = save_plan(plan)
        except Exception as e:
            logger.exception("Saving plan failed")
            _fail(e)
        console.print(f"[green]Saved plan {plan_id}[/green]")


@app.command()
def reconcile(
    path: Path = typer.Argument(..., help="JSON file with a list of external workouts"),
    tolerance: float | None = typer.Option(None, "--tolerance", "-t", help="Duplicate window in seconds"),
    priority: str | None = typer.Option(
        None, "--priority", help="Comma-separated sources, most trusted first (overrides the saved order)"
    ),
) -> None:
    """Collapse duplicate workouts recorded by several sources.

    Without --priority the saved source order is used, and sources seen for
    the first time are appended to it and saved.
    """
    raw = _read_json(path)
    try:
        workouts = TypeAdapter(list[ExternalWorkout]).validate_python(raw)
    except ValidationError as e:
        _fail(e)

    if priority:
        source_priority = [s.strip() for s in priority.split(",") if s.strip()]
        _, detected = detected_in_priority_order(source_priority, workouts)
    else:
        try:
            stored = get_source_priority()
            source_priority, detected = detected_in_priority_order(stored, workouts)
            if source_priority != stored:
                set_source_priority(source_priority)
        except Exception as e:
            logger.exception("Reading saved source priority failed")
            _fail(e)

    try:
        result = reconcile_duplicates(workouts, source_priority, tolerance)
    except TrainError as e:
        _fail(e)

    table = Table(title=f"Kept {len(result.kept)} of {len(workouts)} workouts")
    table.add_column("Start", style="cyan")
    table.add_column("Title")
    table.add_column("Source", style="magenta")
    table.add_column("Duplicates", justify="right")
    dropped = {}
    for duplicate in result.duplicates:
        dropped[duplicate.kept_id] = dropped.get(duplicate.kept_id, 0) + 1
    for workout in result.kept:
        table.add_row(workout.start.isoformat(), workout.title, workout.source_name, str(dropped.get(workout.id, 0)))
    console.print(table)

    console.print(f"Sources by priority: [magenta]{', '.join(detected)}[/magenta]")


@app.command("one-rep-max")
def one_rep_max_cmd(
    weight: float = typer.Argument(..., help="Weight lifted"),
    reps: int = typer.Argument(..., help="Repetitions completed"),
) -> None:
    """Estimate one-rep max (Epley)."""
    console.print(f"Estimated 1RM: [bold green]{one_rep_max(weight, reps):.1f}[/bold green]")


@app.command()
def stats(
    path: Path = typer.Argument(..., help="JSON file with a list of logged workouts"),
    weeks: int = typer.Option(settings.stats_weekly_window, "--weeks", help="Weekly window"),
    today: str | None = typer.Option(None, "--today", help="Reference date (YYYY-MM-DD)"),
) -> None:
    """Show one-rep max estimates, weekly volume and weekly sets per muscle."""
    raw = _read_json(path)
    try:
        workouts = TypeAdapter(list[Workout]).validate_python(raw)
        reference = date.fromisoformat(today) if today else date.today()
    except (ValidationError, ValueError) as e:
        _fail(e)

    maxes = Table(title="Best estimated 1RM")
    maxes.add_column("Movement", style="cyan")
    maxes.add_column("Set", justify="right")
    maxes.add_column("1RM", justify="right", style="green")
    maxes.add_column("Date")
    for record in best_one_rep_maxes(workouts):
        maxes.add_row(
            record.movement.name,
            f"{record.weight:g} x {record.reps}",
            f"{record.estimated_one_rep_max:.1f}",
            record.date.isoformat(),
        )
    console.print(maxes)

    volume = Table(title="Weekly volume")
    volume.add_column("Week of", style="cyan")
    volume.add_column("Volume", justify="right")
    for point in weekly_volume(workouts):
        volume.add_row(point.week_start.isoformat(), f"{point.volume:.0f}")
    console.print(volume)

    sets = Table(title=f"Sets per muscle, last {weeks} weeks")
    sets.add_column("Muscle", style="cyan")
    series = weekly_muscle_sets(workouts, weeks, reference)
    for entry in series:
        sets.add_column(entry.week_start.strftime("%m-%d"), justify="right")
    for muscle in MuscleGroup.trainable():
        sets.add_row(muscle.display_name, *(f"{entry.sets[muscle]:g}" for entry in series))
    console.print(sets)


@app.command()
def movements(
    muscle: MuscleGroup | None = typer.Option(None, "--muscle", "-m", help="Only movements training this muscle"),
    equipment: EquipmentType | None = typer.Option(None, "--equipment", "-e", help="Only movements using this equipment"),
) -> None:
    """List catalog movements."""
    try:
        found = movements_for(equipment=equipment, muscle=muscle)
    except TrainError as e:
        _fail(e)

    table = Table(title=f"{len(found)} movements")
    table.add_column("Name", style="cyan")
    table.add_column("Primary")
    table.add_column("Secondary", style="dim")
    table.add_column("Equipment", style="magenta")
    table.add_column("Compound")
    for movement in found:
        table.add_row(
            movement.name,
            ", ".join(m.display_name for m in movement.primary_muscles),
            ", ".join(m.display_name for m in movement.secondary_muscles),
            movement.equipment.value,
            "yes" if movement.is_compound else "no",
        )
    console.print(table)


if __name__ == "__main__":
    app()
