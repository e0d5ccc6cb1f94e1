"""Workout logging commands."""

from datetime import date

import click

from ..exceptions import FitQuestError
from ..models.workout import Workout, WorkoutExercise
from ..services.workouts import WorkoutService
from .base import (
    async_command,
    character_option,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_database,
)


def parse_exercise_spec(spec: str) -> WorkoutExercise:
    """Parse ID[:SETS[:REPS[:WEIGHT[:DISTANCE]]]]."""
    parts = spec.split(":")
    if len(parts) > 5 or not parts[0]:
        raise click.BadParameter(f"Invalid exercise '{spec}'", param_hint="--exercise")
    try:
        return WorkoutExercise(
            exercise_id=parts[0],
            sets=int(parts[1]) if len(parts) > 1 and parts[1] else 0,
            reps=int(parts[2]) if len(parts) > 2 and parts[2] else 0,
            weight=float(parts[3]) if len(parts) > 3 and parts[3] else 0.0,
            distance=float(parts[4]) if len(parts) > 4 and parts[4] else 0.0,
        )
    except ValueError as e:
        raise click.BadParameter(f"Invalid exercise '{spec}': {e}", param_hint="--exercise") from e


@click.group()
@click.pass_context
def workout(ctx):
    """Log workouts and view history."""
    ensure_initialized(ctx)


@workout.command()
@click.option("--name", "-n", required=True, help="Workout name")
@click.option("--duration", "-d", type=int, required=True, help="Duration in minutes")
@click.option(
    "--exercise",
    "-e",
    "exercises",
    multiple=True,
    required=True,
    help="Exercise as ID[:SETS[:REPS[:WEIGHT[:DISTANCE]]]] (repeatable)",
)
@click.option("--points", type=int, default=0, help="Experience earned")
@click.option("--coins", type=int, default=0, help="Coins earned")
@click.option(
    "--date",
    "performed_on",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date performed (default: today)",
)
@character_option
@click.pass_context
@async_command
async def log(ctx, name, duration, exercises, points, coins, performed_on, character_id):
    """Log a completed workout."""
    entry = Workout(
        name=name,
        exercises=[parse_exercise_spec(spec) for spec in exercises],
        duration=duration,
        points=points,
        coins=coins,
        performed_on=performed_on.date() if performed_on else date.today(),
    )

    service = WorkoutService(get_database(ctx))
    try:
        result = await service.log_workout(character_id, entry)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(
        f"Logged '{name}': +{result.experience_gained} xp, +{result.coins_earned} coins"
    )
    if result.levels_gained:
        echo_success(f"Level up! (+{result.levels_gained})")
    for progress in result.quest_progress:
        q = progress.quest
        if progress.completed:
            echo_success(f"Quest {q.name} complete!")
        else:
            echo_info(f"Quest {q.name}: {q.workouts_completed}/{q.workouts_needed}")


@workout.command()
@click.option("--limit", "-l", type=int, default=20, help="Number of workouts to show")
@character_option
@click.pass_context
@async_command
async def history(ctx, limit: int, character_id: int):
    """Show recent workouts."""
    service = WorkoutService(get_database(ctx))
    try:
        workouts = await service.history(character_id, limit)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    if not workouts:
        echo_info("No workouts logged yet")
        return

    headers = ["Date", "Name", "Minutes", "Exercises", "XP", "Coins"]
    rows = [
        [
            w.performed_on.isoformat(),
            w.name,
            str(w.duration),
            str(len(w.exercises)),
            str(w.points),
            str(w.coins),
        ]
        for w in workouts
    ]

    click.echo()
    click.echo(format_table(headers, rows))
