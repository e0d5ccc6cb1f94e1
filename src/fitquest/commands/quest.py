"""Quest commands."""

import click

from ..exceptions import FitQuestError
from ..models.quest import QuestDifficulty, QuestStatus
from ..services.quests import QuestService
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


@click.group()
@click.pass_context
def quest(ctx):
    """Take on and track quests."""
    ensure_initialized(ctx)


@quest.command(name="new")
@click.argument(
    "difficulty",
    type=click.Choice([d.value for d in QuestDifficulty], case_sensitive=False),
)
@character_option
@click.pass_context
@async_command
async def new_quest(ctx, difficulty: str, character_id: int):
    """Generate a new quest of the given DIFFICULTY."""
    service = QuestService(get_database(ctx))
    try:
        created = await service.create_quest(character_id, QuestDifficulty(difficulty.lower()))
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"New {created.difficulty.value} quest: {created.name}")
    click.echo(f"  Workouts needed: {created.workouts_needed}")
    click.echo(f"  Requirements:    {created.get_requirements_display()}")
    click.echo(f"  Reward:          {created.experience_reward} xp, {created.coin_reward} coins")


@quest.command(name="list")
@click.option("--all", "show_all", is_flag=True, help="Include completed quests")
@character_option
@click.pass_context
@async_command
async def list_quests(ctx, show_all: bool, character_id: int):
    """List a character's quests."""
    service = QuestService(get_database(ctx))
    status = None if show_all else QuestStatus.INCOMPLETE
    try:
        quests = await service.list_quests(character_id, status)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    if not quests:
        echo_info("No quests found. Start one with 'fitquest quest new'")
        return

    headers = ["ID", "Name", "Difficulty", "Progress", "Requirements", "Status"]
    rows = [
        [
            str(q.id),
            q.name,
            q.difficulty.value,
            f"{q.workouts_completed}/{q.workouts_needed}",
            q.get_requirements_display(),
            q.status.value,
        ]
        for q in quests
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(quests)} quest(s)")
