"""Character management commands."""

import click
import questionary

from ..db import ItemRepository
from ..exceptions import FitQuestError
from ..models.character import CLASS_BASE_STATS, Character
from ..models.items import ItemCategory
from ..services.characters import CharacterService, character_summary
from ..services.progression import ProgressionService
from .base import (
    async_command,
    character_option,
    custom_style,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_database,
)


def _class_label(name: str) -> str:
    stats = CLASS_BASE_STATS[name]
    return (
        f"{name} (STR {stats.strength} / END {stats.endurance} / FLX {stats.flexibility})"
    )


def print_character(character: Character) -> None:
    """Print a character sheet."""
    summary = character_summary(character)
    stats = character.character_class.stats

    click.echo()
    click.echo("=" * 50)
    click.echo(f"{character.username} (ID: {character.id})")
    click.echo("=" * 50)
    click.echo(f"Class:       {character.character_class.name}")
    click.echo(f"Level:       {character.level}")
    click.echo(
        f"Experience:  {character.experience_leftover} / {summary['experience_needed']}"
    )
    click.echo(f"Coins:       {character.coins}")
    click.echo(f"Streak:      {character.streak}")
    click.echo(
        f"Stats:       STR {stats.strength}  END {stats.endurance}  FLX {stats.flexibility}"
    )
    if character.pending_stat_points:
        click.echo(f"Unspent:     {character.pending_stat_points} stat point(s)")
    click.echo()
    click.echo("Equipped:")
    for slot, item_id in summary["equipped"].items():
        click.echo(f"  {slot:<15} {item_id if item_id is not None else '-'}")
    click.echo(f"Inventory:   {character.inventory.count()} item(s)")
    click.echo(f"Friends:     {len(character.friends)}")


@click.group()
@click.pass_context
def character(ctx):
    """Create and manage characters."""
    ensure_initialized(ctx)


@character.command()
@click.option("--username", "-u", help="Character name")
@click.option(
    "--class",
    "class_name",
    type=click.Choice(list(CLASS_BASE_STATS), case_sensitive=False),
    help="Character class",
)
@click.pass_context
@async_command
async def create(ctx, username: str | None, class_name: str | None):
    """Create a new character with starter gear."""
    if username is None:
        username = await questionary.text(
            "Choose a username:", style=custom_style
        ).ask_async()
    if class_name is None:
        class_name = await questionary.select(
            "Choose your class:",
            choices=[questionary.Choice(_class_label(name), name) for name in CLASS_BASE_STATS],
            style=custom_style,
        ).ask_async()
    if not username or not class_name:
        echo_info("Cancelled")
        return

    service = CharacterService(get_database(ctx))
    try:
        created = await service.create_character(username, class_name)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Created {created.character_class.name} '{created.username}' (ID: {created.id})")
    echo_info(f"Act as this character with --as {created.id}")


@character.command()
@character_option
@click.pass_context
@async_command
async def show(ctx, character_id: int):
    """Show a character sheet."""
    service = CharacterService(get_database(ctx))
    try:
        found = await service.get_character(character_id)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    print_character(found)


@character.command()
@click.argument("stat", type=click.Choice(["strength", "endurance", "flexibility"]))
@click.argument("amount", type=int, default=1)
@character_option
@click.pass_context
@async_command
async def allocate(ctx, stat: str, amount: int, character_id: int):
    """Spend pending stat points on STAT."""
    service = ProgressionService(get_database(ctx))
    try:
        updated = await service.allocate(character_id, stat, amount)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    value = getattr(updated.character_class.stats, stat)
    echo_success(f"{stat.capitalize()} is now {value} ({updated.pending_stat_points} point(s) left)")


@character.command()
@click.argument("item_id", type=int)
@character_option
@click.pass_context
@async_command
async def equip(ctx, item_id: int, character_id: int):
    """Wear an owned item."""
    service = CharacterService(get_database(ctx))
    try:
        await service.equip(character_id, item_id)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Equipped item {item_id}")


@character.command()
@click.argument("slot", type=click.Choice([ItemCategory.PET.value, ItemCategory.WEAPON.value]))
@character_option
@click.pass_context
@async_command
async def unequip(ctx, slot: str, character_id: int):
    """Empty the pet or weapon slot."""
    service = CharacterService(get_database(ctx))
    try:
        await service.unequip(character_id, ItemCategory(slot))
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Unequipped {slot}")


@character.command()
@character_option
@click.pass_context
@async_command
async def inventory(ctx, character_id: int):
    """List owned items."""
    database = get_database(ctx)
    try:
        found = await CharacterService(database).get_character(character_id)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    async with database.connect() as db:
        items = {item.id: item for item in await ItemRepository(db).list_all()}

    rows = []
    for category, item_ids in found.inventory.items.items():
        for item_id in item_ids:
            item = items.get(item_id)
            worn = "*" if found.equipped.slot(category) == item_id else ""
            rows.append([
                str(item_id),
                item.name if item else "?",
                category.value,
                item.rarity.value if item else "?",
                worn,
            ])

    click.echo()
    click.echo(format_table(["ID", "Name", "Category", "Rarity", "Worn"], rows))
