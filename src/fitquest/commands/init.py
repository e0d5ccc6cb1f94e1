"""Initialize project command."""

import click

from ..config import settings
from ..data.exercise_loader import get_exercises_json_path, seed_exercises_from_json
from ..db import Database, get_db_path, init_db, seed_exercises, seed_items
from ..services.shop import ShopService
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@click.pass_context
@async_command
async def init(ctx):
    """Initialize the fitquest database.

    Creates the data directory and the SQLite database, loads the item
    catalog and exercise library, and stocks the shop.
    """
    data_dir = get_data_dir(ctx) or settings.data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing fitquest in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    items = await seed_items(db_path)
    echo_success(f"Item catalog populated ({items} new items)")

    # Seed exercises from JSON (or fall back to COMMON_EXERCISES)
    json_path = get_exercises_json_path(data_dir)
    if json_path.exists():
        count = await seed_exercises_from_json(db_path, json_path)
        echo_success(f"Exercise library populated ({count} exercises from {json_path.name})")
    else:
        await seed_exercises(db_path)
        echo_success("Exercise library populated (built-in exercises)")

    database = Database(db_path)
    shop = ShopService(database)
    if not await shop.list_items():
        stocked = await shop.refresh()
        echo_success(f"Shop stocked with {len(stocked)} items")

    click.echo()
    click.echo("fitquest is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create a character:")
    click.echo("     fitquest character create")
    click.echo()
    click.echo("  2. Take on a quest and log a workout:")
    click.echo("     fitquest quest new easy --as 1")
    click.echo("     fitquest workout log --as 1 --name 'Push day' --duration 45 -e Pushups")
