"""Shop commands."""

import click

from ..exceptions import FitQuestError
from ..services.shop import ShopService
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
def shop(ctx):
    """Browse and buy from the item shop."""
    ensure_initialized(ctx)


@shop.command(name="list")
@click.pass_context
@async_command
async def list_items(ctx):
    """Show the items on offer."""
    service = ShopService(get_database(ctx))
    offer = await service.list_items()

    if not offer:
        echo_info("The shop is empty. Restock it with 'fitquest shop refresh'")
        return

    headers = ["ID", "Name", "Category", "Rarity", "Price"]
    rows = [
        [
            str(entry.item.id),
            entry.item.name,
            entry.item.category.value,
            entry.item.rarity.value,
            str(entry.price),
        ]
        for entry in offer
    ]

    click.echo()
    click.echo(format_table(headers, rows))


@shop.command()
@click.pass_context
@async_command
async def refresh(ctx):
    """Replace the shop's offering with a new random selection."""
    service = ShopService(get_database(ctx))
    try:
        stocked = await service.refresh()
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Shop restocked with {len(stocked)} items")


@shop.command()
@click.argument("item_id", type=int)
@character_option
@click.pass_context
@async_command
async def buy(ctx, item_id: int, character_id: int):
    """Buy ITEM_ID from the shop."""
    service = ShopService(get_database(ctx))
    try:
        purchase = await service.buy(character_id, item_id)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(
        f"Bought {purchase.item.name} for {purchase.price} coins "
        f"({purchase.coins_remaining} left)"
    )
