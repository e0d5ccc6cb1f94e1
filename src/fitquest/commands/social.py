"""Friends and leaderboard commands."""

import click
import questionary

from ..exceptions import FitQuestError
from ..services.social import SocialService
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
from .character import print_character


@click.group()
@click.pass_context
def social(ctx):
    """Friends, friend requests and the leaderboard."""
    ensure_initialized(ctx)


@social.command()
@click.argument("recipient_id", type=int)
@character_option
@click.pass_context
@async_command
async def request(ctx, recipient_id: int, character_id: int):
    """Send a friend request to RECIPIENT_ID."""
    service = SocialService(get_database(ctx))
    try:
        sent = await service.send_request(character_id, recipient_id)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Friend request {sent.id} sent to character {recipient_id}")


@social.command()
@click.option("--answer", "-a", is_flag=True, help="Answer each request interactively")
@character_option
@click.pass_context
@async_command
async def requests(ctx, answer: bool, character_id: int):
    """List friend requests waiting for you."""
    service = SocialService(get_database(ctx))
    try:
        pending = await service.pending_requests(character_id)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    if not pending:
        echo_info("No pending friend requests")
        return

    if not answer:
        headers = ["Request", "From", "Sent"]
        rows = [
            [
                str(r.id),
                str(r.sender_id),
                r.created_at.strftime("%Y-%m-%d") if r.created_at else "N/A",
            ]
            for r in pending
        ]
        click.echo()
        click.echo(format_table(headers, rows))
        return

    for pending_request in pending:
        accept = await questionary.confirm(
            f"Accept friend request from character {pending_request.sender_id}?",
            style=custom_style,
        ).ask_async()
        if accept is None:
            echo_info("Cancelled")
            return
        try:
            await service.respond(pending_request.id, character_id, accept)
        except FitQuestError as e:
            echo_error(e.message)
            continue
        echo_success(
            f"{'Accepted' if accept else 'Declined'} request from {pending_request.sender_id}"
        )


@social.command()
@click.argument("request_id", type=int)
@click.option("--accept/--decline", default=True, help="Accept (default) or decline")
@character_option
@click.pass_context
@async_command
async def respond(ctx, request_id: int, accept: bool, character_id: int):
    """Accept or decline friend request REQUEST_ID."""
    service = SocialService(get_database(ctx))
    try:
        answered = await service.respond(request_id, character_id, accept)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    if accept:
        echo_success(f"You are now friends with character {answered.sender_id}")
    else:
        echo_success(f"Declined request from character {answered.sender_id}")


@social.command()
@click.argument("friend_id", type=int)
@character_option
@click.pass_context
@async_command
async def unfriend(ctx, friend_id: int, character_id: int):
    """Remove FRIEND_ID from your friends."""
    service = SocialService(get_database(ctx))
    try:
        await service.remove_friend(character_id, friend_id)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"Removed character {friend_id} from your friends")


@social.command()
@click.argument("friend_id", type=int, required=False)
@character_option
@click.pass_context
@async_command
async def friends(ctx, friend_id: int | None, character_id: int):
    """List your friends, or show FRIEND_ID's character sheet."""
    service = SocialService(get_database(ctx))
    try:
        if friend_id is not None:
            print_character(await service.friend_detail(character_id, friend_id))
            return
        friend_list = await service.list_friends(character_id)
    except FitQuestError as e:
        echo_error(e.message)
        ctx.exit(1)

    if not friend_list:
        echo_info("No friends yet. Send a request with 'fitquest social request'")
        return

    headers = ["ID", "Username", "Class", "Level"]
    rows = [
        [str(f.id), f.username, f.character_class.name, str(f.level)] for f in friend_list
    ]
    click.echo()
    click.echo(format_table(headers, rows))


@social.command()
@click.option(
    "--limit", "-l", type=click.IntRange(min=0), default=None, help="Number of entries to show"
)
@click.pass_context
@async_command
async def leaderboard(ctx, limit: int | None):
    """Show the top characters."""
    service = SocialService(get_database(ctx))
    entries = await service.leaderboard(limit)

    if not entries:
        echo_info("No characters yet")
        return

    headers = ["#", "Username", "Class", "Level", "Experience"]
    rows = [
        [
            str(e.rank),
            e.username,
            e.character_class.name,
            str(e.level),
            f"{e.experience_leftover}/{e.experience_needed}",
        ]
        for e in entries
    ]
    click.echo()
    click.echo(format_table(headers, rows))
