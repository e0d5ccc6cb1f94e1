"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click
from questionary import Style

from ..db import Database, get_db_path

# Custom style for interactive prompts
custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def character_option(f):
    """Add the --as option identifying the acting character."""
    return click.option(
        "--as",
        "character_id",
        type=int,
        required=True,
        envvar="FITQUEST_CHARACTER",
        help="ID of the character performing the action",
    )(f)


def get_data_dir(ctx: click.Context) -> Path | None:
    """Data directory chosen on the command line, if any."""
    obj = ctx.find_root().obj or {}
    return obj.get("data_dir")


def get_database(ctx: click.Context) -> Database:
    """Database for the selected data directory."""
    return Database(get_db_path(get_data_dir(ctx)))


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path(get_data_dir(ctx))
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'fitquest init' first."
        )
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = [
        "".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)),
        "".join("-" * w + " " * padding for w in widths),
    ]
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(lines)
