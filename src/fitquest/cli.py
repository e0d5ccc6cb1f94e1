"""CLI entry point for fitquest."""

import logging
from pathlib import Path

import click

from . import __version__
from .commands import character, init, quest, shop, social, workout


@click.group()
@click.version_option(version=__version__, prog_name="fitquest")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="FITQUEST_DATA_DIR",
    default=None,
    help="Directory holding the fitquest database",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, data_dir: Path | None, verbose: bool):
    """fitquest: level up by working out.

    Log workouts to earn experience and coins, complete quests, buy gear in
    the shop and climb the leaderboard with your friends.

    Example usage:

        # Initialize the database
        fitquest init

        # Create a character and take on a quest
        fitquest character create
        fitquest quest new medium --as 1

        # Log a workout
        fitquest workout log --as 1 --name "Leg day" --duration 60 -e Barbell_Squat:5:5:100
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


# Register commands
main.add_command(init)
main.add_command(character)
main.add_command(quest)
main.add_command(workout)
main.add_command(shop)
main.add_command(social)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
