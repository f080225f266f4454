"""CLI entry point for StreakVoyage."""

import asyncio
import logging

import click

from . import __version__
from .commands import init, refresh, reminder, status, workouts
from .db import get_db_path, reset_db


@click.group()
@click.version_option(version=__version__, prog_name="streak-voyage")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option(
    "--reset-state",
    is_flag=True,
    help="Wipe all stored progress and settings before running",
)
def main(verbose: bool, reset_state: bool):
    """StreakVoyage: daily workouts, streaks and XP.

    Example usage:

        # Initialize the project
        streak-voyage init

        # Check your level and streak
        streak-voyage status

        # Run a guided session
        streak-voyage workouts run squats

        # Get a reminder every evening
        streak-voyage reminder time 19:30
        streak-voyage reminder enable
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if reset_state:
        asyncio.run(reset_db(get_db_path()))
        click.echo(click.style("[OK] ", fg="green") + "Stored state wiped")


# Register commands
main.add_command(init)
main.add_command(status)
main.add_command(refresh)
main.add_command(workouts)
main.add_command(reminder)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
