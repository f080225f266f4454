"""Initialize project command."""

import click

from ..config import get_data_dir
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the StreakVoyage data directory and database.

    Safe to run again; existing progress is kept.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing StreakVoyage in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("StreakVoyage is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  streak-voyage workouts list         # See the workout catalog")
    click.echo("  streak-voyage workouts run squats   # Start a guided session")
    click.echo("  streak-voyage reminder enable       # Get a daily nudge")
