"""Dashboard commands: level, XP and streak overview."""

import click

from ..config import XP_PER_LEVEL
from ..models.workout import WORKOUT_CATALOG
from .base import (
    async_command,
    build_progress_engine,
    echo_info,
    ensure_initialized,
    progress_bar,
)


@click.command()
@click.pass_context
@async_command
async def status(ctx: click.Context):
    """Show level, XP, streaks and today's workouts."""
    ensure_initialized(ctx)

    engine = build_progress_engine()
    await engine.load()

    click.echo()
    click.echo(click.style(f"Level {engine.current_level}", bold=True))
    click.echo(
        f"XP: {progress_bar(engine.level_xp_progress, XP_PER_LEVEL)} "
        f"{engine.level_xp_progress}/{XP_PER_LEVEL} ({engine.xp_to_next_level} to next level)"
    )
    click.echo()
    click.echo(f"Current streak: {engine.current_streak} day(s)")
    click.echo(f"Longest streak: {engine.longest_streak} day(s)")
    click.echo(f"Total workouts: {engine.total_workouts}")
    click.echo(f"Total XP:       {engine.total_xp}")

    click.echo()
    click.echo(click.style("Today:", bold=True))
    for plan in WORKOUT_CATALOG:
        done = engine.is_workout_completed_today(plan.id)
        mark = click.style("[done]", fg="green") if done else "[    ]"
        click.echo(f"  {mark} {plan.name} ({plan.sets_summary}, +{plan.xp_reward} XP)")

    if engine.today_completed_count == 0:
        click.echo()
        echo_info("No workouts yet today. Keep the streak alive!")


@click.command()
@click.pass_context
@async_command
async def refresh(ctx: click.Context):
    """Re-check the day rollover and streak against the current date."""
    ensure_initialized(ctx)

    engine = build_progress_engine()
    stored = await engine.store.load()
    await engine.load()
    changed = stored is not None and engine.snapshot != stored

    if changed:
        echo_info("Progress updated for today.")
    else:
        echo_info("Progress already up to date.")
