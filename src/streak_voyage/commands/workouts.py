"""Workout catalog and session commands."""

import asyncio

import click

from ..clock import SystemClock
from ..config import DEFAULT_REST_SECONDS, XP_PER_LEVEL
from ..engines import WorkoutPhase, WorkoutSession
from ..models.progress import WorkoutCompletionEvent
from ..models.workout import WORKOUT_CATALOG, WorkoutPlan, get_workout_plan
from .base import (
    async_command,
    build_progress_engine,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)


@click.group()
def workouts():
    """Browse the workout catalog and run sessions."""
    pass


def _resolve_plan(ctx: click.Context, workout_id: str) -> WorkoutPlan:
    plan = get_workout_plan(workout_id)
    if plan is None:
        known = ", ".join(p.id for p in WORKOUT_CATALOG)
        echo_error(f"Unknown workout '{workout_id}'. Available: {known}")
        ctx.exit(1)
    return plan


async def _record(event: WorkoutCompletionEvent) -> None:
    engine = build_progress_engine()
    await engine.load()
    recorded = await engine.record_completion(event)

    if recorded:
        echo_success(f"+{event.xp_awarded} XP")
    else:
        echo_info("Already completed today; XP and streak unchanged.")

    click.echo(
        f"Level {engine.current_level} ({engine.level_xp_progress}/{XP_PER_LEVEL} XP), "
        f"streak {engine.current_streak} day(s)"
    )


@workouts.command(name="list")
@click.pass_context
@async_command
async def list_workouts(ctx: click.Context):
    """List the available workouts."""
    ensure_initialized(ctx)

    engine = build_progress_engine()
    await engine.load()

    headers = ["ID", "Name", "Sets", "XP", "Today"]
    rows = [
        [
            plan.id,
            plan.name,
            plan.sets_summary,
            f"+{plan.xp_reward}",
            "done" if engine.is_workout_completed_today(plan.id) else "-",
        ]
        for plan in WORKOUT_CATALOG
    ]

    click.echo()
    click.echo(format_table(headers, rows))


@workouts.command()
@click.argument("workout_id")
@click.pass_context
def show(ctx: click.Context, workout_id: str):
    """Show the sets and form tip of a workout."""
    plan = _resolve_plan(ctx, workout_id)

    click.echo()
    click.echo(click.style(plan.name, bold=True) + f" - {plan.subtitle}")
    click.echo(f"{plan.sets_summary}, +{plan.xp_reward} XP")
    click.echo()
    for number, reps in enumerate(plan.reps_by_set, start=1):
        click.echo(f"  Set {number}: {reps} reps")
    click.echo()
    click.echo(click.style("Form tip: ", fg="cyan") + plan.form_tip)


@workouts.command()
@click.argument("workout_id")
@click.pass_context
@async_command
async def complete(ctx: click.Context, workout_id: str):
    """Record a workout as completed now without running a session."""
    ensure_initialized(ctx)
    plan = _resolve_plan(ctx, workout_id)

    event = WorkoutCompletionEvent(
        workout_id=plan.id,
        xp_awarded=plan.xp_reward,
        completed_at=SystemClock().now(),
    )
    await _record(event)


@workouts.command()
@click.argument("workout_id")
@click.option(
    "--rest",
    "rest_seconds",
    type=int,
    default=DEFAULT_REST_SECONDS,
    show_default=True,
    help="Rest between sets in seconds",
)
@click.option(
    "--no-rest-timer",
    is_flag=True,
    help="Wait for Enter instead of counting the rest down",
)
@click.pass_context
@async_command
async def run(ctx: click.Context, workout_id: str, rest_seconds: int, no_rest_timer: bool):
    """Run a guided workout session.

    Log the reps of each set, rest between sets, and collect XP at the
    end. Quitting early (Ctrl+C) records nothing.
    """
    ensure_initialized(ctx)
    plan = _resolve_plan(ctx, workout_id)

    session = WorkoutSession(
        plan,
        rest_duration_seconds=rest_seconds,
        uses_automatic_rest_timer=not no_rest_timer,
    )

    click.echo()
    click.echo(click.style(f"{plan.name}", bold=True) + f" - {plan.sets_summary}")
    click.echo(click.style("Form tip: ", fg="cyan") + plan.form_tip)
    click.echo()

    if not click.confirm("Ready to start?", default=True):
        echo_info("Session cancelled.")
        return

    session.start_workout()

    while session.phase is not WorkoutPhase.COMPLETED:
        if session.phase is WorkoutPhase.ACTIVE_SET:
            remaining = session.current_set_target - session.current_rep_count
            reps = click.prompt(
                f"Set {session.current_set_number}/{session.total_sets} "
                f"({remaining} reps to go). Reps done",
                type=click.IntRange(0, remaining),
                default=remaining,
            )
            if reps == remaining:
                session.complete_set()
            else:
                for _ in range(reps):
                    session.count_rep()
        elif session.phase is WorkoutPhase.REST:
            await _rest(session)

    click.echo()
    echo_success(f"{plan.name} complete!")

    event = session.take_completion_event()
    if event is not None:
        await _record(event)


async def _rest(session: WorkoutSession) -> None:
    if not session.uses_automatic_rest_timer:
        click.prompt(
            f"Rest {session.rest_seconds_remaining}s. Press Enter for the next set",
            default="",
            show_default=False,
        )
        session.skip_rest()
        return

    # The ticker advances the session; just report the countdown.
    last_shown = None
    while session.phase is WorkoutPhase.REST:
        if session.rest_seconds_remaining != last_shown:
            last_shown = session.rest_seconds_remaining
            click.echo(f"\rResting... {last_shown:>3}s", nl=False)
        await asyncio.sleep(0.1)
    click.echo()
