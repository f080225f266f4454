"""Daily reminder commands."""

from datetime import datetime

import click
import questionary

from ..clock import SystemClock
from ..models.reminder import ReminderPermissionStatus
from .base import (
    async_command,
    build_reminder_coordinator,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
)


async def ask_permission() -> bool:
    """Ask the user whether reminders may be sent."""
    answer = await questionary.confirm(
        "Allow StreakVoyage to send you a daily workout reminder?",
        default=True,
    ).ask_async()
    return bool(answer)


def _parse_time(value: str):
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        raise click.BadParameter("Use 24-hour HH:MM, e.g. 07:30") from None


@click.group()
@click.pass_context
def reminder(ctx: click.Context):
    """Manage the daily workout reminder."""
    ensure_initialized(ctx)


@reminder.command(name="status")
@async_command
async def reminder_status():
    """Show whether the reminder is on and when it fires."""
    coordinator = build_reminder_coordinator()
    await coordinator.load()
    permission = await coordinator.refresh_reminder_status()

    state = click.style("on", fg="green") if coordinator.reminder_enabled else "off"
    click.echo(f"Reminder:   {state}")
    click.echo(f"Time:       {coordinator.settings.get_time_display()}")
    click.echo(f"Permission: {permission.value.replace('_', ' ')}")

    next_fire = await coordinator.scheduler.next_fire_time(SystemClock().now())
    if next_fire is not None:
        click.echo(f"Next:       {next_fire.strftime('%Y-%m-%d %H:%M')}")


@reminder.command()
@async_command
async def enable():
    """Turn the daily reminder on (asks for permission the first time)."""
    coordinator = build_reminder_coordinator(prompt=ask_permission)
    await coordinator.load()
    await coordinator.set_reminder_enabled(True)

    if coordinator.reminder_enabled:
        echo_success(
            f"Daily reminder set for {coordinator.settings.get_time_display()}"
        )
    elif coordinator.reminder_permission_status is ReminderPermissionStatus.DENIED:
        echo_warning(
            "Reminders are not allowed. Run 'streak-voyage reminder permit' to change that."
        )
    else:
        echo_warning("Reminder could not be scheduled and stays off.")


@reminder.command()
@async_command
async def disable():
    """Turn the daily reminder off."""
    coordinator = build_reminder_coordinator()
    await coordinator.load()
    await coordinator.set_reminder_enabled(False)
    echo_success("Daily reminder turned off")


@reminder.command(name="time")
@click.argument("value", metavar="HH:MM")
@async_command
async def set_time(value: str):
    """Change the reminder time (24-hour HH:MM)."""
    reminder_time = _parse_time(value)

    coordinator = build_reminder_coordinator()
    await coordinator.load()
    await coordinator.set_reminder_time(reminder_time)

    display = coordinator.settings.get_time_display()
    if coordinator.reminder_enabled:
        echo_success(f"Reminder moved to {display}")
    else:
        echo_info(f"Reminder time saved as {display} (reminder is off)")


@reminder.command()
@click.option("--revoke", is_flag=True, help="Withdraw permission instead")
@async_command
async def permit(revoke: bool):
    """Grant (or revoke) permission to send reminders."""
    coordinator = build_reminder_coordinator()
    status = ReminderPermissionStatus.DENIED if revoke else ReminderPermissionStatus.AUTHORIZED
    await coordinator.scheduler.set_authorization_status(status)

    await coordinator.load()
    await coordinator.refresh_reminder_status()
    echo_info(f"Permission is now {status.value}")
