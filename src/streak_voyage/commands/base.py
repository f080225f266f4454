"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..clock import DayCalendar, SystemClock
from ..db import DashboardProgressRepository, ReminderSettingsRepository, get_db_path
from ..engines import DashboardProgressEngine, ReminderCoordinator
from ..scheduler import LocalReminderScheduler, PermissionPrompt


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'streak-voyage init' first."
        )
        ctx.exit(1)


def build_progress_engine() -> DashboardProgressEngine:
    """Progress engine wired to the on-disk store and the local clock."""
    return DashboardProgressEngine(
        store=DashboardProgressRepository(get_db_path()),
        clock=SystemClock(),
        calendar=DayCalendar(),
    )


def build_reminder_coordinator(
    prompt: PermissionPrompt | None = None,
) -> ReminderCoordinator:
    """Reminder coordinator wired to the on-disk store and local scheduler."""
    db_path = get_db_path()
    return ReminderCoordinator(
        store=ReminderSettingsRepository(db_path),
        scheduler=LocalReminderScheduler(db_path, prompt=prompt),
    )


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


def progress_bar(value: int, total: int, width: int = 20) -> str:
    """Render a text progress bar, e.g. [#####-----]."""
    if total <= 0:
        return "[" + "-" * width + "]"
    filled = min(width, round(width * value / total))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = [
        "".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)).rstrip(),
        "".join("-" * w + " " * padding for w in widths).rstrip(),
    ]
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)).rstrip()
        )

    return "\n".join(lines)
