"""Command-line interface for readstats.

Built with Typer for commands and Rich for output.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import get_config
from .dashboard import DashboardResult, compute_dashboard, export_to_file, export_to_string
from .dates import parse_timestamp_ms
from .db import get_db
from .formatting import format_duration
from .library import LibraryLoadError, load_books
from .settings import (
    ActivityView,
    LayoutMode,
    PreferenceSet,
    SqlPreferenceStore,
    TimeRange,
    update_preferences,
)
from .stats import ChartDays

# Create the main app
app = typer.Typer(
    name="readstats",
    help="Reading statistics from your library's reading sessions.",
    no_args_is_help=True,
)

# Sub-app for preference commands
prefs_app = typer.Typer(help="Show and change dashboard preferences.")
app.add_typer(prefs_app, name="prefs")

# Rich console for pretty output
console = Console()

SPARK_CHARS = "▁▂▃▄▅▆▇█"
BAR_WIDTH = 30


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def _load_books_or_exit(path: Path) -> list:
    try:
        return load_books(path)
    except LibraryLoadError as e:
        print_error(str(e))
        raise typer.Exit(1)


def _parse_now_or_exit(now: Optional[str]) -> Optional[int]:
    if now is None:
        return None
    now_ms = parse_timestamp_ms(now)
    if now_ms is None:
        print_error(f"Invalid --now timestamp: {now}")
        raise typer.Exit(1)
    return now_ms


def _resolve_preferences(
    time_range: Optional[TimeRange],
    layout: Optional[LayoutMode],
    view: Optional[ActivityView],
) -> PreferenceSet:
    """Stored preferences with any command-line overrides applied."""
    stored = SqlPreferenceStore(get_db()).load()
    return PreferenceSet(
        time_range=time_range or stored.time_range,
        layout_mode=layout or stored.layout_mode,
        activity_view=view or stored.activity_view,
    )


# ============================================================================
# Rendering
# ============================================================================


def render_activity(chart: ChartDays, view: ActivityView) -> None:
    """Draw the daily activity series as bars or a sparkline."""
    if chart.max_day_seconds <= 0:
        print_info("No reading activity in this period")
        return

    if view == ActivityView.LINE:
        levels = len(SPARK_CHARS) - 1
        line = "".join(
            SPARK_CHARS[round(day.seconds / chart.max_day_seconds * levels)]
            for day in chart.days
        )
        console.print(f"  [cyan]{line}[/cyan]")
        console.print(
            f"  [dim]{chart.days[0].full_label} to {chart.days[-1].full_label}[/dim]"
        )
        return

    table = Table(show_header=False, box=None)
    table.add_column("Day", style="dim")
    table.add_column("Activity", style="cyan")
    table.add_column("Time", justify="right")
    for day in chart.days:
        width = round(day.seconds / chart.max_day_seconds * BAR_WIDTH)
        table.add_row(day.full_label, "█" * width, format_duration(day.seconds, "-"))
    console.print(table)


def render_core(result: DashboardResult) -> None:
    core = result.core_stats
    table = Table(title="Overview", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Books", str(core.total_books))
    table.add_row("Finished", str(core.finished_books))
    table.add_row("In progress", str(core.in_progress_books))
    table.add_row("Completion rate", f"{core.completion_rate}%")
    table.add_row("Reading time", format_duration(core.total_seconds, "0m"))
    table.add_row("Sessions", str(core.tracked_sessions))
    table.add_row("Average session", format_duration(core.average_session_seconds, "<1m"))
    table.add_row("Pages read (est.)", f"{core.completed_pages:,}")
    console.print(table)


def render_weekly(result: DashboardResult) -> None:
    challenge = result.weekly_challenge
    filled = round(challenge.percent / 100 * BAR_WIDTH)
    bar = "█" * filled + "░" * (BAR_WIDTH - filled)
    lines = [
        f"[green]{bar}[/green] {challenge.percent}%",
        f"Read {format_duration(challenge.week_seconds, '0m')} of "
        f"{format_duration(challenge.goal_seconds)}",
    ]
    if challenge.remaining > 0:
        lines.append(f"[dim]{format_duration(challenge.remaining, '<1m')} to go[/dim]")
    else:
        lines.append("[bold green]Goal reached![/bold green]")
    console.print(Panel("\n".join(lines), title="[blue]Weekly Challenge[/blue]"))


def render_year(result: DashboardResult) -> None:
    review = result.year_in_review
    lines = [
        f"Reading time: {format_duration(review.year_seconds, '0m')}",
        f"Pages (est.): {round(review.year_pages):,}",
        f"Sessions: {review.sessions_count}",
        f"Books finished: {review.finished_this_year}",
    ]
    console.print(Panel("\n".join(lines), title=f"[blue]{review.year} in Review[/blue]"))


def render_streaks(result: DashboardResult) -> None:
    streaks = result.streak_stats
    lines = [
        f"[bold]Current Streak:[/bold] {streaks.current_streak} days",
        f"[bold]Best Streak:[/bold] {streaks.best_streak} days",
        f"Reading days: {streaks.active_days}",
    ]
    if streaks.current_streak == 0:
        lines.append("[dim]Read today to start a new streak![/dim]")
    console.print(Panel("\n".join(lines), title="[blue]Streaks[/blue]"))


def render_status(result: DashboardResult) -> None:
    table = Table(title="Library Status")
    table.add_column("Status", style="cyan")
    table.add_column("Books", justify="right")
    table.add_column("Share", justify="right")
    for share in result.status_breakdown:
        table.add_row(share.status.value, str(share.count), f"{share.percent}%")
    console.print(table)


def render_top_books(result: DashboardResult) -> None:
    if not result.top_books:
        print_info("No tracked books in this period")
        return
    table = Table(title="Top Books")
    table.add_column("Title", style="cyan", max_width=40)
    table.add_column("Author", style="green", max_width=25)
    table.add_column("Progress", justify="right")
    table.add_column("Time", justify="right")
    for book in result.top_books:
        table.add_row(
            book.title,
            book.author or "-",
            f"{book.progress}%",
            format_duration(book.tracked_seconds, "<1m"),
        )
    console.print(table)


def render_top_sessions(result: DashboardResult) -> None:
    if not result.top_sessions:
        print_info("No sessions in this period")
        return
    table = Table(title="Longest Sessions")
    table.add_column("Date")
    table.add_column("Book", style="cyan", max_width=40)
    table.add_column("Time", justify="right")
    table.add_column("Pages (est.)", justify="right")
    for session in result.top_sessions:
        table.add_row(
            session.local_date_key,
            session.title,
            format_duration(session.seconds, "<1m"),
            f"{session.pages_estimate:.0f}",
        )
    console.print(table)


def render_dashboard(result: DashboardResult) -> None:
    """Render the panels for the result's layout mode."""
    prefs = result.preferences
    console.print(Panel(
        f"[bold]Reading Statistics[/bold]  [dim]{prefs.time_range.value} · "
        f"{prefs.layout_mode.value}[/dim]",
        style="magenta",
    ))

    if prefs.layout_mode == LayoutMode.BOOKS:
        render_status(result)
        render_top_books(result)
        return

    if prefs.layout_mode == LayoutMode.HABITS:
        render_streaks(result)
        console.print("\n[bold]Daily Activity[/bold]")
        render_activity(result.chart_days, prefs.activity_view)
        render_weekly(result)
        return

    render_core(result)
    console.print("\n[bold]Daily Activity[/bold]")
    render_activity(result.chart_days, prefs.activity_view)
    render_weekly(result)
    render_year(result)
    render_top_books(result)
    render_top_sessions(result)


# ============================================================================
# Commands
# ============================================================================


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Reading statistics for your library."""
    level = logging.DEBUG if verbose else getattr(logging, get_config().log_level, logging.WARNING)
    logging.basicConfig(level=level)


@app.command()
def version() -> None:
    """Show the readstats version."""
    from . import __version__

    console.print(f"readstats {__version__}")


@app.command()
def dashboard(
    books_file: Path = typer.Argument(..., help="JSON file with the book snapshot"),
    time_range: Optional[TimeRange] = typer.Option(None, "--range", "-r", help="Time range"),
    layout: Optional[LayoutMode] = typer.Option(None, "--layout", "-l", help="Panels to show"),
    view: Optional[ActivityView] = typer.Option(None, "--view", help="Activity chart style"),
    now: Optional[str] = typer.Option(None, "--now", help="Reference time (ISO-8601)"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Show reading statistics for a book snapshot.

    Uses the stored preferences; options override them for this run only.
    """
    config = get_config()
    books = _load_books_or_exit(books_file)
    now_ms = _parse_now_or_exit(now)
    preferences = _resolve_preferences(time_range, layout, view)

    result = compute_dashboard(
        books,
        preferences,
        now=now_ms,
        tz=config.tzinfo(),
        weekly_goal_seconds=config.weekly_goal_seconds,
    )

    if as_json:
        console.print_json(export_to_string(result))
        return

    render_dashboard(result)


@app.command()
def export(
    books_file: Path = typer.Argument(..., help="JSON file with the book snapshot"),
    output: Path = typer.Argument(..., help="Output JSON file"),
    time_range: Optional[TimeRange] = typer.Option(None, "--range", "-r", help="Time range"),
    now: Optional[str] = typer.Option(None, "--now", help="Reference time (ISO-8601)"),
    compact: bool = typer.Option(False, "--compact", help="Write compact JSON"),
) -> None:
    """Export computed reading statistics to a JSON file."""
    config = get_config()
    books = _load_books_or_exit(books_file)
    now_ms = _parse_now_or_exit(now)
    preferences = _resolve_preferences(time_range, None, None)

    result = compute_dashboard(
        books,
        preferences,
        now=now_ms,
        tz=config.tzinfo(),
        weekly_goal_seconds=config.weekly_goal_seconds,
    )

    outcome = export_to_file(result, output, pretty=not compact)
    if not outcome.success:
        print_error(f"Export failed: {outcome.error}")
        raise typer.Exit(1)

    print_success(f"Exported statistics for {len(books)} books to {outcome.file_path}")


@prefs_app.command("show")
def prefs_show() -> None:
    """Show the stored dashboard preferences."""
    prefs = SqlPreferenceStore(get_db()).load()

    table = Table(title="Dashboard Preferences", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Time range", prefs.time_range.value)
    table.add_row("Layout", prefs.layout_mode.value)
    table.add_row("Activity view", prefs.activity_view.value)
    console.print(table)


@prefs_app.command("set")
def prefs_set(
    time_range: Optional[TimeRange] = typer.Option(None, "--range", "-r", help="Time range"),
    layout: Optional[LayoutMode] = typer.Option(None, "--layout", "-l", help="Panels to show"),
    view: Optional[ActivityView] = typer.Option(None, "--view", help="Activity chart style"),
) -> None:
    """Change and persist one or more preferences."""
    if time_range is None and layout is None and view is None:
        print_error("Nothing to change. Use --range, --layout or --view.")
        raise typer.Exit(1)

    prefs = update_preferences(
        SqlPreferenceStore(get_db()),
        time_range=time_range,
        layout_mode=layout,
        activity_view=view,
    )
    print_success(
        f"Preferences saved: {prefs.time_range.value}, "
        f"{prefs.layout_mode.value}, {prefs.activity_view.value}"
    )


@prefs_app.command("reset")
def prefs_reset() -> None:
    """Restore the default preferences."""
    SqlPreferenceStore(get_db()).clear()
    print_success("Preferences reset to defaults")


if __name__ == "__main__":
    app()
