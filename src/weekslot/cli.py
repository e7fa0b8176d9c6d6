"""Command-line interface for Weekslot."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from .config import WeekslotConfig, discover_config, set_config_path
from .exceptions import WeekslotError
from .loader import load_routine, load_tasks
from .logger import VERBOSITY_DEBUG, VERBOSITY_SILENT, setup_logger
from .scheduler import (
    AllocationResult,
    WeekAllocator,
    blocks_for_week,
    get_date_for_day,
    get_week_availability,
    get_week_start_date,
    write_schedule_file,
)
from .scheduler.core import DAYS_IN_WEEK

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

app = typer.Typer(
    name="weekslot",
    help="Place pending tasks into the free time around a weekly routine",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show placements, "
            "2=show every day searched, 3=debug",
            min=VERBOSITY_SILENT,
            max=VERBOSITY_DEBUG,
        ),
    ] = VERBOSITY_SILENT,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: weekslot_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for weekslot commands."""
    setup_logger(verbose)
    set_config_path(config)


def _parse_week_option(week_str: str | None) -> date:
    """Parse --week, defaulting to today; any day of the week is accepted."""
    if week_str is None:
        return date.today()  # noqa: DTZ011

    try:
        return date.fromisoformat(week_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid date format '{week_str}'. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _load_config() -> WeekslotConfig:
    try:
        return discover_config()
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _resolve_path(given: Path | None, configured: Path | None, what: str) -> Path:
    """Pick the CLI argument, else the config file's default."""
    path = given or configured
    if path is None:
        typer.echo(
            f"Error: No {what} file given and none set in the config file.",
            err=True,
        )
        raise typer.Exit(1)
    return path


def _display_schedule(result: AllocationResult, week_start: date) -> None:
    """Print placements grouped by day."""
    typer.echo(f"Week of {week_start.isoformat()}")

    if not result.scheduled_tasks:
        typer.echo("\nNo tasks scheduled.")
        return

    for day in range(DAYS_IN_WEEK):
        day_placements = sorted(
            (p for p in result.scheduled_tasks if p.day_of_week == day),
            key=lambda p: p.start_time,
        )
        if not day_placements:
            continue
        typer.echo(f"\n{DAY_NAMES[day]} {day_placements[0].date.isoformat()}")
        for placement in day_placements:
            typer.echo(
                f"  {placement.start_time}-{placement.end_time}  "
                f"{placement.task.title} ({placement.task_id})"
            )


@app.command()
def schedule(
    tasks: Annotated[
        Path | None, typer.Argument(help="Path to the tasks YAML/JSON file")
    ] = None,
    routine: Annotated[
        Path | None, typer.Argument(help="Path to the weekly routine YAML/JSON file")
    ] = None,
    *,
    week: Annotated[
        str | None,
        typer.Option(
            "--week",
            "-w",
            help="Any date in the week to schedule (YYYY-MM-DD). Defaults to today",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the schedule to a YAML file"),
    ] = None,
) -> None:
    """Place pending tasks into the free slots of a week."""
    anchor = _parse_week_option(week)
    config = _load_config()
    tasks_path = _resolve_path(tasks, config.tasks_file, "tasks")
    routine_path = _resolve_path(routine, config.routine_file, "routine")

    try:
        task_list = load_tasks(tasks_path)
        blocks = load_routine(routine_path, config.scheduler)
        allocator = WeekAllocator(blocks, task_list, anchor, config=config.scheduler)
        result = allocator.schedule()
    except WeekslotError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if output:
        write_schedule_file(output, result, allocator.week_start)
        typer.echo(f"Schedule written to {output}")
    else:
        _display_schedule(result, allocator.week_start)

    if result.warnings:
        typer.echo("\nWarnings:", err=True)
        for warning in result.warnings:
            typer.echo(f"  - {warning}", err=True)
        typer.echo(f"Could not schedule {len(result.unplaced_tasks)} task(s) this week.", err=True)


@app.command()
def availability(
    routine: Annotated[
        Path | None, typer.Argument(help="Path to the weekly routine YAML/JSON file")
    ] = None,
    *,
    week: Annotated[
        str | None,
        typer.Option("--week", "-w", help="Any date in the week (YYYY-MM-DD). Defaults to today"),
    ] = None,
) -> None:
    """Show how much free time the routine leaves in a week."""
    anchor = _parse_week_option(week)
    config = _load_config()
    routine_path = _resolve_path(routine, config.routine_file, "routine")

    try:
        blocks = load_routine(routine_path, config.scheduler)
        stats = get_week_availability(blocks, anchor, config.scheduler)
    except WeekslotError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    hours, minutes = divmod(stats.free_minutes, 60)
    typer.echo(f"Week of {get_week_start_date(anchor).isoformat()}")
    typer.echo(f"  Total slots:    {stats.total_slots}")
    typer.echo(f"  Occupied slots: {stats.occupied_slots}")
    typer.echo(f"  Free slots:     {stats.free_slots}")
    typer.echo(f"  Free time:      {hours}h{minutes:02d}")
    typer.echo(f"  Occupancy:      {stats.occupancy_percentage}%")


@app.command()
def week(
    routine: Annotated[
        Path | None, typer.Argument(help="Path to the weekly routine YAML/JSON file")
    ] = None,
    *,
    week_date: Annotated[
        str | None,
        typer.Option("--week", "-w", help="Any date in the week (YYYY-MM-DD). Defaults to today"),
    ] = None,
) -> None:
    """List the commitments that apply on each day of a week."""
    anchor = _parse_week_option(week_date)
    config = _load_config()
    routine_path = _resolve_path(routine, config.routine_file, "routine")

    try:
        blocks = load_routine(routine_path, config.scheduler)
    except WeekslotError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    by_day = blocks_for_week(blocks, anchor, config.scheduler)
    week_start = get_week_start_date(anchor)
    total = sum(len(day_blocks) for day_blocks in by_day.values())
    typer.echo(f"Week of {week_start.isoformat()} ({total} commitments)")

    for day in range(DAYS_IN_WEEK):
        typer.echo(f"\n{DAY_NAMES[day]} {get_date_for_day(week_start, day).isoformat()}")
        if not by_day[day]:
            typer.echo("  (free)")
            continue
        for block in by_day[day]:
            typer.echo(
                f"  {block.start_time}-{block.end_time}  {block.title} [{block.block_type.value}]"
            )


def main() -> None:
    """Entry point for the weekslot command."""
    app()


if __name__ == "__main__":
    main()
