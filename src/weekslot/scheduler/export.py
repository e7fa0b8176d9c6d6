"""Schedule files: a YAML record of one allocation run.

The file stores the placements of a week so that a calling application can
persist or display them without rerunning the allocator.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, cast

import yaml

from .core import AllocationResult

SCHEDULE_FILE_VERSION = 1

_REQUIRED_ENTRY_FIELDS = ("id", "task_id", "day_of_week", "date", "start_time", "end_time")


@dataclass
class ScheduleEntry:
    """One placement as read back from a schedule file."""

    id: str
    task_id: str
    title: str
    day_of_week: int
    date: date
    start_time: str
    end_time: str


@dataclass
class ScheduleFile:
    """Contents of a schedule file."""

    version: int
    week_start: date
    scheduled: list[ScheduleEntry]
    unplaced: list[str]  # task ids


def write_schedule_file(path: Path, result: AllocationResult, week_start: date) -> None:
    """Write an allocation result to a YAML schedule file.

    Args:
        path: Destination path
        result: Result of WeekAllocator.schedule()
        week_start: The Sunday the placements are relative to
    """
    scheduled = [
        {
            "id": placement.id,
            "task_id": placement.task_id,
            "title": placement.task.title,
            "day_of_week": placement.day_of_week,
            "date": placement.date.isoformat(),
            "start_time": placement.start_time,
            "end_time": placement.end_time,
        }
        for placement in result.scheduled_tasks
    ]

    output: dict[str, Any] = {
        "version": SCHEDULE_FILE_VERSION,
        "week_start": week_start.isoformat(),
        "scheduled": scheduled,
        "unplaced": [task.id for task in result.unplaced_tasks],
    }

    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(output, f, default_flow_style=False, sort_keys=False)


def _parse_date(value: Any, where: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ValueError(f"Invalid date in {where}: {e}") from e


def read_schedule_file(path: Path) -> ScheduleFile:  # noqa: PLR0912 - validation needs many branches
    """Load a schedule file written by write_schedule_file().

    Raises:
        ValueError: If the format is invalid or the version is unsupported
    """
    with path.open(encoding="utf-8") as f:
        raw_data: Any = yaml.safe_load(f)

    if not isinstance(raw_data, dict):
        raise ValueError(f"Invalid schedule file format: expected dict, got {type(raw_data)}")

    data = cast(dict[str, Any], raw_data)

    version = data.get("version")
    if version is None:
        raise ValueError("Schedule file missing 'version' field")
    if not isinstance(version, int):
        raise ValueError(f"Schedule file version must be int, got {type(version)}")
    if version != SCHEDULE_FILE_VERSION:
        raise ValueError(
            f"Unsupported schedule file version {version}, expected {SCHEDULE_FILE_VERSION}"
        )

    if "week_start" not in data:
        raise ValueError("Schedule file missing 'week_start' field")
    week_start = _parse_date(data["week_start"], "week_start")

    raw_scheduled = data.get("scheduled") or []
    if not isinstance(raw_scheduled, list):
        raise ValueError("Schedule file 'scheduled' field must be a list")

    entries: list[ScheduleEntry] = []
    for index, raw_entry in enumerate(cast(list[Any], raw_scheduled)):
        if not isinstance(raw_entry, dict):
            raise ValueError(f"Scheduled entry {index} must be a dict")
        entry = cast(dict[str, Any], raw_entry)

        missing = [name for name in _REQUIRED_ENTRY_FIELDS if name not in entry]
        if missing:
            raise ValueError(f"Scheduled entry {index} missing {', '.join(missing)}")

        entries.append(
            ScheduleEntry(
                id=str(entry["id"]),
                task_id=str(entry["task_id"]),
                title=str(entry.get("title", "")),
                day_of_week=int(entry["day_of_week"]),
                date=_parse_date(entry["date"], f"scheduled entry {index}"),
                start_time=str(entry["start_time"]),
                end_time=str(entry["end_time"]),
            )
        )

    raw_unplaced = data.get("unplaced") or []
    if not isinstance(raw_unplaced, list):
        raise ValueError("Schedule file 'unplaced' field must be a list")

    return ScheduleFile(
        version=version,
        week_start=week_start,
        scheduled=entries,
        unplaced=[str(task_id) for task_id in cast(list[Any], raw_unplaced)],
    )
