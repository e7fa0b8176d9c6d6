"""Weekly slot grid and clock-time utilities.

Slots are handled internally as integer minutes since midnight and only turned
into zero-padded "HH:MM" strings at the edges (input parsing and output).
"""

import re
from datetime import date, datetime, timedelta

from .config import MINUTES_PER_HOUR, SchedulingConfig
from .core import DAYS_IN_WEEK, WeekGrid

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_MAX_MINUTES = 24 * MINUTES_PER_HOUR

_DEFAULT_CONFIG = SchedulingConfig()


def time_to_minutes(time: str) -> int:
    """Convert "HH:MM" to minutes since midnight.

    "24:00" is accepted so a block may run to the end of the day.

    Raises:
        ValueError: If the string is not a valid clock time
    """
    match = _TIME_RE.match(time.strip())
    if not match:
        raise ValueError(f"Invalid time '{time}': expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    total = hours * MINUTES_PER_HOUR + minutes
    if minutes >= MINUTES_PER_HOUR or total > _MAX_MINUTES:
        raise ValueError(f"Invalid time '{time}': out of range")
    return total


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as zero-padded "HH:MM"."""
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{mins:02d}"


def calculate_end_time(start_time: str, duration_minutes: int) -> str:
    """Return the clock time duration_minutes after start_time."""
    return minutes_to_time(time_to_minutes(start_time) + duration_minutes)


def day_slot_starts(config: SchedulingConfig | None = None) -> list[int]:
    """All slot starts of one pristine day, in minutes."""
    cfg = config or _DEFAULT_CONFIG
    return list(range(cfg.day_start_minutes, cfg.day_end_minutes, cfg.slot_minutes))


def create_week_slots(config: SchedulingConfig | None = None) -> WeekGrid:
    """Build a fresh grid with every slot of every day free.

    With the default configuration each of the 7 days holds 34 slots, from
    06:00 up to 22:30 (the last one ends at 23:00), 238 in total.
    """
    return {day: day_slot_starts(config) for day in range(DAYS_IN_WEEK)}


def format_day_slots(grid: WeekGrid, day_of_week: int) -> list[str]:
    """Return one day's free slots as "HH:MM" labels."""
    return [minutes_to_time(m) for m in grid[day_of_week]]


def count_slots(grid: WeekGrid) -> int:
    return sum(len(slots) for slots in grid.values())


def as_date(value: date | datetime) -> date:
    """Drop the time of day from a datetime; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def get_week_start_date(anchor: date | datetime) -> date:
    """Return the Sunday that starts the week containing anchor.

    Examples:
        2026-01-22 (Thursday) -> 2026-01-18
        2026-01-18 (Sunday) -> 2026-01-18
    """
    anchor_date = as_date(anchor)
    # date.weekday() is Monday=0; shift so Sunday=0
    days_since_sunday = (anchor_date.weekday() + 1) % DAYS_IN_WEEK
    return anchor_date - timedelta(days=days_since_sunday)


def get_date_for_day(week_start: date, day_of_week: int) -> date:
    """Calendar date of day_of_week (0=Sunday) in the week starting at week_start."""
    return week_start + timedelta(days=day_of_week)
