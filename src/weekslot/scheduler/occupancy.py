"""Removal of fixed-block slots from the weekly grid."""

from collections.abc import Iterable
from datetime import date, datetime

from weekslot.exceptions import InvalidBlockError
from weekslot.logger import debug_enabled, get_logger
from weekslot.models import FixedBlock

from .config import SchedulingConfig
from .core import DAYS_IN_WEEK, WeekGrid
from .timegrid import (
    as_date,
    get_date_for_day,
    get_week_start_date,
    minutes_to_time,
    time_to_minutes,
)

logger = get_logger()


def get_occupied_slots(start_time: str, end_time: str, slot_minutes: int = 30) -> list[str]:
    """List the slots a [start_time, end_time) block covers.

    The end time itself is not occupied:

        get_occupied_slots("09:00", "12:00")
        -> ['09:00', '09:30', '10:00', '10:30', '11:00', '11:30']
    """
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    return [minutes_to_time(m) for m in range(start, end, slot_minutes)]


def is_block_valid_for_date(block: FixedBlock, on_date: date | datetime) -> bool:
    """Check whether a block's recurrence applies on a calendar date.

    Only the date part is compared, for the bounds as well as on_date. Blocks
    without bounds always apply.
    """
    if not block.has_validity_window:
        return True
    on_date = as_date(on_date)
    if block.valid_from is not None and on_date < as_date(block.valid_from):
        return False
    return not (block.valid_until is not None and on_date > as_date(block.valid_until))


def validate_block(block: FixedBlock, config: SchedulingConfig | None = None) -> tuple[int, int]:
    """Check a block is usable on the grid and return its (start, end) in minutes.

    Raises:
        InvalidBlockError: If the day is outside 0-6, a time does not parse or
            is off the slot grid, or the block does not end after it starts
    """
    slot_minutes = (config or SchedulingConfig()).slot_minutes

    if not isinstance(block.day_of_week, int) or not 0 <= block.day_of_week < DAYS_IN_WEEK:
        raise InvalidBlockError(
            f"Block '{block.title}' ({block.id}) has invalid day_of_week {block.day_of_week!r}; "
            "expected 0 (Sunday) to 6 (Saturday)"
        )

    try:
        start = time_to_minutes(block.start_time)
        end = time_to_minutes(block.end_time)
    except ValueError as e:
        raise InvalidBlockError(f"Block '{block.title}' ({block.id}): {e}") from e

    for label, value in (("start_time", block.start_time), ("end_time", block.end_time)):
        if time_to_minutes(value) % slot_minutes != 0:
            raise InvalidBlockError(
                f"Block '{block.title}' ({block.id}) {label} {value} is not on the "
                f"{slot_minutes}-minute grid"
            )

    if end <= start:
        raise InvalidBlockError(
            f"Block '{block.title}' ({block.id}) ends at {block.end_time}, "
            f"which is not after its start {block.start_time}"
        )

    return start, end


def mark_fixed_blocks(
    grid: WeekGrid,
    fixed_blocks: Iterable[FixedBlock],
    week_start: date,
    config: SchedulingConfig | None = None,
) -> WeekGrid:
    """Remove every slot covered by a fixed block from the grid.

    Each block is checked against the calendar date its day falls on in the
    week starting at week_start; blocks outside their validity window leave the
    day untouched. The grid is mutated in place and also returned.

    Raises:
        InvalidBlockError: If any block is malformed (checked before the grid
            is touched)
    """
    ranges = [(block, *validate_block(block, config)) for block in fixed_blocks]

    for block, start, end in ranges:
        day = block.day_of_week
        on_date = get_date_for_day(week_start, day)
        if not is_block_valid_for_date(block, on_date):
            logger.debug(
                f"  Skipping block '{block.title}' on {on_date}: outside "
                f"{block.valid_from or '-'}..{block.valid_until or '-'}"
            )
            continue

        grid[day] = [slot for slot in grid[day] if not start <= slot < end]

    if debug_enabled():
        for day in range(DAYS_IN_WEEK):
            logger.debug(f"  Day {day}: {len(grid[day])} free slots after fixed blocks")

    return grid


def blocks_for_week(
    fixed_blocks: Iterable[FixedBlock],
    week_anchor: date | datetime,
    config: SchedulingConfig | None = None,
) -> dict[int, list[FixedBlock]]:
    """Group the blocks that apply in a week by day, sorted by start time.

    Days without blocks map to an empty list.

    Raises:
        InvalidBlockError: If any block is malformed
    """
    week_start = get_week_start_date(week_anchor)
    blocks = list(fixed_blocks)
    for block in blocks:
        validate_block(block, config)
    by_day: dict[int, list[FixedBlock]] = {}
    for day in range(DAYS_IN_WEEK):
        on_date = get_date_for_day(week_start, day)
        day_blocks = [
            b for b in blocks if b.day_of_week == day and is_block_valid_for_date(b, on_date)
        ]
        by_day[day] = sorted(day_blocks, key=lambda b: time_to_minutes(b.start_time))
    return by_day
