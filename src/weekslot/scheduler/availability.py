"""Free-time statistics for a week, independent of tasks."""

import math
from collections.abc import Iterable
from datetime import date, datetime

from weekslot.models import FixedBlock

from .config import SchedulingConfig
from .core import DAYS_IN_WEEK, WeekAvailability
from .occupancy import mark_fixed_blocks
from .timegrid import count_slots, create_week_slots, get_week_start_date


def get_week_availability(
    fixed_blocks: Iterable[FixedBlock],
    week_anchor: date | datetime,
    config: SchedulingConfig | None = None,
) -> WeekAvailability:
    """Report how much of the week the fixed blocks leave free.

    Builds its own pristine grid, so it never interferes with an allocation.
    """
    cfg = config or SchedulingConfig()
    grid = mark_fixed_blocks(
        create_week_slots(cfg), fixed_blocks, get_week_start_date(week_anchor), cfg
    )

    total_slots = DAYS_IN_WEEK * cfg.slots_per_day
    free_slots = count_slots(grid)
    occupied_slots = total_slots - free_slots

    return WeekAvailability(
        total_slots=total_slots,
        occupied_slots=occupied_slots,
        free_slots=free_slots,
        free_minutes=free_slots * cfg.slot_minutes,
        # Half rounds up
        occupancy_percentage=math.floor(occupied_slots / total_slots * 100 + 0.5),
    )
