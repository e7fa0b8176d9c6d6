"""Scheduler package - weekly task-to-timeslot allocation.

Pipeline:
- create_week_slots: pristine half-hour grid for 7 days
- mark_fixed_blocks: remove slots taken by recurring commitments
- sort_tasks_by_priority: filter and order tasks
- WeekAllocator: greedy first-fit placement driving find_consecutive_run

get_week_availability reports free time from the fixed blocks alone.
"""

from .allocator import WeekAllocator, schedule_tasks_in_week
from .availability import get_week_availability
from .config import SchedulingConfig
from .core import (
    AllocationResult,
    ScheduledTask,
    WeekAvailability,
    WeekGrid,
    generate_unique_id,
)
from .export import ScheduleFile, read_schedule_file, write_schedule_file
from .occupancy import (
    blocks_for_week,
    get_occupied_slots,
    is_block_valid_for_date,
    mark_fixed_blocks,
    validate_block,
)
from .prioritizer import is_schedulable, sort_tasks_by_priority
from .search import find_consecutive_run, find_consecutive_slots
from .timegrid import (
    calculate_end_time,
    create_week_slots,
    format_day_slots,
    get_date_for_day,
    get_week_start_date,
    minutes_to_time,
    time_to_minutes,
)

__all__ = [
    # Core dataclasses
    "AllocationResult",
    "ScheduledTask",
    "WeekAvailability",
    "WeekGrid",
    # Configuration
    "SchedulingConfig",
    # Grid and time helpers
    "create_week_slots",
    "format_day_slots",
    "time_to_minutes",
    "minutes_to_time",
    "calculate_end_time",
    "get_week_start_date",
    "get_date_for_day",
    "generate_unique_id",
    # Occupancy
    "get_occupied_slots",
    "is_block_valid_for_date",
    "validate_block",
    "mark_fixed_blocks",
    "blocks_for_week",
    # Prioritization and search
    "is_schedulable",
    "sort_tasks_by_priority",
    "find_consecutive_run",
    "find_consecutive_slots",
    # Allocation
    "WeekAllocator",
    "schedule_tasks_in_week",
    "get_week_availability",
    # Schedule files
    "ScheduleFile",
    "read_schedule_file",
    "write_schedule_file",
]
