"""Core dataclasses for the scheduling system."""

import uuid
from dataclasses import dataclass, field
from datetime import date

from weekslot.models import Task

# day_of_week -> ascending free slot starts, in minutes since midnight
WeekGrid = dict[int, list[int]]

DAYS_IN_WEEK = 7


def _default_str_list() -> list[str]:
    return []


def _default_task_list() -> list[Task]:
    return []


def generate_unique_id() -> str:
    """Mint an id for a placement."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ScheduledTask:
    """A task that has been placed on the week.

    Never mutated after creation; task holds a copy of the source task as it was
    when the allocation ran.
    """

    id: str
    task_id: str
    task: Task
    day_of_week: int
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM", exclusive
    date: date


@dataclass
class AllocationResult:
    """Outcome of one allocation run."""

    scheduled_tasks: list[ScheduledTask]
    unplaced_tasks: list[Task] = field(default_factory=_default_task_list)
    warnings: list[str] = field(default_factory=_default_str_list)


@dataclass
class WeekAvailability:
    """Free/occupied statistics for a week's grid after fixed blocks."""

    total_slots: int
    occupied_slots: int
    free_slots: int
    free_minutes: int
    occupancy_percentage: int
