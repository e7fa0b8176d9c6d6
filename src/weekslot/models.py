"""Data models for Weekslot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum, IntEnum


class TaskPriority(IntEnum):
    """Task importance; higher values are scheduled first."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


class TaskStatus(IntEnum):
    """Lifecycle state of a task."""

    PENDING = 0
    IN_PROGRESS = 1
    COMPLETED = 2
    CANCELLED = 3


class TaskCategory(IntEnum):
    """What area of life a task belongs to."""

    STUDY = 0
    WORK = 1
    HOME = 2
    HEALTH = 3
    LEISURE = 4
    OTHER = 5


class TimeBlockType(str, Enum):
    """Kind of recurring commitment."""

    WORK = "work"
    CLASS = "class"
    FIXED = "fixed"  # Personal appointment
    TASK = "task"


# Task states the allocator still has to find time for
ACTIVE_STATUSES = frozenset({TaskStatus.PENDING, TaskStatus.IN_PROGRESS})


@dataclass
class Task:
    """A unit of pending work to be placed on the week."""

    id: str
    title: str
    estimated_minutes: int
    priority: TaskPriority
    deadline: datetime
    status: TaskStatus = TaskStatus.PENDING
    category: TaskCategory = TaskCategory.OTHER
    description: str | None = None

    @property
    def is_active(self) -> bool:
        """True if the task is neither completed nor cancelled."""
        return self.status in ACTIVE_STATUSES


@dataclass(frozen=True)
class FixedBlock:
    """A recurring weekly commitment that removes slots from availability.

    The block covers the half-open interval [start_time, end_time) on
    day_of_week (0=Sunday). valid_from/valid_until bound the calendar dates on
    which the recurrence applies; both are inclusive. is_recurring is kept for
    round-tripping client data only; the validity window applies either way.
    """

    id: str
    title: str
    day_of_week: int
    start_time: str
    end_time: str
    block_type: TimeBlockType = TimeBlockType.FIXED
    is_recurring: bool = True
    valid_from: date | None = None
    valid_until: date | None = None

    @property
    def has_validity_window(self) -> bool:
        """True if either bound is set."""
        return self.valid_from is not None or self.valid_until is not None
