"""Eligibility filtering and ordering of tasks before allocation."""

from collections.abc import Iterable
from datetime import datetime, timezone

from weekslot.models import Task


def is_schedulable(task: Task) -> bool:
    """A task needs time if it is pending or in progress and has a positive duration."""
    return task.is_active and task.estimated_minutes > 0


def _deadline_key(task: Task) -> datetime:
    # Naive deadlines are read as UTC so they compare with aware ones
    if task.deadline.tzinfo is None:
        return task.deadline.replace(tzinfo=timezone.utc)
    return task.deadline


def sort_tasks_by_priority(tasks: Iterable[Task]) -> list[Task]:
    """Return schedulable tasks in the order the allocator should place them.

    Ordering:
    1. priority, HIGH first
    2. deadline, earliest first (full timestamp)
    3. estimated_minutes, shortest first

    The sort is stable, so tasks equal on all three keys keep their input order.
    """
    eligible = [task for task in tasks if is_schedulable(task)]
    return sorted(
        eligible,
        key=lambda t: (-int(t.priority), _deadline_key(t), t.estimated_minutes),
    )
