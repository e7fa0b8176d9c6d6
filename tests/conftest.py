"""Pytest configuration and fixtures for weekslot tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date, datetime, timedelta, timezone

import pytest

from weekslot.config import set_config_path
from weekslot.logger import reset_logger
from weekslot.models import (
    FixedBlock,
    Task,
    TaskCategory,
    TaskPriority,
    TaskStatus,
    TimeBlockType,
)

# A Sunday, so day_of_week N falls on WEEK_START + N days
WEEK_START = date(2026, 1, 18)


def make_task(  # noqa: PLR0913 - test factory mirrors Task fields
    task_id: str,
    minutes: int = 60,
    priority: TaskPriority = TaskPriority.MEDIUM,
    deadline: datetime | None = None,
    status: TaskStatus = TaskStatus.PENDING,
    title: str | None = None,
) -> Task:
    """Build a task with sensible defaults (deadline one day after WEEK_START)."""
    return Task(
        id=task_id,
        title=title or task_id,
        estimated_minutes=minutes,
        priority=priority,
        deadline=deadline
        or datetime(2026, 1, 19, 12, 0, tzinfo=timezone.utc),
        status=status,
        category=TaskCategory.OTHER,
    )


def make_block(  # noqa: PLR0913 - test factory mirrors FixedBlock fields
    day: int,
    start: str,
    end: str,
    *,
    block_id: str | None = None,
    valid_from: date | None = None,
    valid_until: date | None = None,
    block_type: TimeBlockType = TimeBlockType.WORK,
) -> FixedBlock:
    """Build a fixed block."""
    return FixedBlock(
        id=block_id or f"block-{day}-{start}",
        title=f"{block_type.value} {start}-{end}",
        day_of_week=day,
        start_time=start,
        end_time=end,
        block_type=block_type,
        valid_from=valid_from,
        valid_until=valid_until,
    )


def deadline_in(days: float) -> datetime:
    """Deadline a number of days after WEEK_START midnight UTC."""
    start = datetime(WEEK_START.year, WEEK_START.month, WEEK_START.day, tzinfo=timezone.utc)
    return start + timedelta(days=days)


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Deterministic id factory: p1, p2, ..."""
    counter = iter(range(1, 10_000))

    def _next() -> str:
        return f"p{next(counter)}"

    return _next


@pytest.fixture(autouse=True)
def _clean_global_state() -> Iterator[None]:
    """Reset logger and CLI config path between tests."""
    yield
    reset_logger()
    set_config_path(None)
