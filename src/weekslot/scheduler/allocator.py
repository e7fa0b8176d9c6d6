"""Greedy first-fit allocation of tasks onto the free slots of a week."""

import math
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime

from weekslot.exceptions import InvalidTaskError
from weekslot.logger import checks_enabled, get_logger
from weekslot.models import FixedBlock, Task

from .config import SchedulingConfig
from .core import DAYS_IN_WEEK, AllocationResult, ScheduledTask, WeekGrid, generate_unique_id
from .occupancy import mark_fixed_blocks
from .prioritizer import sort_tasks_by_priority
from .search import find_consecutive_run
from .timegrid import create_week_slots, get_date_for_day, get_week_start_date, minutes_to_time

logger = get_logger()


class WeekAllocator:
    """Places tasks into one week around recurring fixed blocks.

    This allocator:
    1. Builds a fresh slot grid and removes the slots taken by fixed blocks
    2. Orders schedulable tasks by priority, deadline and duration
    3. Gives each task the first run of consecutive free slots, searching
       Sunday (day 0) through Saturday (day 6)
    4. Removes the used slots so later tasks cannot reuse them

    Placement is single-pass: an earlier decision is never revisited, and a
    task that fits nowhere is reported as unplaced rather than raising.
    """

    def __init__(  # noqa: PLR0913 - Keyword-only parameters reduce API complexity
        self,
        fixed_blocks: Iterable[FixedBlock],
        tasks: Iterable[Task],
        week_anchor: date | datetime,
        *,
        config: SchedulingConfig | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        """Initialize the allocator.

        Args:
            fixed_blocks: Recurring commitments that occupy slots
            tasks: All tasks; ineligible ones are filtered out
            week_anchor: Any date in the target week; normalized to its Sunday
            config: Optional grid configuration
            id_factory: Callable minting placement ids (defaults to uuid4)
        """
        self.fixed_blocks = list(fixed_blocks)
        self.tasks = list(tasks)
        self.week_start = get_week_start_date(week_anchor)
        self.config = config or SchedulingConfig()
        self.id_factory = id_factory or generate_unique_id
        self.grid: WeekGrid = {}

    def schedule(self) -> AllocationResult:
        """Run the allocation.

        Returns:
            AllocationResult with placements in processing order, the tasks that
            did not fit, and one warning per unplaced task

        Raises:
            InvalidBlockError: If a fixed block is malformed
        """
        self.grid = mark_fixed_blocks(
            create_week_slots(self.config), self.fixed_blocks, self.week_start, self.config
        )
        result = AllocationResult(scheduled_tasks=[])

        for task in sort_tasks_by_priority(self.tasks):
            placement = self.place_task(task)
            if placement is not None:
                result.scheduled_tasks.append(placement)
                continue

            slots_needed = self.slots_needed(task)
            warning = (
                f"No free time for task '{task.title}' ({task.id}): "
                f"{task.estimated_minutes}min = {slots_needed} slots"
            )
            logger.warning(warning)
            result.unplaced_tasks.append(task)
            result.warnings.append(warning)

        return result

    def slots_needed(self, task: Task) -> int:
        """Number of whole slots a task occupies (duration rounded up)."""
        return math.ceil(task.estimated_minutes / self.config.slot_minutes)

    def place_task(self, task: Task) -> ScheduledTask | None:
        """Place one task in the first day with enough consecutive free slots.

        On success the used slots are removed from the grid.

        Returns:
            The placement, or None if no day has room

        Raises:
            InvalidTaskError: If the task has no positive duration
        """
        if task.estimated_minutes <= 0:
            raise InvalidTaskError(
                f"Task '{task.title}' ({task.id}) has non-positive duration "
                f"{task.estimated_minutes}"
            )
        if not self.grid:
            raise RuntimeError("place_task() called before the grid was built; use schedule()")

        slots_needed = self.slots_needed(task)
        slot_minutes = self.config.slot_minutes

        for day in range(DAYS_IN_WEEK):
            free_slots = self.grid[day]
            start_idx = find_consecutive_run(free_slots, slots_needed, slot_minutes)
            if start_idx is None:
                if checks_enabled():
                    logger.checks(
                        f"  Day {day}: no run of {slots_needed} slots for '{task.title}' "
                        f"({len(free_slots)} free)"
                    )
                continue

            start = free_slots[start_idx]
            end = start + slots_needed * slot_minutes
            del free_slots[start_idx : start_idx + slots_needed]

            placement = ScheduledTask(
                id=self.id_factory(),
                task_id=task.id,
                task=replace(task),
                day_of_week=day,
                start_time=minutes_to_time(start),
                end_time=minutes_to_time(end),
                date=get_date_for_day(self.week_start, day),
            )
            logger.changes(
                f"Placed '{task.title}' on {placement.date} (day {day}) "
                f"{placement.start_time}-{placement.end_time}"
            )
            return placement

        return None


def schedule_tasks_in_week(
    fixed_blocks: Iterable[FixedBlock],
    tasks: Iterable[Task],
    week_anchor: date | datetime,
    *,
    config: SchedulingConfig | None = None,
    id_factory: Callable[[], str] | None = None,
) -> list[ScheduledTask]:
    """Allocate tasks for a week and return only the placements.

    Tasks missing from the result could not be scheduled this week.
    """
    allocator = WeekAllocator(
        fixed_blocks, tasks, week_anchor, config=config, id_factory=id_factory
    )
    return allocator.schedule().scheduled_tasks
