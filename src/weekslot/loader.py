"""Loading of task and routine documents into domain models."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidTaskError, ParseError, ValidationError
from .models import FixedBlock, Task, TimeBlockType
from .scheduler.config import SchedulingConfig
from .scheduler.core import generate_unique_id
from .scheduler.occupancy import validate_block
from .schemas import BlockSchema, RoutineDocumentSchema, TaskDocumentSchema

# Title used for onboarding entries that do not name themselves
_SECTION_TITLES = {
    TimeBlockType.WORK: "Work",
    TimeBlockType.CLASS: "Class",
    TimeBlockType.FIXED: "Commitment",
    TimeBlockType.TASK: "Task",
}


def read_document(path: Path | str) -> Any:
    """Read a YAML (or JSON) document.

    Raises:
        ParseError: If the file is missing or not valid YAML/JSON
    """
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse {path}: {e}") from e


def parse_tasks(data: Any) -> list[Task]:
    """Convert a loaded task document into Task objects.

    The document is either a mapping with a 'tasks' list or a bare list.
    Tasks without an id get a generated one. Input order is preserved.

    Raises:
        ParseError: If the document has the wrong shape
        InvalidTaskError: If a task record fails validation
    """
    if data is None:
        return []
    if isinstance(data, list):
        data = {"tasks": data}
    if not isinstance(data, dict):
        raise ParseError("Task document must be a mapping with a 'tasks' list, or a list")

    try:
        document = TaskDocumentSchema.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidTaskError(f"Invalid task document: {e}") from e

    return [
        Task(
            id=entry.id or generate_unique_id(),
            title=entry.title,
            estimated_minutes=entry.estimated_minutes,
            priority=entry.priority,
            deadline=entry.deadline,
            status=entry.status,
            category=entry.category,
            description=entry.description,
        )
        for entry in document.tasks
    ]


def _expand_block(entry: BlockSchema, default_type: TimeBlockType) -> list[FixedBlock]:
    """Turn one entry into one FixedBlock per day it covers."""
    if not entry.enabled:
        return []

    block_type = entry.type or default_type
    title = entry.title or _SECTION_TITLES[block_type]
    days = entry.expanded_days()
    base_id = entry.id or generate_unique_id()

    return [
        FixedBlock(
            id=base_id if entry.day_of_week is not None else f"{base_id}-{day}",
            title=title,
            day_of_week=day,
            start_time=entry.start_time,
            end_time=entry.end_time,
            block_type=block_type,
            is_recurring=entry.is_recurring,
            valid_from=entry.valid_from,
            valid_until=entry.valid_until,
        )
        for day in days
    ]


def parse_routine(data: Any, config: SchedulingConfig | None = None) -> list[FixedBlock]:
    """Convert a loaded routine document into validated FixedBlock objects.

    Sections are read in the order blocks, work_schedule, class_schedule,
    fixed_commitments. Entries with enabled: false are dropped.

    Raises:
        ParseError: If the document has the wrong shape
        ValidationError: If an entry fails schema validation
        InvalidBlockError: If a block cannot be placed on the grid
    """
    if data is None:
        return []
    if isinstance(data, list):
        data = {"blocks": data}
    if not isinstance(data, dict):
        raise ParseError("Routine document must be a mapping with a 'blocks' list, or a list")

    try:
        document = RoutineDocumentSchema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid routine document: {e}") from e

    sections = [
        (document.blocks, TimeBlockType.FIXED),
        (document.work_schedule, TimeBlockType.WORK),
        (document.class_schedule, TimeBlockType.CLASS),
        (document.fixed_commitments, TimeBlockType.FIXED),
    ]

    blocks: list[FixedBlock] = []
    for entries, default_type in sections:
        for entry in entries:
            blocks.extend(_expand_block(entry, default_type))

    for block in blocks:
        validate_block(block, config)

    return blocks


def load_tasks(path: Path | str) -> list[Task]:
    """Load tasks from a YAML/JSON file."""
    return parse_tasks(read_document(path))


def load_routine(path: Path | str, config: SchedulingConfig | None = None) -> list[FixedBlock]:
    """Load fixed blocks from a YAML/JSON routine file."""
    return parse_routine(read_document(path), config)
