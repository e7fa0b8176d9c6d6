"""Pydantic schemas for task and routine documents (YAML or JSON).

Keys may be given in snake_case or in the camelCase used by the web client's
stored JSON (estimatedMinutes, dayOfWeek, validFrom, ...).
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import TaskCategory, TaskPriority, TaskStatus, TimeBlockType


def _coerce_enum_name(enum_cls: type[Enum], v: Any) -> Any:
    """Accept enum members by name ("HIGH", "in-progress") as well as by value."""
    if isinstance(v, str):
        stripped = v.strip()
        if stripped.isdigit():
            return int(stripped)
        key = stripped.upper().replace("-", "_").replace(" ", "_")
        if key in enum_cls.__members__:
            return enum_cls.__members__[key]
    return v


def _coerce_id(v: Any) -> str | None:
    if v is None or v == "":
        return None
    return str(v)


class TaskSchema(BaseModel):
    """Schema for a single task record."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    title: str
    description: str | None = None
    category: TaskCategory = TaskCategory.OTHER
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    estimated_minutes: int = Field(
        validation_alias=AliasChoices("estimated_minutes", "estimatedMinutes")
    )
    deadline: datetime

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        """Numeric ids become strings."""
        return _coerce_id(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Any:
        """Allow category names."""
        return _coerce_enum_name(TaskCategory, v)

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> Any:
        """Allow priority names."""
        return _coerce_enum_name(TaskPriority, v)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> Any:
        """Allow status names."""
        return _coerce_enum_name(TaskStatus, v)

    @field_validator("deadline", mode="before")
    @classmethod
    def coerce_date_deadline(cls, v: Any) -> Any:
        """A bare date means the start of that day."""
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min)
        return v


class BlockSchema(BaseModel):
    """Schema for a fixed block, possibly repeated on several days."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    title: str = ""
    type: TimeBlockType | None = None
    day_of_week: int | None = Field(
        default=None, validation_alias=AliasChoices("day_of_week", "dayOfWeek")
    )
    days_of_week: list[int] | None = Field(
        default=None, validation_alias=AliasChoices("days_of_week", "daysOfWeek")
    )
    start_time: str = Field(validation_alias=AliasChoices("start_time", "startTime"))
    end_time: str = Field(validation_alias=AliasChoices("end_time", "endTime"))
    is_recurring: bool = Field(
        default=True, validation_alias=AliasChoices("is_recurring", "isRecurring")
    )
    valid_from: date | None = Field(
        default=None, validation_alias=AliasChoices("valid_from", "validFrom")
    )
    valid_until: date | None = Field(
        default=None, validation_alias=AliasChoices("valid_until", "validUntil")
    )
    enabled: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        """Numeric ids become strings."""
        return _coerce_id(v)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> Any:
        """Accept type names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def coerce_sexagesimal(cls, v: Any) -> Any:
        """Undo YAML 1.1 reading unquoted 10:30 as the base-60 integer 630."""
        if isinstance(v, int) and not isinstance(v, bool):
            hours, minutes = divmod(v, 60)
            return f"{hours:02d}:{minutes:02d}"
        return v

    @field_validator("valid_from", "valid_until", mode="before")
    @classmethod
    def coerce_validity_date(cls, v: Any) -> Any:
        """Empty strings mean no bound; timestamps keep only their date."""
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    @model_validator(mode="after")
    def check_days(self) -> BlockSchema:
        """Exactly one of day_of_week / days_of_week must be given."""
        if self.day_of_week is None and not self.days_of_week:
            raise ValueError("Block needs 'day_of_week' or a non-empty 'days_of_week'")
        if self.day_of_week is not None and self.days_of_week:
            raise ValueError("Cannot specify both 'day_of_week' and 'days_of_week'")
        return self

    def expanded_days(self) -> list[int]:
        """Days this entry applies to, in ascending order without duplicates."""
        if self.day_of_week is not None:
            return [self.day_of_week]
        return sorted(set(self.days_of_week or []))


class TaskDocumentSchema(BaseModel):
    """Schema for a task document."""

    tasks: list[TaskSchema] = Field(default_factory=list)


class RoutineDocumentSchema(BaseModel):
    """Schema for a routine document.

    Besides a flat block list, the three sections produced by onboarding
    (work hours, class hours, other commitments) are accepted.
    """

    blocks: list[BlockSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices("blocks", "weekly_routine", "weeklyRoutine"),
    )
    work_schedule: list[BlockSchema] = Field(
        default_factory=list, validation_alias=AliasChoices("work_schedule", "workSchedule")
    )
    class_schedule: list[BlockSchema] = Field(
        default_factory=list, validation_alias=AliasChoices("class_schedule", "classSchedule")
    )
    fixed_commitments: list[BlockSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices("fixed_commitments", "fixedCommitments"),
    )
