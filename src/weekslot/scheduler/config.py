"""Configuration classes for the scheduling system."""

from typing import Any

from pydantic import BaseModel

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


class SchedulingConfig(BaseModel):
    """Shape of the daily slot grid.

    The defaults give 34 half-hour slots per day, 06:00 to 23:00.
    """

    day_start_hour: int = 6
    day_end_hour: int = 23
    slot_minutes: int = 30

    def model_post_init(self, __context: Any) -> None:
        """Validate configuration after initialization."""
        for name, hour in (
            ("day_start_hour", self.day_start_hour),
            ("day_end_hour", self.day_end_hour),
        ):
            if not 0 <= hour <= HOURS_PER_DAY:
                raise ValueError(f"scheduler.{name} must be between 0 and 24, got {hour}")
        if self.day_start_hour >= self.day_end_hour:
            raise ValueError(
                f"scheduler.day_start_hour ({self.day_start_hour}) must be before "
                f"scheduler.day_end_hour ({self.day_end_hour})"
            )
        if self.slot_minutes <= 0 or MINUTES_PER_HOUR % self.slot_minutes != 0:
            raise ValueError(
                f"scheduler.slot_minutes must evenly divide an hour, got {self.slot_minutes}"
            )

    @property
    def day_start_minutes(self) -> int:
        return self.day_start_hour * MINUTES_PER_HOUR

    @property
    def day_end_minutes(self) -> int:
        return self.day_end_hour * MINUTES_PER_HOUR

    @property
    def slots_per_day(self) -> int:
        return (self.day_end_minutes - self.day_start_minutes) // self.slot_minutes
