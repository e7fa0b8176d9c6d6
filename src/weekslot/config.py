"""Configuration file loading (weekslot_config.yaml).

The file is optional. When present it may carry a 'scheduler' section with
the grid shape and default paths for the task and routine documents:

    scheduler:
      day_start_hour: 6
      day_end_hour: 23
      slot_minutes: 30
    tasks_file: tasks.yaml
    routine_file: routine.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .scheduler.config import SchedulingConfig

DEFAULT_CONFIG_FILENAME = "weekslot_config.yaml"


class WeekslotConfig(BaseModel):
    """Top-level configuration."""

    scheduler: SchedulingConfig = Field(default_factory=SchedulingConfig)
    tasks_file: Path | None = None
    routine_file: Path | None = None


class _ConfigState:
    """Config path chosen on the command line (--config)."""

    def __init__(self) -> None:
        self.path: Path | None = None


_state = _ConfigState()


def get_config_path() -> Path | None:
    """Get the config path set by the CLI, if any."""
    return _state.path


def set_config_path(path: Path | None) -> None:
    """Set the config path for subsequent discover_config() calls."""
    _state.path = path


def load_config(config_path: Path | str) -> WeekslotConfig:
    """Load configuration from a YAML file.

    Relative document paths are resolved against the config file's directory.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Configuration file must contain a mapping")

    # pydantic's ValidationError is a ValueError
    config = WeekslotConfig.model_validate(data)

    base_dir = config_path.parent
    for name in ("tasks_file", "routine_file"):
        value: Path | None = getattr(config, name)
        if value is not None and not value.is_absolute():
            setattr(config, name, base_dir / value)

    return config


def discover_config(config_path: Path | None = None) -> WeekslotConfig:
    """Find and load configuration, falling back to defaults.

    Search order:
    1. Explicit config_path argument
    2. Global path set via CLI --config
    3. ./weekslot_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    global_path = get_config_path()
    if global_path is not None:
        return load_config(global_path)

    cwd_config = Path(DEFAULT_CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return WeekslotConfig()
