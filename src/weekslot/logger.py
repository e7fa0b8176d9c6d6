"""Logging configuration for Weekslot with custom verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels sitting between the standard ones
CHANGES_LEVEL = 25  # Between INFO (20) and WARNING (30) - placements, verbosity 1
CHECKS_LEVEL = 15  # Between DEBUG (10) and INFO (20) - per-day search, verbosity 2

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0  # Errors only
VERBOSITY_CHANGES = 1  # Placements and unplaced-task warnings
VERBOSITY_CHECKS = 2  # Every day searched for every task
VERBOSITY_DEBUG = 3  # Grid contents

LOGGER_NAME = "weekslot"


class WeekslotLogger(logging.Logger):
    """Logger with semantic verbosity methods.

    - changes(): verbosity 1 - a task was placed on the grid
    - checks(): verbosity 2 - a day was searched for a task
    - debug(): verbosity 3 - free-slot lists and grid details
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log changes (verbosity level 1)."""
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log checks (verbosity level 2)."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> WeekslotLogger:
    """Return the shared weekslot logger.

    Configure it with setup_logger() before the first scheduling run; until then
    only errors are emitted.
    """
    logging.setLoggerClass(WeekslotLogger)
    logger = logging.getLogger(LOGGER_NAME)
    assert isinstance(logger, WeekslotLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the weekslot logger for a verbosity level.

    Safe to call repeatedly; previous handlers are dropped.

    Args:
        verbosity: 0=silent (errors only), 1=changes, 2=checks, 3=debug
        stream: Output stream, defaults to sys.stderr
    """
    logger = get_logger()
    logger.handlers.clear()

    level_map = {
        VERBOSITY_SILENT: logging.ERROR,
        VERBOSITY_CHANGES: CHANGES_LEVEL,
        VERBOSITY_CHECKS: CHECKS_LEVEL,
        VERBOSITY_DEBUG: logging.DEBUG,
    }
    logger.setLevel(level_map.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and return to errors-only, mainly for tests."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def changes_enabled() -> bool:
    """True when placements will be logged (verbosity >= 1)."""
    return get_logger().isEnabledFor(CHANGES_LEVEL)


def checks_enabled() -> bool:
    """True when per-day checks will be logged (verbosity >= 2)."""
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    """True when debug output will be logged (verbosity >= 3)."""
    return get_logger().isEnabledFor(logging.DEBUG)
