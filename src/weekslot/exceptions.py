"""Custom exceptions for Weekslot."""


class WeekslotError(Exception):
    """Base exception for all Weekslot errors."""

    pass


class ValidationError(WeekslotError):
    """Raised when validation fails."""

    pass


class InvalidBlockError(ValidationError):
    """Raised when a fixed block cannot be placed on the weekly grid."""

    pass


class InvalidTaskError(ValidationError):
    """Raised when a task is structurally unusable for scheduling."""

    pass


class ParseError(WeekslotError):
    """Raised when a YAML or JSON document cannot be parsed."""

    pass
