"""Weekslot - deterministic weekly task-to-timeslot allocation."""

__version__ = "0.1.0"
