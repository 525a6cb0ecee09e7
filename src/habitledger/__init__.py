"""Habit streaks and an achievement ledger that survives history edits."""

from __future__ import annotations

from .config import BaseConfig, TestConfig
from .errors import HabitLedgerError, InvalidDateError, NotFoundError, StorageFailureError

__all__ = [
    "BaseConfig",
    "HabitLedgerError",
    "InvalidDateError",
    "NotFoundError",
    "StorageFailureError",
    "TestConfig",
]
