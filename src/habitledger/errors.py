"""Exceptions raised by the habit ledger."""

from __future__ import annotations

from typing import Optional


class HabitLedgerError(Exception):
    """Base class for all habit ledger errors."""


class NotFoundError(HabitLedgerError, LookupError):
    """A referenced habit or to-do item does not exist."""

    def __init__(self, item_id: str, kind: str = "Habit") -> None:
        super().__init__(f"{kind} not found: {item_id}")
        self.item_id = item_id
        self.kind = kind


class InvalidDateError(HabitLedgerError, ValueError):
    """A day string is not a valid ``YYYY-MM-DD`` calendar date."""

    def __init__(self, value: object, reason: Optional[str] = None) -> None:
        message = f"Invalid date {value!r}; expected YYYY-MM-DD"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.value = value


class StorageFailureError(HabitLedgerError):
    """The transaction could not be committed; nothing was persisted."""


__all__ = [
    "HabitLedgerError",
    "InvalidDateError",
    "NotFoundError",
    "StorageFailureError",
]
