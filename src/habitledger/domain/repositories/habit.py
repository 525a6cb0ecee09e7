"""Habit and completion repository protocols."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.habit import Completion, Habit


class HabitRepository(Protocol):
    """Repository for habit rows. Habits are tombstoned, never removed."""

    def get_by_id(self, habit_id: str) -> Optional[Habit]:
        """Retrieve a habit by ID, deleted or not."""
        ...

    def list_all(self) -> list[Habit]:
        """All habits in display order, including deleted ones."""
        ...

    def list_visible(self, as_of: str) -> list[Habit]:
        """Habits not deleted on or before ``as_of``, in display order."""
        ...

    def list_active(self, day: str) -> list[Habit]:
        """Visible habits created on or before ``day``, in display order."""
        ...

    def list_not_deleted(self) -> list[Habit]:
        """Habits without a tombstone, in display order."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Insert a new habit."""
        ...

    def update(self, habit: Habit) -> Habit:
        """Persist changes to an existing habit."""
        ...

    def next_sort_order(self) -> int:
        """One past the current maximum display order (0 when empty)."""
        ...


class CompletionRepository(Protocol):
    """Repository for (date, habit) completion facts."""

    def exists(self, day: str, habit_id: str) -> bool:
        """Whether the habit was completed on ``day``."""
        ...

    def add(self, day: str, habit_id: str) -> bool:
        """Record a completion; returns False if it was already there."""
        ...

    def remove(self, day: str, habit_id: str) -> bool:
        """Drop a completion; returns False if there was none."""
        ...

    def list_all(self) -> list[Completion]:
        """Every completion, ordered by date then habit."""
        ...
