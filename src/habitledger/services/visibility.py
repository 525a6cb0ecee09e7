"""Which habits count on a given day."""

from __future__ import annotations

from ..models.habit import Habit


def is_visible(habit: Habit, as_of: str) -> bool:
    """A deleted habit is visible only on days before its deletion day."""

    return not (habit.deleted and habit.deleted_date is not None and habit.deleted_date <= as_of)


def is_active_for_achievements(habit: Habit, day: str) -> bool:
    """Visible on ``day`` and already created by then."""

    return habit.created_date <= day and is_visible(habit, day)


__all__ = ["is_active_for_achievements", "is_visible"]
