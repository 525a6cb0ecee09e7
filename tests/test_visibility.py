"""Tests for the habit visibility predicates and their SQL counterparts."""

from __future__ import annotations

import pytest

from habitledger.models import Habit
from habitledger.services.visibility import is_active_for_achievements, is_visible


def _habit(created: str = "2024-01-05", deleted_date: str | None = None) -> Habit:
    return Habit(
        id="abc",
        name="Read",
        created_date=created,
        deleted=deleted_date is not None,
        deleted_date=deleted_date,
        sort_order=0,
    )


class TestIsVisible:
    def test_live_habit_is_always_visible(self):
        habit = _habit()
        assert is_visible(habit, "2023-01-01")
        assert is_visible(habit, "2030-01-01")

    def test_deleted_habit_visible_only_before_deletion_day(self):
        habit = _habit(deleted_date="2024-01-10")
        assert is_visible(habit, "2024-01-09")
        assert not is_visible(habit, "2024-01-10")
        assert not is_visible(habit, "2024-01-11")


class TestIsActiveForAchievements:
    def test_requires_creation_on_or_before_day(self):
        habit = _habit(created="2024-01-05")
        assert not is_active_for_achievements(habit, "2024-01-04")
        assert is_active_for_achievements(habit, "2024-01-05")

    def test_deleted_habit_is_inactive_from_deletion_day(self):
        habit = _habit(created="2024-01-05", deleted_date="2024-01-10")
        assert is_active_for_achievements(habit, "2024-01-09")
        assert not is_active_for_achievements(habit, "2024-01-10")


@pytest.mark.parametrize("day", ["2024-01-01", "2024-01-05", "2024-01-09", "2024-01-10", "2024-02-01"])
def test_repository_filters_agree_with_predicates(store, habit_factory, day):
    habits = [
        habit_factory(name="Old", created_date="2023-12-01"),
        habit_factory(name="New", created_date="2024-01-05"),
        habit_factory(name="Gone", created_date="2023-12-01", deleted_date="2024-01-10"),
    ]

    visible = [h.id for h in store.habits.list_visible(day)]
    active = [h.id for h in store.habits.list_active(day)]

    assert visible == [h.id for h in habits if is_visible(h, day)]
    assert active == [h.id for h in habits if is_active_for_achievements(h, day)]
