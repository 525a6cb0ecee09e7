"""Tests for the SQLModel repositories behind TrackerStore."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from habitledger.infra.repositories.store import TrackerStore
from habitledger.models import Achievement, AchievementType, Habit, Todo


class TestHabitRepository:
    def test_next_sort_order_starts_at_zero(self, store, habit_factory):
        assert store.habits.next_sort_order() == 0
        habit_factory()
        habit_factory()
        assert store.habits.next_sort_order() == 2

    def test_list_all_includes_tombstones_in_display_order(self, store, habit_factory):
        a = habit_factory(name="A")
        b = habit_factory(name="B", deleted_date="2024-01-02")

        assert [h.id for h in store.habits.list_all()] == [a.id, b.id]
        assert [h.id for h in store.habits.list_not_deleted()] == [a.id]

    def test_get_by_id_missing_returns_none(self, store):
        assert store.habits.get_by_id("missing") is None


class TestCompletionRepository:
    def test_add_is_insert_if_absent(self, store, habit_factory):
        habit = habit_factory()

        assert store.completions.add("2024-01-01", habit.id) is True
        assert store.completions.add("2024-01-01", habit.id) is False
        assert store.completions.exists("2024-01-01", habit.id)
        assert len(store.completions.list_all()) == 1

    def test_remove_missing_is_a_no_op(self, store, habit_factory):
        habit = habit_factory()

        assert store.completions.remove("2024-01-01", habit.id) is False
        store.completions.add("2024-01-01", habit.id)
        assert store.completions.remove("2024-01-01", habit.id) is True
        assert not store.completions.exists("2024-01-01", habit.id)


class TestAchievementRepository:
    def test_global_upsert_does_not_duplicate(self, store):
        repo = store.achievements

        assert repo.upsert(AchievementType.PERFECT_DAY, None, "2024-01-01") is True
        assert repo.upsert(AchievementType.PERFECT_DAY, None, "2024-01-01") is False
        assert len(repo.list_all()) == 1

    def test_per_habit_and_global_rows_are_distinct(self, store, habit_factory):
        habit = habit_factory()
        repo = store.achievements

        repo.upsert(AchievementType.STREAK_7, habit.id, "2024-01-07")
        repo.upsert(AchievementType.STREAK_7, None, "2024-01-07")

        assert {(a.type, a.habit_id) for a in repo.list_all()} == {
            ("streak_7", habit.id),
            ("streak_7", None),
        }

    def test_delete_matching_respects_range_and_scope(self, store, habit_factory):
        habit = habit_factory()
        repo = store.achievements
        for day in ("2024-01-06", "2024-01-07", "2024-01-10", "2024-01-14"):
            repo.upsert(AchievementType.STREAK_7, habit.id, day)
        repo.upsert(AchievementType.STREAK_7, None, "2024-01-07")

        removed = repo.delete_matching(
            AchievementType.STREAK_7, habit_id=habit.id, start="2024-01-07", end="2024-01-13"
        )

        assert removed == 2
        assert sorted((a.habit_id is None, a.earned_date) for a in repo.list_all()) == [
            (False, "2024-01-06"),
            (False, "2024-01-14"),
            (True, "2024-01-07"),
        ]

    def test_delete_matching_single_day(self, store):
        repo = store.achievements
        repo.upsert(AchievementType.PERFECT_DAY, None, "2024-01-01")
        repo.upsert(AchievementType.PERFECT_DAY, None, "2024-01-02")

        assert repo.delete_matching(AchievementType.PERFECT_DAY, habit_id=None, start="2024-01-02") == 1
        assert [a.earned_date for a in repo.list_all()] == ["2024-01-01"]

    def test_summary_rows_group_by_scope(self, store, habit_factory):
        habit = habit_factory()
        repo = store.achievements
        repo.upsert(AchievementType.STREAK_7, habit.id, "2024-01-07")
        repo.upsert(AchievementType.STREAK_7, habit.id, "2024-01-09")
        repo.upsert(AchievementType.PERFECT_DAY, None, "2024-01-03")

        per_habit = repo.summary_rows(per_habit=True)
        overall = repo.summary_rows(per_habit=False)

        assert [(r.type, r.habit_id, r.count, r.latest_date) for r in per_habit] == [
            ("streak_7", habit.id, 2, "2024-01-09")
        ]
        assert [(r.type, r.habit_id, r.count, r.latest_date) for r in overall] == [
            ("perfect_day", None, 1, "2024-01-03")
        ]


class TestAchievementSchema:
    """Uniqueness holds in the database itself, not only in ``upsert``."""

    def test_duplicate_global_row_is_rejected(self, session_factory):
        with pytest.raises(IntegrityError):
            with session_factory() as session:
                session.add(Achievement(type="perfect_day", habit_id=None, earned_date="2024-01-01"))
                session.flush()
                session.add(Achievement(type="perfect_day", habit_id=None, earned_date="2024-01-01"))
                session.flush()

    def test_duplicate_per_habit_row_is_rejected(self, session_factory):
        with pytest.raises(IntegrityError):
            with session_factory() as session:
                session.add(Habit(id="h001", name="Read", created_date="2024-01-01", sort_order=0))
                session.flush()
                for _ in range(2):
                    session.add(Achievement(type="streak_7", habit_id="h001", earned_date="2024-01-07"))
                    session.flush()

    def test_global_and_per_habit_rows_coexist(self, session_factory):
        with session_factory() as session:
            session.add(Habit(id="h001", name="Read", created_date="2024-01-01", sort_order=0))
            session.flush()
            session.add(Achievement(type="streak_7", habit_id="h001", earned_date="2024-01-07"))
            session.add(Achievement(type="streak_7", habit_id=None, earned_date="2024-01-07"))
            session.add(Achievement(type="streak_7", habit_id=None, earned_date="2024-01-08"))

        with session_factory() as session:
            assert len(TrackerStore(session).achievements.list_all()) == 3


class TestTodoRepository:
    def _todo(self, store, todo_id: str, list_name: str, created_date: str = "2024-01-01") -> Todo:
        return store.todos.create(
            Todo(id=todo_id, list_name=list_name, name=f"Item {todo_id}", created_date=created_date)
        )

    def test_list_for_keeps_lists_apart(self, store):
        self._todo(store, "t2", "work", "2024-01-02")
        self._todo(store, "t1", "work", "2024-01-01")
        self._todo(store, "t3", "home")

        assert [t.id for t in store.todos.list_for("work")] == ["t1", "t2"]
        assert [t.id for t in store.todos.list_for("home")] == ["t3"]

    def test_remove_requires_the_matching_list(self, store):
        self._todo(store, "t1", "work")

        assert store.todos.remove("home", "t1") is False
        assert store.todos.get_by_id("t1") is not None
        assert store.todos.remove("work", "t1") is True
        assert store.todos.get_by_id("t1") is None
        assert store.todos.remove("work", "t1") is False

    def test_unknown_list_violates_the_check_constraint(self, session_factory):
        with pytest.raises(IntegrityError):
            with session_factory() as session:
                session.add(Todo(id="t1", list_name="garden", name="Weed", created_date="2024-01-01"))
                session.flush()
