"""Habit and to-do management: the collaborator that owns habit, completion and to-do rows."""

from __future__ import annotations

import secrets
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..errors import NotFoundError, StorageFailureError
from ..infra.database import SessionFactory
from ..infra.repositories.store import TrackerStore
from ..logging_config import get_logger
from ..models.habit import Habit
from ..models.todo import Todo, TodoList
from .achievements import (
    AchievementSummary,
    CompletionToggled,
    ToggleOutcome,
    achievements_summary,
    apply_toggle,
)
from .dates import parse_day
from .streaks import HabitStreak, streaks_as_of

logger = get_logger(__name__)

MAX_NAME_LENGTH = 80


def _new_id(taken: Callable[[str], bool]) -> str:
    candidate = secrets.token_hex(4)
    while taken(candidate):
        candidate = secrets.token_hex(4)
    return candidate


def _list_name(value: str) -> str:
    try:
        return TodoList(value).value
    except ValueError as exc:
        choices = ", ".join(item.value for item in TodoList)
        raise ValueError(f"Unknown list {value!r}; expected one of: {choices}") from exc


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Name is required")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValueError(f"Name must be at most {MAX_NAME_LENGTH} characters")
    return cleaned


@dataclass(frozen=True)
class DayEntry:
    """A habit as shown on a given day."""

    habit_id: str
    name: str
    completed: bool
    deleted: bool

    def to_dict(self) -> dict:
        return {
            "id": self.habit_id,
            "name": self.name,
            "completed": self.completed,
            "deleted": self.deleted,
        }


class HabitTracker:
    """Entry point for callers; every method runs in its own transaction."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    @contextmanager
    def _transaction(self, action: str) -> Iterator[TrackerStore]:
        try:
            with self.session_factory() as session:
                yield TrackerStore(session)
        except SQLAlchemyError as exc:
            logger.exception("Storage failure during %s", action)
            raise StorageFailureError(f"Could not {action}: {exc}") from exc

    @staticmethod
    def _require(store: TrackerStore, habit_id: str) -> Habit:
        habit = store.habits.get_by_id(habit_id)
        if habit is None:
            raise NotFoundError(habit_id)
        return habit

    # Habits
    def list_habits(self) -> list[Habit]:
        """All habits, deleted ones included, in display order."""
        with self._transaction("list habits") as store:
            return store.habits.list_all()

    def add_habit(self, name: str, *, today: str) -> Habit:
        """Create a habit dated ``today`` at the end of the display order."""
        cleaned = _clean_name(name)
        created_date = parse_day(today)
        with self._transaction("add habit") as store:
            habit_id = _new_id(lambda candidate: store.habits.get_by_id(candidate) is not None)
            habit = Habit(
                id=habit_id,
                name=cleaned,
                created_date=created_date,
                deleted=False,
                sort_order=store.habits.next_sort_order(),
            )
            store.habits.create(habit)
        logger.info("Habit added", extra={"habit_id": habit.id, "created_date": created_date})
        return habit

    def rename_habit(self, habit_id: str, name: str) -> Habit:
        cleaned = _clean_name(name)
        with self._transaction("rename habit") as store:
            habit = self._require(store, habit_id)
            habit.name = cleaned
            store.habits.update(habit)
        return habit

    def delete_habit(self, habit_id: str, *, today: str) -> Habit:
        """Tombstone a habit; its history stays."""
        deleted_date = parse_day(today)
        with self._transaction("delete habit") as store:
            habit = self._require(store, habit_id)
            if not habit.deleted:
                habit.deleted = True
                habit.deleted_date = deleted_date
                store.habits.update(habit)
        logger.info("Habit deleted", extra={"habit_id": habit_id, "deleted_date": habit.deleted_date})
        return habit

    def reorder_habits(self, order: Sequence[str]) -> list[Habit]:
        """Put the listed habits first, in order; the rest keep their relative order."""
        with self._transaction("reorder habits") as store:
            habits = store.habits.list_all()
            by_id = {habit.id: habit for habit in habits}
            reordered: list[Habit] = []
            for habit_id in order:
                habit = by_id.pop(habit_id, None)
                if habit is not None:
                    reordered.append(habit)
            reordered.extend(h for h in habits if h.id in by_id)

            # Move everything out of the way first; sort_order is unique.
            offset = max((h.sort_order for h in habits), default=-1) + 1
            for index, habit in enumerate(reordered):
                habit.sort_order = offset + index
                store.habits.update(habit)
            for index, habit in enumerate(reordered):
                habit.sort_order = index
                store.habits.update(habit)
        return reordered

    # Completions
    def day_view(self, day: str) -> list[DayEntry]:
        day = parse_day(day)
        with self._transaction("load day") as store:
            return [
                DayEntry(
                    habit_id=habit.id,
                    name=habit.name,
                    completed=store.completions.exists(day, habit.id),
                    deleted=habit.deleted,
                )
                for habit in store.habits.list_visible(day)
            ]

    def toggle_completion(self, day: str, habit_id: str, completed: bool) -> ToggleOutcome:
        """Mark a habit done or not done and keep the achievement ledger in step."""
        event = CompletionToggled(date=parse_day(day), habit_id=habit_id, completed=completed)
        with self._transaction("toggle completion") as store:
            self._require(store, habit_id)
            outcome = apply_toggle(store, event)
        logger.info(
            "Completion toggled",
            extra={
                "day": event.date,
                "habit_id": habit_id,
                "completed": completed,
                "changed": outcome.changed,
                "awarded": len(outcome.awarded),
                "revoked": outcome.revoked,
            },
        )
        return outcome

    # To-do lists
    def list_todos(self, list_name: str) -> list[Todo]:
        list_name = _list_name(list_name)
        with self._transaction("list todos") as store:
            return store.todos.list_for(list_name)

    def add_todo(self, list_name: str, name: str, *, today: str) -> Todo:
        list_name = _list_name(list_name)
        cleaned = _clean_name(name)
        created_date = parse_day(today)
        with self._transaction("add todo") as store:
            todo = Todo(
                id=_new_id(lambda candidate: store.todos.get_by_id(candidate) is not None),
                list_name=list_name,
                name=cleaned,
                created_date=created_date,
            )
            store.todos.create(todo)
        logger.info("Todo added", extra={"todo_id": todo.id, "list_name": list_name})
        return todo

    def remove_todo(self, list_name: str, todo_id: str) -> None:
        """Delete an item; ``NotFoundError`` unless it is on ``list_name``."""
        list_name = _list_name(list_name)
        with self._transaction("remove todo") as store:
            if not store.todos.remove(list_name, todo_id):
                raise NotFoundError(todo_id, kind="Todo")
        logger.info("Todo removed", extra={"todo_id": todo_id, "list_name": list_name})

    # Read models
    def streaks(self, view_date: str, *, today: str) -> list[HabitStreak]:
        view_date = parse_day(view_date)
        today = parse_day(today)
        with self._transaction("compute streaks") as store:
            return streaks_as_of(store, view_date, today)

    def achievements(self) -> AchievementSummary:
        with self._transaction("summarise achievements") as store:
            return achievements_summary(store)

    def export_rows(self) -> tuple[list[Habit], set[tuple[str, str]]]:
        """Habits in display order and every completed (date, habit_id) pair."""
        with self._transaction("export completions") as store:
            habits = store.habits.list_all()
            completions = {(row.date, row.habit_id) for row in store.completions.list_all()}
        return habits, completions


__all__ = ["DayEntry", "HabitTracker", "MAX_NAME_LENGTH"]
