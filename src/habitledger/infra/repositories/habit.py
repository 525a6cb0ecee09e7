"""SQLModel implementation of the habit and completion repositories."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, or_
from sqlmodel import Session, select

from ...models.habit import Completion, Habit


def _visible_on(as_of: str):
    """SQL form of ``visibility.is_visible``."""
    return or_(
        Habit.deleted == False,  # noqa: E712 - SQLAlchemy comparison
        Habit.deleted_date.is_(None),  # type: ignore[union-attr]
        Habit.deleted_date > as_of,  # type: ignore[operator]
    )


class SQLModelHabitRepository:
    """Habit repository bound to an open session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, habit_id: str) -> Optional[Habit]:
        return self.session.get(Habit, habit_id)

    def list_all(self) -> list[Habit]:
        statement = select(Habit).order_by(Habit.sort_order)  # type: ignore[arg-type]
        return list(self.session.exec(statement).all())

    def list_visible(self, as_of: str) -> list[Habit]:
        statement = (
            select(Habit).where(_visible_on(as_of)).order_by(Habit.sort_order)  # type: ignore[arg-type]
        )
        return list(self.session.exec(statement).all())

    def list_active(self, day: str) -> list[Habit]:
        statement = (
            select(Habit)
            .where(Habit.created_date <= day)
            .where(_visible_on(day))
            .order_by(Habit.sort_order)  # type: ignore[arg-type]
        )
        return list(self.session.exec(statement).all())

    def list_not_deleted(self) -> list[Habit]:
        statement = (
            select(Habit)
            .where(Habit.deleted == False)  # noqa: E712
            .order_by(Habit.sort_order)  # type: ignore[arg-type]
        )
        return list(self.session.exec(statement).all())

    def create(self, habit: Habit) -> Habit:
        self.session.add(habit)
        self.session.flush()
        return habit

    def update(self, habit: Habit) -> Habit:
        self.session.add(habit)
        self.session.flush()
        return habit

    def next_sort_order(self) -> int:
        current = self.session.exec(select(func.max(Habit.sort_order))).one()
        return 0 if current is None else current + 1


class SQLModelCompletionRepository:
    """Completion repository bound to an open session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, day: str, habit_id: str) -> bool:
        return self.session.get(Completion, (day, habit_id)) is not None

    def add(self, day: str, habit_id: str) -> bool:
        if self.exists(day, habit_id):
            return False
        self.session.add(Completion(date=day, habit_id=habit_id))
        self.session.flush()
        return True

    def remove(self, day: str, habit_id: str) -> bool:
        row = self.session.get(Completion, (day, habit_id))
        if row is None:
            return False
        self.session.delete(row)
        self.session.flush()
        return True

    def list_all(self) -> list[Completion]:
        statement = select(Completion).order_by(Completion.date, Completion.habit_id)  # type: ignore[arg-type]
        return list(self.session.exec(statement).all())
