"""SQLModel implementation of the achievement repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...domain.repositories.achievement import AchievementSummaryRow
from ...models.achievement import Achievement, AchievementType


def _habit_filter(habit_id: Optional[str]):
    if habit_id is None:
        return Achievement.habit_id.is_(None)  # type: ignore[union-attr]
    return Achievement.habit_id == habit_id


class SQLModelAchievementRepository:
    """Achievement repository bound to an open session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert(self, type: AchievementType, habit_id: Optional[str], earned_date: str) -> bool:
        type_value = AchievementType(type).value
        # Check first so a repeat award is a no-op instead of an IntegrityError.
        existing = self.session.exec(
            select(Achievement.id)
            .where(Achievement.type == type_value)
            .where(_habit_filter(habit_id))
            .where(Achievement.earned_date == earned_date)
        ).first()
        if existing is not None:
            return False
        self.session.add(Achievement(type=type_value, habit_id=habit_id, earned_date=earned_date))
        self.session.flush()
        return True

    def delete_matching(
        self,
        type: AchievementType,
        *,
        habit_id: Optional[str],
        start: str,
        end: Optional[str] = None,
    ) -> int:
        statement = (
            select(Achievement)
            .where(Achievement.type == AchievementType(type).value)
            .where(_habit_filter(habit_id))
            .where(Achievement.earned_date >= start)
            .where(Achievement.earned_date <= (end or start))
        )
        rows = list(self.session.exec(statement).all())
        for row in rows:
            self.session.delete(row)
        if rows:
            self.session.flush()
        return len(rows)

    def summary_rows(self, *, per_habit: bool) -> list[AchievementSummaryRow]:
        statement = select(
            Achievement.type,
            Achievement.habit_id,
            func.count(Achievement.id),
            func.max(Achievement.earned_date),
        )
        if per_habit:
            statement = statement.where(Achievement.habit_id.is_not(None))  # type: ignore[union-attr]
        else:
            statement = statement.where(Achievement.habit_id.is_(None))  # type: ignore[union-attr]
        statement = statement.group_by(Achievement.type, Achievement.habit_id)
        return [AchievementSummaryRow(*row) for row in self.session.exec(statement).all()]

    def list_all(self) -> list[Achievement]:
        statement = select(Achievement).order_by(
            Achievement.earned_date, Achievement.type, Achievement.habit_id  # type: ignore[arg-type]
        )
        return list(self.session.exec(statement).all())
