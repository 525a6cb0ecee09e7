"""Achievement ledger table."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, NamedTuple, Optional

from sqlalchemy import Index, UniqueConstraint, text
from sqlmodel import Field, SQLModel


class AchievementType(str, Enum):
    PERFECT_DAY = "perfect_day"
    STREAK_7 = "streak_7"
    STREAK_14 = "streak_14"
    STREAK_21 = "streak_21"
    PERFECT_MONTH = "perfect_month"


STREAK_THRESHOLDS: dict[int, AchievementType] = {
    7: AchievementType.STREAK_7,
    14: AchievementType.STREAK_14,
    21: AchievementType.STREAK_21,
}

GLOBAL_TYPES: tuple[AchievementType, ...] = tuple(AchievementType)
PER_HABIT_TYPES: tuple[AchievementType, ...] = (
    AchievementType.STREAK_7,
    AchievementType.STREAK_14,
    AchievementType.STREAK_21,
    AchievementType.PERFECT_MONTH,
)


class AchievementKey(NamedTuple):
    """Identity of an achievement row; ``habit_id`` is None for global ones."""

    type: AchievementType
    habit_id: Optional[str]
    earned_date: str


class Achievement(SQLModel, table=True):
    """An earned milestone, unique per (type, habit_id, earned_date)."""

    __tablename__: ClassVar[str] = "achievement"
    __table_args__ = (
        UniqueConstraint("type", "habit_id", "earned_date", name="uq_achievement_identity"),
        # NULLs never collide in the constraint above; global rows need their own index.
        Index(
            "uq_achievement_global",
            "type",
            "earned_date",
            unique=True,
            sqlite_where=text("habit_id IS NULL"),
            postgresql_where=text("habit_id IS NULL"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str = Field(nullable=False, max_length=32, index=True)
    habit_id: Optional[str] = Field(default=None, foreign_key="habit.id", index=True)
    earned_date: str = Field(nullable=False, max_length=10, index=True)

    @property
    def key(self) -> AchievementKey:
        return AchievementKey(AchievementType(self.type), self.habit_id, self.earned_date)
