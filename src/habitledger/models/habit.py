"""Habit and completion tables."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Habit(SQLModel, table=True):
    """A daily habit. Deletion is a tombstone; rows are never removed."""

    __tablename__: ClassVar[str] = "habit"

    id: str = Field(primary_key=True, max_length=16)
    name: str = Field(nullable=False, max_length=80)
    created_date: str = Field(nullable=False, max_length=10, index=True)
    deleted: bool = Field(default=False, nullable=False)
    deleted_date: Optional[str] = Field(default=None, max_length=10)
    sort_order: int = Field(nullable=False, unique=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "createdDate": self.created_date,
            "deleted": self.deleted,
            "deletedDate": self.deleted_date,
        }


class Completion(SQLModel, table=True):
    """Fact that a habit was completed on a calendar day."""

    __tablename__: ClassVar[str] = "completion"

    date: str = Field(primary_key=True, max_length=10)
    habit_id: str = Field(foreign_key="habit.id", primary_key=True, index=True)
