"""To-do items, kept on a fixed set of named lists."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


class TodoList(str, Enum):
    WORK = "work"
    HOME = "home"


class Todo(SQLModel, table=True):
    """A to-do entry. Removal deletes the row; there is no tombstone."""

    __tablename__: ClassVar[str] = "todo"
    __table_args__ = (
        CheckConstraint("list_name IN ('work', 'home')", name="ck_todo_list_name"),
    )

    id: str = Field(primary_key=True, max_length=16)
    list_name: str = Field(nullable=False, max_length=8, index=True)
    name: str = Field(nullable=False, max_length=80)
    created_date: str = Field(nullable=False, max_length=10)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "createdDate": self.created_date}
