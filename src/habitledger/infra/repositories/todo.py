"""SQLModel implementation of the to-do repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Session, select

from ...models.todo import Todo


class SQLModelTodoRepository:
    """To-do repository bound to an open session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, todo_id: str) -> Optional[Todo]:
        return self.session.get(Todo, todo_id)

    def list_for(self, list_name: str) -> list[Todo]:
        statement = (
            select(Todo)
            .where(Todo.list_name == list_name)
            .order_by(Todo.created_date, Todo.id)  # type: ignore[arg-type]
        )
        return list(self.session.exec(statement).all())

    def create(self, todo: Todo) -> Todo:
        self.session.add(todo)
        self.session.flush()
        return todo

    def remove(self, list_name: str, todo_id: str) -> bool:
        todo = self.session.get(Todo, todo_id)
        if todo is None or todo.list_name != list_name:
            return False
        self.session.delete(todo)
        self.session.flush()
        return True
