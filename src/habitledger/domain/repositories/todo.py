"""To-do repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.todo import Todo


class TodoRepository(Protocol):
    """Repository for to-do items."""

    def get_by_id(self, todo_id: str) -> Optional[Todo]:
        """Retrieve an item by ID, whatever list it is on."""
        ...

    def list_for(self, list_name: str) -> list[Todo]:
        """Items on one list, oldest first."""
        ...

    def create(self, todo: Todo) -> Todo:
        """Insert a new item."""
        ...

    def remove(self, list_name: str, todo_id: str) -> bool:
        """Delete an item from a list; returns False if it was not on that list."""
        ...
