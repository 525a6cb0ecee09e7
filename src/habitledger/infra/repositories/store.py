"""Repositories bundled over one session, so a toggle commits as a unit."""

from __future__ import annotations

from sqlmodel import Session

from ...domain.repositories import (
    AchievementRepository,
    CompletionRepository,
    HabitRepository,
    TodoRepository,
)
from .achievement import SQLModelAchievementRepository
from .habit import SQLModelCompletionRepository, SQLModelHabitRepository
from .todo import SQLModelTodoRepository


class TrackerStore:
    """Storage collaborator handed to the streak and achievement services."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.habits: HabitRepository = SQLModelHabitRepository(session)
        self.completions: CompletionRepository = SQLModelCompletionRepository(session)
        self.achievements: AchievementRepository = SQLModelAchievementRepository(session)
        self.todos: TodoRepository = SQLModelTodoRepository(session)
