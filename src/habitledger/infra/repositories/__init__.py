"""SQLModel repository implementations."""

from .achievement import SQLModelAchievementRepository
from .habit import SQLModelCompletionRepository, SQLModelHabitRepository
from .store import TrackerStore
from .todo import SQLModelTodoRepository

__all__ = [
    "SQLModelAchievementRepository",
    "SQLModelCompletionRepository",
    "SQLModelHabitRepository",
    "SQLModelTodoRepository",
    "TrackerStore",
]
