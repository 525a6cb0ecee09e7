"""Repository protocol exports."""

from .achievement import AchievementRepository, AchievementSummaryRow
from .habit import CompletionRepository, HabitRepository
from .todo import TodoRepository

__all__ = [
    "AchievementRepository",
    "AchievementSummaryRow",
    "CompletionRepository",
    "HabitRepository",
    "TodoRepository",
]
