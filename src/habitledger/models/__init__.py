"""SQLModel table exports."""

from .achievement import Achievement, AchievementKey, AchievementType
from .habit import Completion, Habit
from .todo import Todo, TodoList

__all__ = [
    "Achievement",
    "AchievementKey",
    "AchievementType",
    "Completion",
    "Habit",
    "Todo",
    "TodoList",
]
