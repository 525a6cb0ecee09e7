"""Domain services: calendar math, streaks, achievements, habit management."""

from .achievements import (
    AchievementSummary,
    CompletionToggled,
    achievements_summary,
    apply_toggle,
    award_achievements,
    invalidate_achievements,
)
from .habits import HabitTracker
from .streaks import HabitStreak, streak_as_of, streaks_as_of

__all__ = [
    "AchievementSummary",
    "CompletionToggled",
    "HabitStreak",
    "HabitTracker",
    "achievements_summary",
    "apply_toggle",
    "award_achievements",
    "invalidate_achievements",
    "streak_as_of",
    "streaks_as_of",
]
