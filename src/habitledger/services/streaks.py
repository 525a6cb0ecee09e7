"""Consecutive-day streak calculations."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from ..infra.repositories.store import TrackerStore
from .dates import shift_date


@dataclass(frozen=True)
class HabitStreak:
    habit_id: str
    name: str
    streak: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["id"] = data.pop("habit_id")
        return data


class CompletionLookup:
    """Memoised ``completion exists`` checks for a single computation."""

    def __init__(self, store: TrackerStore) -> None:
        self._store = store
        self._seen: dict[tuple[str, str], bool] = {}

    def __call__(self, day: str, habit_id: str) -> bool:
        key = (day, habit_id)
        if key not in self._seen:
            self._seen[key] = self._store.completions.exists(day, habit_id)
        return self._seen[key]


def _walk_back(is_done: CompletionLookup, habit_id: str, start: str) -> int:
    """Count completed days going backward from ``start`` until the first gap."""

    streak = 0
    cursor = start
    while is_done(cursor, habit_id):
        streak += 1
        cursor = shift_date(cursor, -1)
    return streak


def committed_streak(
    store: TrackerStore, habit_id: str, day: str, *, lookup: CompletionLookup | None = None
) -> int:
    """Run of completions ending exactly at ``day`` (0 if ``day`` itself is missing)."""

    return _walk_back(lookup or CompletionLookup(store), habit_id, day)


def streak_as_of(
    store: TrackerStore,
    habit_id: str,
    view_date: str,
    today: str,
    *,
    lookup: CompletionLookup | None = None,
) -> int:
    """Current streak as seen on ``view_date``.

    An unfinished ``today`` does not break the streak: when today has no
    completion yet the walk starts from yesterday. Any other day without a
    completion has no streak.
    """

    is_done = lookup or CompletionLookup(store)
    if is_done(view_date, habit_id):
        start = view_date
    elif view_date == today:
        start = shift_date(today, -1)
    else:
        return 0
    return _walk_back(is_done, habit_id, start)


def streaks_as_of(store: TrackerStore, view_date: str, today: str) -> list[HabitStreak]:
    """Non-zero streaks of the habits visible on ``view_date``, longest first."""

    lookup = CompletionLookup(store)
    results: list[HabitStreak] = []
    for habit in store.habits.list_visible(view_date):
        streak = streak_as_of(store, habit.id, view_date, today, lookup=lookup)
        if streak > 0:
            results.append(HabitStreak(habit_id=habit.id, name=habit.name, streak=streak))

    # sorted() is stable, so ties keep display order.
    return sorted(results, key=lambda item: item.streak, reverse=True)


__all__ = [
    "CompletionLookup",
    "HabitStreak",
    "committed_streak",
    "streak_as_of",
    "streaks_as_of",
]
