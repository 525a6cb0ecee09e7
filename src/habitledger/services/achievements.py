"""Achievement award, invalidation and summary.

The ledger is kept consistent with the completion history by two passes:

* the award pass runs after a completion is marked done and records every
  milestone that holds as of that day (inserts are idempotent);
* the invalidation pass runs after a completion is removed and deletes every
  achievement whose qualifying window could have included that completion.

Neither pass commits. ``apply_toggle`` is meant to run inside a single
``session_scope`` so the completion write and both passes land together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..infra.repositories.store import TrackerStore
from ..logging_config import get_logger
from ..models.achievement import (
    GLOBAL_TYPES,
    PER_HABIT_TYPES,
    STREAK_THRESHOLDS,
    AchievementKey,
    AchievementType,
)
from .dates import first_of_month, month_days, previous_month, shift_date
from .streaks import CompletionLookup, committed_streak
from .visibility import is_active_for_achievements

logger = get_logger(__name__)


class _PerfectDays:
    """Memoised check that a day had active habits and all of them were done."""

    def __init__(self, store: TrackerStore, is_done: CompletionLookup) -> None:
        self._store = store
        self._is_done = is_done
        self._seen: dict[str, bool] = {}

    def __call__(self, day: str) -> bool:
        if day not in self._seen:
            active = self._store.habits.list_active(day)
            self._seen[day] = bool(active) and all(self._is_done(day, h.id) for h in active)
        return self._seen[day]


def award_achievements(store: TrackerStore, day: str) -> list[AchievementKey]:
    """Record every achievement earned as of ``day``; returns the newly inserted ones."""

    active = store.habits.list_active(day)
    if not active:
        logger.debug("No active habits; nothing to award", extra={"day": day})
        return []

    is_done = CompletionLookup(store)
    perfect_day = _PerfectDays(store, is_done)
    awarded: list[AchievementKey] = []

    def grant(kind: AchievementType, habit_id: Optional[str], earned_date: str) -> None:
        if store.achievements.upsert(kind, habit_id, earned_date):
            awarded.append(AchievementKey(kind, habit_id, earned_date))

    if perfect_day(day):
        grant(AchievementType.PERFECT_DAY, None, day)

    for habit in active:
        run = committed_streak(store, habit.id, day, lookup=is_done)
        for threshold, kind in STREAK_THRESHOLDS.items():
            if run >= threshold:
                grant(kind, habit.id, day)

    for threshold, kind in STREAK_THRESHOLDS.items():
        if all(perfect_day(shift_date(day, -offset)) for offset in range(threshold)):
            grant(kind, None, day)

    # Only the most recently elapsed month can be judged.
    year, month = previous_month(day)
    days = month_days(year, month)
    month_start = days[0]
    for habit in active:
        # The habit must have existed for the whole month.
        if not is_active_for_achievements(habit, month_start):
            continue
        if all(is_done(d, habit.id) for d in days):
            grant(AchievementType.PERFECT_MONTH, habit.id, month_start)
    if all(perfect_day(d) for d in days):
        grant(AchievementType.PERFECT_MONTH, None, month_start)

    if awarded:
        logger.info(
            "Awarded %d achievement(s)",
            len(awarded),
            extra={
                "day": day,
                "achievements": [f"{key.type.value}:{key.habit_id or 'global'}" for key in awarded],
            },
        )
    return awarded


def invalidate_achievements(store: TrackerStore, day: str, habit_id: str) -> int:
    """Retract achievements that may have depended on ``habit_id`` being done on ``day``.

    A ``streak_N`` earned on E spans [E-(N-1), E], so any earned date in
    [day, day+(N-1)] could have counted ``day``. Nothing is re-derived.
    """

    repo = store.achievements
    removed = repo.delete_matching(AchievementType.PERFECT_DAY, habit_id=None, start=day)

    for threshold, kind in STREAK_THRESHOLDS.items():
        window_end = shift_date(day, threshold - 1)
        removed += repo.delete_matching(kind, habit_id=habit_id, start=day, end=window_end)
        removed += repo.delete_matching(kind, habit_id=None, start=day, end=window_end)

    month_start = first_of_month(day)
    removed += repo.delete_matching(AchievementType.PERFECT_MONTH, habit_id=habit_id, start=month_start)
    removed += repo.delete_matching(AchievementType.PERFECT_MONTH, habit_id=None, start=month_start)

    if removed:
        logger.info(
            "Invalidated %d achievement(s)",
            removed,
            extra={"day": day, "habit_id": habit_id},
        )
    return removed


@dataclass(frozen=True)
class CompletionToggled:
    """A habit was marked done (``completed=True``) or not done on ``date``."""

    date: str
    habit_id: str
    completed: bool


@dataclass
class ToggleOutcome:
    event: CompletionToggled
    changed: bool
    awarded: list[AchievementKey] = field(default_factory=list)
    revoked: int = 0


def apply_toggle(store: TrackerStore, event: CompletionToggled) -> ToggleOutcome:
    """Write the completion change, then invalidate or award accordingly.

    The habit id must already be validated by the caller.
    """

    if event.completed:
        changed = store.completions.add(event.date, event.habit_id)
        awarded = award_achievements(store, event.date)
        return ToggleOutcome(event=event, changed=changed, awarded=awarded)

    changed = store.completions.remove(event.date, event.habit_id)
    revoked = invalidate_achievements(store, event.date, event.habit_id)
    return ToggleOutcome(event=event, changed=changed, revoked=revoked)


@dataclass(frozen=True)
class AchievementCount:
    type: str
    count: int = 0
    latest_date: Optional[str] = None

    def to_dict(self) -> dict:
        return {"type": self.type, "count": self.count, "latestDate": self.latest_date}


@dataclass(frozen=True)
class HabitAchievements:
    habit_id: str
    name: str
    achievements: list[AchievementCount]


@dataclass(frozen=True)
class AchievementSummary:
    global_achievements: list[AchievementCount]
    per_habit: list[HabitAchievements]

    def to_dict(self) -> dict:
        return {
            "global": [item.to_dict() for item in self.global_achievements],
            "perHabit": {
                entry.habit_id: {
                    "name": entry.name,
                    "achievements": [item.to_dict() for item in entry.achievements],
                }
                for entry in self.per_habit
            },
        }


def achievements_summary(store: TrackerStore) -> AchievementSummary:
    """Counts and latest earned dates per type, globally and for each live habit."""

    global_rows = {row.type: row for row in store.achievements.summary_rows(per_habit=False)}
    global_counts = [
        AchievementCount(kind.value, global_rows[kind.value].count, global_rows[kind.value].latest_date)
        if kind.value in global_rows
        else AchievementCount(kind.value)
        for kind in GLOBAL_TYPES
    ]

    habit_rows = {
        (row.habit_id, row.type): row for row in store.achievements.summary_rows(per_habit=True)
    }
    per_habit: list[HabitAchievements] = []
    for habit in store.habits.list_not_deleted():
        counts = []
        for kind in PER_HABIT_TYPES:
            row = habit_rows.get((habit.id, kind.value))
            counts.append(
                AchievementCount(kind.value, row.count, row.latest_date)
                if row
                else AchievementCount(kind.value)
            )
        per_habit.append(HabitAchievements(habit_id=habit.id, name=habit.name, achievements=counts))

    return AchievementSummary(global_achievements=global_counts, per_habit=per_habit)


__all__ = [
    "AchievementCount",
    "AchievementSummary",
    "CompletionToggled",
    "HabitAchievements",
    "ToggleOutcome",
    "achievements_summary",
    "apply_toggle",
    "award_achievements",
    "invalidate_achievements",
]
