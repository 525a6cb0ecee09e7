"""Achievement repository protocol."""

from __future__ import annotations

from typing import NamedTuple, Optional, Protocol

from ...models.achievement import Achievement, AchievementType


class AchievementSummaryRow(NamedTuple):
    type: str
    habit_id: Optional[str]
    count: int
    latest_date: Optional[str]


class AchievementRepository(Protocol):
    """Ledger of earned achievements. Only the achievement engine writes here."""

    def upsert(self, type: AchievementType, habit_id: Optional[str], earned_date: str) -> bool:
        """Insert if absent; returns True only when a row was created."""
        ...

    def delete_matching(
        self,
        type: AchievementType,
        *,
        habit_id: Optional[str],
        start: str,
        end: Optional[str] = None,
    ) -> int:
        """Delete rows of ``type`` for ``habit_id`` (None = global) earned in [start, end]."""
        ...

    def summary_rows(self, *, per_habit: bool) -> list[AchievementSummaryRow]:
        """Count and latest earned date, grouped by type (and habit when per_habit)."""
        ...

    def list_all(self) -> list[Achievement]:
        """Every achievement row, ordered by earned date, type and habit."""
        ...
