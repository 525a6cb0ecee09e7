"""CSV export of the completion grid."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Sequence

from ..models.habit import Habit


def export_completions_csv(
    *,
    habits: Sequence[Habit],
    completions: Iterable[tuple[str, str]],
    output_path: Path,
) -> Path:
    """Write one row per day that has any completion, one column per habit.

    The header is ``date`` followed by habit names in display order (deleted
    habits included). Cells hold ``1`` when the habit was done that day and are
    empty otherwise. Returns the path written.
    """

    done = set(completions)
    days = sorted({day for day, _ in done})
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(["date", *(habit.name for habit in habits)])
        for day in days:
            writer.writerow([day, *("1" if (day, habit.id) in done else "" for habit in habits)])

    return output_path


__all__ = ["export_completions_csv"]
