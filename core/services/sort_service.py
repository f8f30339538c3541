"""Sorting service for `Report` collections.

Reports are ordered newest first: date descending, then id descending. Unknown
dates sort after every dated report; ids that are not numeric compare as 0.
"""

from __future__ import annotations

from collections.abc import Iterable
import math
from typing import Any

from core.models import Report


def numeric_id(value: Any) -> float:
    """Return `value` as a number for tie-breaking, or 0 if not numeric."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


class SortService:
    """Provides the canonical report ordering."""

    def sort_key(self, report: Report) -> tuple[Any, ...]:
        """Ascending key whose order equals (date desc, id desc)."""
        if report.date is None:
            date_part: tuple[int, int] = (1, 0)
        else:
            date_part = (0, -report.date.toordinal())
        return (*date_part, -numeric_id(report.id))

    def sort(self, reports: Iterable[Report]) -> list[Report]:
        """Return a new list of `reports` in canonical order.

        The input is never mutated; equal keys keep their input order.
        """
        decorated = [(self.sort_key(r), idx, r) for idx, r in enumerate(reports)]
        decorated.sort(key=lambda x: (x[0], x[1]))
        return [r for _, _, r in decorated]
