"""Selection of report ids for bulk actions, decoupled from any UI toolkit.

Selection is independent of pagination: checking a report on page 1 and
moving to page 2 keeps it checked.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Hashable


class SelectionService:
    """Tracks the set of checked report ids."""

    def __init__(self) -> None:
        self._selected: set[Hashable] = set()

    def toggle(self, report_id: Hashable) -> bool:
        """Flip the check state of `report_id` and return the new state."""
        if report_id in self._selected:
            self._selected.discard(report_id)
            return False
        self._selected.add(report_id)
        return True

    def clear(self) -> None:
        """Uncheck everything."""
        self._selected.clear()

    def is_selected(self, report_id: Hashable) -> bool:
        return report_id in self._selected

    def selected_count(self) -> int:
        return len(self._selected)

    def selected_ids(self) -> frozenset[Hashable]:
        return frozenset(self._selected)

    def retain(self, ids: Iterable[Hashable]) -> None:
        """Drop every selected id that is not in `ids`."""
        self._selected.intersection_update(ids)

    def replace(self, ids: Iterable[Hashable]) -> None:
        """Make the selection exactly `ids`."""
        self._selected = set(ids)
