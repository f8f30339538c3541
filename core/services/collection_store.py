"""In-memory report collection with derived sorted/filtered/paged views."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import math
from typing import Hashable

from core.errors import InvalidPageError
from core.models import Report
from core.services.sort_service import SortService

DEFAULT_PAGE_SIZE = 5


@dataclass(frozen=True)
class ReportQuery:
    """Parameters of a derived view."""

    search_term: str = ""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class CollectionView:
    """One page of the filtered collection plus paging totals."""

    items: tuple[Report, ...]
    total_filtered_count: int
    total_pages: int


def count_pages(item_count: int, page_size: int) -> int:
    """Number of pages needed for `item_count` items; never less than 1."""
    return max(1, math.ceil(item_count / page_size))


class CollectionStore:
    """Holds the authoritative report list.

    The list is kept as a tuple in canonical order, so views never hand out a
    reference that callers could mutate, and nothing here points back at the
    raw records the reports were built from.
    """

    def __init__(self, sorter: SortService | None = None) -> None:
        self._sorter = sorter or SortService()
        self._reports: tuple[Report, ...] = ()

    def __len__(self) -> int:
        return len(self._reports)

    @property
    def reports(self) -> tuple[Report, ...]:
        """All reports in canonical order."""
        return self._reports

    def ids(self) -> frozenset[Hashable]:
        """Identifiers of every report currently held."""
        return frozenset(r.id for r in self._reports)

    def replace_all(self, reports: Iterable[Report]) -> None:
        """Swap in a new collection. Other components are not reset."""
        self._reports = tuple(self._sorter.sort(reports))

    def remove_by_ids(self, ids: Iterable[Hashable]) -> int:
        """Remove reports whose id is in `ids` and return how many went away."""
        doomed = set(ids)
        if not doomed:
            return 0
        kept = tuple(r for r in self._reports if r.id not in doomed)
        removed = len(self._reports) - len(kept)
        self._reports = kept
        return removed

    def filtered(self, search_term: str) -> tuple[Report, ...]:
        """Reports whose title contains `search_term`, ignoring case."""
        if not search_term:
            return self._reports
        needle = search_term.casefold()
        return tuple(r for r in self._reports if needle in r.title.casefold())

    def view(self, query: ReportQuery) -> CollectionView:
        """Compute one page of the filtered collection.

        Raises:
            InvalidPageError: If `query.page` is outside `[1, total_pages]` or
                `query.page_size` is not positive. Callers clamp first.
        """
        if query.page_size < 1:
            raise InvalidPageError(f"Page size must be positive: {query.page_size}")
        matches = self.filtered(query.search_term)
        total_pages = count_pages(len(matches), query.page_size)
        if not 1 <= query.page <= total_pages:
            raise InvalidPageError(f"Page {query.page} out of range 1..{total_pages}")
        start = (query.page - 1) * query.page_size
        return CollectionView(
            items=matches[start : start + query.page_size],
            total_filtered_count=len(matches),
            total_pages=total_pages,
        )
