"""Core service interfaces and shared data structures.

This module defines the report client protocol consumed by the view-models
and the result types used across the infrastructure and UI layers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Hashable, Protocol


class ReportClient(Protocol):
    """Network collaborator that serves video analysis reports."""

    def fetch_list(self, user_no: int) -> Sequence[Mapping[str, Any]]:
        """Return raw report records for `user_no`.

        Raises:
            TransportError: If the request fails.
        """
        ...

    def fetch_one(self, report_id: Hashable) -> Mapping[str, Any]:
        """Return the raw record of one report.

        Raises:
            ReportNotFoundError: If the report does not exist.
            TransportError: If the request fails.
        """
        ...

    def delete_one(self, report_id: Hashable) -> bool:
        """Delete one report and return whether the server accepted it.

        Deleting an already-deleted report may fail.
        """
        ...


@dataclass
class BulkDeleteResult:
    """Outcome of a bulk delete.

    Attributes:
        succeeded_ids: Ids deleted on the server and removed locally.
        failed: Tuples of (id, reason) for ids that could not be deleted.
    """

    succeeded_ids: list[Hashable] = field(default_factory=list)
    failed: list[tuple[Hashable, str]] = field(default_factory=list)

    @property
    def failed_ids(self) -> list[Hashable]:
        """Ids of the failed deletes, in request order."""
        return [report_id for report_id, _ in self.failed]

    @property
    def all_failed(self) -> bool:
        """True if nothing was deleted."""
        return not self.succeeded_ids and bool(self.failed)
