"""Shared fixtures: an in-memory stand-in for the report client."""

from collections.abc import Mapping
import threading

import pytest

from core.errors import ReportNotFoundError, TransportError


class FakeReportClient:
    """Report client backed by a list of raw records.

    `fail_fetch` makes list/detail requests raise; ids in `reject_ids` return
    False from delete and ids in `raise_ids` raise `TransportError`.
    """

    def __init__(self, records=None):
        self.records = list(records or [])
        self.fail_fetch = False
        self.reject_ids = set()
        self.raise_ids = set()
        self.fetch_calls = []
        self.delete_calls = []
        self._lock = threading.Lock()

    def fetch_list(self, user_no):
        self.fetch_calls.append(user_no)
        if self.fail_fetch:
            raise TransportError("connection refused")
        return [dict(r) if isinstance(r, Mapping) else r for r in self.records]

    def fetch_one(self, report_id):
        if self.fail_fetch:
            raise TransportError("connection refused")
        for r in self.records:
            if report_id in (r.get("id"), r.get("record_no"), r.get("report_no")):
                return dict(r)
        raise ReportNotFoundError(f"Report {report_id} not found")

    def delete_one(self, report_id):
        with self._lock:
            self.delete_calls.append(report_id)
        if report_id in self.raise_ids:
            raise TransportError(f"delete {report_id} failed")
        if report_id in self.reject_ids:
            return False
        return True


def make_records(count, start_day=1):
    """Records with ids 1..count, one day apart starting 2024-01-<start_day>."""
    return [
        {"id": i, "title": f"Report {i}", "date": f"2024-01-{start_day + i - 1:02d}"}
        for i in range(1, count + 1)
    ]


@pytest.fixture
def client():
    return FakeReportClient(
        [
            {"id": 1, "title": "A", "date": "2024-01-01"},
            {"id": 2, "title": "B", "date": "2024-01-02"},
        ]
    )


@pytest.fixture
def make_client():
    """Factory: `make_client(count)` or `make_client(records=[...])`."""

    def _make(count=0, records=None):
        return FakeReportClient(records if records is not None else make_records(count))

    return _make
