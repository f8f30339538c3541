"""ViewModel for the report list: load, search, paging and bulk delete."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
import threading
from typing import Any, Hashable

from loguru import logger

from app.viewmodels.report_vm import ReportRow
from core.errors import InvalidSelectionError, NormalizationError
from core.messages import DEFAULT_MESSAGES
from core.models import Report
from core.services.collection_store import (
    DEFAULT_PAGE_SIZE,
    CollectionStore,
    ReportQuery,
    count_pages,
)
from core.services.interfaces import BulkDeleteResult, ReportClient
from core.services.normalizer import DEFAULT_PLACEHOLDERS, Placeholders, normalize
from core.services.selection_service import SelectionService


class ListState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    DELETING = "deleting"


@dataclass(frozen=True)
class ReportListSnapshot:
    """Immutable state of the list view handed to the rendering layer."""

    state: ListState
    items: tuple[ReportRow, ...]
    total_filtered_count: int
    total_pages: int
    current_page: int
    selected_count: int
    search_term: str
    error_message: str
    notice: str
    is_all_empty: bool
    is_search_empty: bool
    empty_hint: str

    @property
    def can_delete(self) -> bool:
        """The delete button is enabled only with a selection and data."""
        return self.state is ListState.READY and self.selected_count > 0 and not self.is_all_empty

    @property
    def show_pagination(self) -> bool:
        return self.total_filtered_count > 0 and self.total_pages > 1


SnapshotListener = Callable[[ReportListSnapshot], None]


class ReportListVM:
    """Report list view-model.

    Composes a `CollectionStore` and a `SelectionService` and drives them
    from explicit commands. Every command returns the resulting snapshot and
    publishes it to subscribers.

    Bulk delete is best-effort per id: ids the server deleted are removed,
    ids that failed stay in the collection and remain selected so the user
    can retry them. Nothing is rolled back.
    """

    def __init__(
        self,
        client: ReportClient,
        user_no: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        store: CollectionStore | None = None,
        selection: SelectionService | None = None,
        placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
        messages: Mapping[str, str] | None = None,
        max_delete_workers: int = 8,
    ) -> None:
        """Create a ReportListVM.

        Args:
            client: Network collaborator serving the reports.
            user_no: Identity whose reports are listed.
            page_size: Rows per page.
            store: Collection store (defaults to an empty `CollectionStore`).
            selection: Selection service (defaults to `SelectionService`).
            placeholders: Text for reports without title/author.
            messages: User-facing message templates, see `DEFAULT_MESSAGES`.
            max_delete_workers: Upper bound of concurrent delete requests.
        """
        self._client = client
        self._user_no = user_no
        self._page_size = page_size
        self._store = store or CollectionStore()
        self._selection = selection or SelectionService()
        self._placeholders = placeholders
        self._messages = {**DEFAULT_MESSAGES, **(messages or {})}
        self._max_delete_workers = max(1, max_delete_workers)

        self._state = ListState.IDLE
        self._search_term = ""
        self._page = 1
        self._error_message = ""
        self._notice = ""
        self.last_delete_result: BulkDeleteResult | None = None

        self._load_seq = 0
        self._seq_lock = threading.Lock()
        self._listeners: list[SnapshotListener] = []

    @property
    def state(self) -> ListState:
        return self._state

    @property
    def selection(self) -> SelectionService:
        return self._selection

    @property
    def store(self) -> CollectionStore:
        return self._store

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register `listener` for snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # Commands

    def load(self) -> ReportListSnapshot:
        """Fetch, normalize and install the report list.

        A later call supersedes an earlier one still in flight: only the most
        recently issued load may commit its result.
        """
        with self._seq_lock:
            self._load_seq += 1
            seq = self._load_seq
        self._state = ListState.LOADING
        self._error_message = ""
        self._notice = ""
        self._publish()

        try:
            raw_items = self._client.fetch_list(self._user_no)
        except Exception as ex:  # collaborator boundary
            if self._is_stale(seq):
                return self.snapshot()
            logger.error("Report list load failed: {}", ex)
            self._state = ListState.ERROR
            self._error_message = self._messages["load_failed"]
            return self._publish()

        if self._is_stale(seq):
            return self.snapshot()

        reports = self._normalize_all(raw_items or [])
        self._store.replace_all(reports)
        self._selection.clear()
        self._page = 1
        self._state = ListState.READY
        logger.info("Loaded {} report(s) for user {}", len(self._store), self._user_no)
        return self._publish()

    def retry(self) -> ReportListSnapshot:
        """Reload after a failure; ignored unless in the error state."""
        if self._state is not ListState.ERROR:
            logger.warning("Ignoring retry while {}", self._state.name)
            return self.snapshot()
        return self.load()

    def search(self, term: str) -> ReportListSnapshot:
        """Filter by title and jump back to the first page."""
        if not self._require_ready("search"):
            return self.snapshot()
        self._notice = ""
        self._search_term = term or ""
        self._page = 1
        return self._publish()

    def set_page(self, page: int) -> ReportListSnapshot:
        """Move to `page`, clamped into the valid range."""
        if not self._require_ready("set_page"):
            return self.snapshot()
        self._notice = ""
        self._page = max(1, min(int(page), self._total_pages()))
        return self._publish()

    def toggle_select(self, report_id: Hashable) -> ReportListSnapshot:
        """Check or uncheck a report present in the collection."""
        if not self._require_ready("toggle_select"):
            return self.snapshot()
        self._notice = ""
        if report_id not in self._store.ids():
            logger.warning("Cannot select unknown report {}", report_id)
            return self.snapshot()
        self._selection.toggle(report_id)
        return self._publish()

    def clear_selection(self) -> ReportListSnapshot:
        if not self._require_ready("clear_selection"):
            return self.snapshot()
        self._notice = ""
        self._selection.clear()
        return self._publish()

    def delete_selected(self) -> ReportListSnapshot:
        """Delete every selected report, one concurrent request per id.

        The store and selection are updated only after the whole batch has
        settled. The per-id outcome is kept in `last_delete_result`.
        """
        if not self._require_ready("delete_selected"):
            return self.snapshot()
        self._notice = ""
        try:
            ids = self._ids_to_delete()
        except InvalidSelectionError as ex:
            logger.warning("Bulk delete rejected: {}", ex)
            self._notice = self._messages["select_to_delete"]
            return self._publish()

        self._state = ListState.DELETING
        self._publish()

        result = self._delete_all(ids)
        self.last_delete_result = result

        removed = self._store.remove_by_ids(result.succeeded_ids)
        self._selection.replace(result.failed_ids)
        self._selection.retain(self._store.ids())
        self._state = ListState.READY

        if result.all_failed:
            self._notice = self._messages["delete_failed"]
        elif result.failed:
            self._notice = self._messages["delete_partial"].format(
                failed=len(result.failed), total=len(ids)
            )
        else:
            self._notice = self._messages["deleted"].format(count=removed)
        logger.info(
            "Bulk delete finished: {} deleted, {} failed {}",
            len(result.succeeded_ids),
            len(result.failed),
            result.failed_ids,
        )
        return self._publish()

    # Snapshots

    def snapshot(self) -> ReportListSnapshot:
        """Build the current list snapshot."""
        self._page = max(1, min(self._page, self._total_pages()))
        view = self._store.view(
            ReportQuery(search_term=self._search_term, page=self._page, page_size=self._page_size)
        )
        offset = (self._page - 1) * self._page_size
        rows = tuple(
            ReportRow(
                report=report,
                row_number=offset + idx + 1,
                is_selected=self._selection.is_selected(report.id),
            )
            for idx, report in enumerate(view.items)
        )
        is_all_empty = len(self._store) == 0
        is_search_empty = not is_all_empty and view.total_filtered_count == 0
        empty_hint = ""
        if is_all_empty and not self._search_term:
            empty_hint = self._messages["no_reports"]
        elif is_search_empty:
            empty_hint = self._messages["no_matches"].format(term=self._search_term)

        return ReportListSnapshot(
            state=self._state,
            items=rows,
            total_filtered_count=view.total_filtered_count,
            total_pages=view.total_pages,
            current_page=self._page,
            selected_count=self._selection.selected_count(),
            search_term=self._search_term,
            error_message=self._error_message,
            notice=self._notice,
            is_all_empty=is_all_empty,
            is_search_empty=is_search_empty,
            empty_hint=empty_hint,
        )

    # Internals

    def _publish(self) -> ReportListSnapshot:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)
        return snap

    def _is_stale(self, seq: int) -> bool:
        with self._seq_lock:
            stale = seq != self._load_seq
        if stale:
            logger.debug("Discarding stale load #{} (latest #{})", seq, self._load_seq)
        return stale

    def _require_ready(self, action: str) -> bool:
        if self._state is ListState.READY:
            return True
        logger.warning("Ignoring {} while {}", action, self._state.name)
        return False

    def _total_pages(self) -> int:
        return count_pages(len(self._store.filtered(self._search_term)), self._page_size)

    def _normalize_all(self, raw_items: Iterable[Any]) -> list[Report]:
        reports: list[Report] = []
        seen: set[Hashable] = set()
        for raw in raw_items:
            try:
                report = normalize(raw, placeholders=self._placeholders)
            except NormalizationError as ex:
                logger.warning("Dropping report record: {} | raw={}", ex, raw)
                continue
            if report.id in seen:
                logger.warning("Dropping duplicate report id {}", report.id)
                continue
            seen.add(report.id)
            reports.append(report)
        return reports

    def _ids_to_delete(self) -> list[Hashable]:
        selected = self._selection.selected_ids()
        # Collection order keeps request and result order deterministic.
        ids = [r.id for r in self._store.reports if r.id in selected]
        if not ids:
            raise InvalidSelectionError("No reports selected")
        return ids

    def _delete_all(self, ids: list[Hashable]) -> BulkDeleteResult:
        result = BulkDeleteResult()
        workers = min(len(ids), self._max_delete_workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="report-delete") as pool:
            futures = [
                (report_id, pool.submit(self._client.delete_one, report_id)) for report_id in ids
            ]
            for report_id, future in futures:
                try:
                    accepted = future.result()
                except Exception as ex:  # collaborator boundary
                    logger.error("Delete of report {} failed: {}", report_id, ex)
                    result.failed.append((report_id, str(ex) or type(ex).__name__))
                    continue
                if accepted is False:
                    result.failed.append((report_id, "Rejected by server"))
                else:
                    result.succeeded_ids.append(report_id)
        return result
