"""ViewModel for a single report: load, display and delete-then-navigate."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
import threading
from typing import Hashable

from loguru import logger

from app.viewmodels.report_vm import ReportVM
from core.errors import NormalizationError, ReportNotFoundError, TransportError
from core.messages import DEFAULT_MESSAGES
from core.services.interfaces import ReportClient
from core.services.normalizer import DEFAULT_PLACEHOLDERS, Placeholders, normalize


class DetailState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ReportDetailSnapshot:
    """Immutable state of the detail view."""

    state: DetailState
    detail: ReportVM | None
    error_message: str = ""
    notice: str = ""

    @property
    def report(self):
        return self.detail.report if self.detail is not None else None

    @property
    def is_video_media(self) -> bool:
        return self.detail is not None and self.detail.is_video_media


class ReportDetailVM:
    """Loads one report and deletes it on request.

    After a successful delete, `on_navigate_back` is called so the shell can
    return to the list.
    """

    def __init__(
        self,
        client: ReportClient,
        on_navigate_back: Callable[[], None] | None = None,
        placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
        messages: Mapping[str, str] | None = None,
    ) -> None:
        self._client = client
        self._on_navigate_back = on_navigate_back
        self._placeholders = placeholders
        self._messages = {**DEFAULT_MESSAGES, **(messages or {})}
        self._state = DetailState.IDLE
        self._detail: ReportVM | None = None
        self._error_message = ""
        self._notice = ""
        self._load_seq = 0
        self._seq_lock = threading.Lock()

    @property
    def state(self) -> DetailState:
        return self._state

    def snapshot(self) -> ReportDetailSnapshot:
        return ReportDetailSnapshot(
            state=self._state,
            detail=self._detail,
            error_message=self._error_message,
            notice=self._notice,
        )

    def load_one(self, report_id: Hashable) -> ReportDetailSnapshot:
        """Fetch and normalize `report_id`.

        The route id doubles as the fallback identifier, so records that
        carry no id field of their own still load. Only the most recently
        issued load may commit; an older response arriving late is dropped.
        """
        with self._seq_lock:
            self._load_seq += 1
            seq = self._load_seq
            self._state = DetailState.LOADING
            self._detail = None
            self._error_message = ""
            self._notice = ""
        try:
            raw = self._client.fetch_one(report_id)
            report = normalize(raw, fallback_id=report_id, placeholders=self._placeholders)
        except ReportNotFoundError as ex:
            logger.warning("Report {} not found: {}", report_id, ex)
            return self._fail(seq)
        except (TransportError, NormalizationError) as ex:
            logger.error("Report {} could not be loaded: {}", report_id, ex)
            return self._fail(seq)
        except Exception as ex:  # collaborator boundary
            logger.exception("Unexpected error loading report {}: {}", report_id, ex)
            return self._fail(seq)

        detail = ReportVM(report=report, no_summary_text=self._messages["no_summary"])
        with self._seq_lock:
            if seq != self._load_seq:
                logger.debug("Discarding stale load of report {}", report_id)
            else:
                self._detail = detail
                self._state = DetailState.READY
        return self.snapshot()

    def delete_one(self, report_id: Hashable | None = None) -> bool:
        """Delete `report_id`, by default the displayed report.

        Returns True after a successful delete (and navigation); on failure
        the report stays displayed and a notice is set.
        """
        if self._state is not DetailState.READY or self._detail is None:
            logger.warning("Ignoring delete while {}", self._state.name)
            return False
        if report_id is None:
            report_id = self._detail.report.id
        self._notice = ""
        try:
            accepted = self._client.delete_one(report_id)
        except Exception as ex:  # collaborator boundary
            logger.error("Delete of report {} failed: {}", report_id, ex)
            accepted = False
        if accepted is False:
            self._notice = self._messages["delete_failed"]
            return False

        logger.info("Report {} deleted", report_id)
        if self._on_navigate_back is not None:
            self._on_navigate_back()
        return True

    def _fail(self, seq: int) -> ReportDetailSnapshot:
        with self._seq_lock:
            if seq == self._load_seq:
                self._state = DetailState.ERROR
                self._error_message = self._messages["detail_failed"]
        return self.snapshot()
