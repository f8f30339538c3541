"""MainWindow hosting the report list and report detail pages."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QMainWindow, QStackedWidget
from loguru import logger

from app.viewmodels.report_detail_vm import ReportDetailVM
from app.viewmodels.report_list_vm import ReportListVM
from app.views.constants import WINDOW_MIN_HEIGHT, WINDOW_MIN_WIDTH, WINDOW_TITLE
from app.views.report_detail_page import ReportDetailPage
from app.views.report_list_page import ReportListPage
from app.views.view_tasks import ViewTaskRunner
from core.services.interfaces import ReportClient
from infrastructure.settings import AppConfig


class MainWindow(QMainWindow):
    """Two-page shell: list and detail, switched through a stacked widget."""

    navigateToList = Signal()

    def __init__(self, client: ReportClient, config: AppConfig) -> None:
        """Initialize the window and both view-models.

        Args:
            client: Report client shared by both pages
            config: Application configuration
        """
        super().__init__()
        self._tasks = ViewTaskRunner()

        self.list_vm = ReportListVM(
            client,
            user_no=config.user_no,
            page_size=config.page_size,
            placeholders=config.placeholders,
            messages=config.messages,
            max_delete_workers=config.max_delete_workers,
        )
        self.detail_vm = ReportDetailVM(
            client,
            on_navigate_back=self.navigateToList.emit,
            placeholders=config.placeholders,
            messages=config.messages,
        )

        self.pages = QStackedWidget(self)
        self.list_page = ReportListPage(self.list_vm, self._tasks, on_open_report=self.show_detail)
        self.detail_page = ReportDetailPage(self.detail_vm, self._tasks, on_back=self.show_list)
        self.pages.addWidget(self.list_page)
        self.pages.addWidget(self.detail_page)
        self.setCentralWidget(self.pages)

        self.navigateToList.connect(self._on_report_deleted)

        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumSize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT)

    def show_list(self) -> None:
        self.pages.setCurrentWidget(self.list_page)

    def show_detail(self, report_id: Any) -> None:
        logger.info("Opening report {}", report_id)
        self.pages.setCurrentWidget(self.detail_page)
        self.detail_page.open_report(report_id)

    def _on_report_deleted(self) -> None:
        self.detail_page.clear_media()
        self.show_list()
        self.list_page.load()
