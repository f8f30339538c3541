"""ReportDetailPage: one report with media, summary, highlights and delete."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPainter
from PySide6.QtPrintSupport import QPrintDialog, QPrinter
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.report_detail_vm import DetailState, ReportDetailSnapshot, ReportDetailVM
from app.views.video_player import VideoPlayerWidget
from app.views.view_tasks import ViewTaskRunner


class ReportDetailPage(QWidget):
    """Renders `ReportDetailSnapshot`s for the report detail route."""

    snapshotReady = Signal(object)

    def __init__(
        self,
        vm: ReportDetailVM,
        tasks: ViewTaskRunner,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._vm = vm
        self._tasks = tasks
        self._on_back = on_back
        self._player: VideoPlayerWidget | None = None
        self._current_id: Any = None
        self._setup_ui()
        self.snapshotReady.connect(self.show_snapshot)

    def _setup_ui(self) -> None:
        root = QVBoxLayout(self)

        self.date_label = QLabel()
        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        self.status_label = QLabel()
        self.status_label.setWordWrap(True)
        root.addWidget(self.date_label)
        root.addWidget(self.title_label)
        root.addWidget(self.status_label)

        self.media_box = QVBoxLayout()
        root.addLayout(self.media_box)

        root.addWidget(QLabel("Behavior summary"))
        self.summary_label = QLabel()
        self.summary_label.setWordWrap(True)
        self.summary_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        root.addWidget(self.summary_label)

        root.addWidget(QLabel("Highlights"))
        self.highlights = QListWidget()
        root.addWidget(self.highlights, 1)

        buttons = QHBoxLayout()
        self.btn_back = QPushButton("Back to list")
        self.btn_back.clicked.connect(self._go_back)
        self.btn_print = QPushButton("Print")
        self.btn_print.clicked.connect(self._on_print)
        self.btn_delete = QPushButton("Delete")
        self.btn_delete.clicked.connect(self._on_delete)
        buttons.addWidget(self.btn_back)
        buttons.addStretch(1)
        buttons.addWidget(self.btn_print)
        buttons.addWidget(self.btn_delete)
        root.addLayout(buttons)

    def open_report(self, report_id: Any) -> None:
        """Show the page for `report_id` and load it in the background."""
        self.show_snapshot(ReportDetailSnapshot(state=DetailState.LOADING, detail=None))
        self._current_id = report_id
        self._tasks.submit(f"load_one:{report_id}", lambda: self._load_in_background(report_id))

    def _load_in_background(self, report_id: Any) -> None:
        snap = self._vm.load_one(report_id)
        # Another report was opened meanwhile; its own load will render.
        if report_id == self._current_id:
            self.snapshotReady.emit(snap)

    def show_snapshot(self, snap: ReportDetailSnapshot) -> None:
        self.clear_media()
        self.btn_delete.setEnabled(snap.state is DetailState.READY)
        self.btn_print.setEnabled(snap.state is DetailState.READY)
        self.highlights.clear()

        if snap.detail is None:
            self.date_label.clear()
            self.title_label.clear()
            self.summary_label.clear()
            if snap.state is DetailState.ERROR:
                self.status_label.setText(snap.error_message)
            else:
                self.status_label.setText("Loading...")
            return

        detail = snap.detail
        self.status_label.setText(snap.notice)
        self.date_label.setText(detail.display_date)
        self.title_label.setText(detail.report.title)
        self.summary_label.setText(detail.summary_text)
        self.highlights.addItems(detail.highlight_lines)

        if detail.has_media:
            if detail.is_video_media:
                self._player = VideoPlayerWidget(detail.report.video_url, self)
                self.media_box.addWidget(self._player)
            else:
                link = QLabel(f'<a href="{detail.report.video_url}">Open scene image</a>')
                link.setOpenExternalLinks(True)
                self.media_box.addWidget(link)

    def clear_media(self) -> None:
        """Stop playback and drop the media widget."""
        if self._player is not None:
            self._player.stop()
            self._player = None
        while self.media_box.count():
            item = self.media_box.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

    def _go_back(self) -> None:
        self.clear_media()
        self._on_back()

    def _on_delete(self) -> None:
        answer = QMessageBox.question(self, "Confirm Delete", "Delete this report?")
        if answer != QMessageBox.Yes:
            return
        self.btn_delete.setEnabled(False)
        self._tasks.submit("delete_one", self._delete_in_background)

    def _delete_in_background(self) -> None:
        # Success navigates through the view-model callback.
        if not self._vm.delete_one():
            self.snapshotReady.emit(self._vm.snapshot())

    def _on_print(self) -> None:
        printer = QPrinter(QPrinter.HighResolution)
        dialog = QPrintDialog(printer, self)
        if dialog.exec() != QDialog.Accepted:
            return
        painter = QPainter(printer)
        try:
            viewport = painter.viewport()
            size = self.size()
            size.scale(viewport.size(), Qt.KeepAspectRatio)
            painter.setViewport(viewport.x(), viewport.y(), size.width(), size.height())
            painter.setWindow(self.rect())
            self.render(painter)
        finally:
            painter.end()
        logger.info("Printed report page")
