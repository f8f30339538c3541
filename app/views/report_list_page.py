"""ReportListPage: table of reports with search, paging and bulk delete."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from app.viewmodels.report_list_vm import ListState, ReportListSnapshot, ReportListVM
from app.views.constants import (
    COL_AUTHOR,
    COL_DATE,
    COL_NO,
    COL_SEL,
    COL_TITLE,
    HEADERS,
    ID_ROLE,
    NUM_COLUMNS,
)
from app.views.view_tasks import ViewTaskRunner


class ReportListPage(QWidget):
    """Renders `ReportListSnapshot`s and forwards user actions to the VM."""

    # Snapshots may be published from worker threads; hop to the GUI thread.
    snapshotReady = Signal(object)

    def __init__(
        self,
        vm: ReportListVM,
        tasks: ViewTaskRunner,
        on_open_report: Callable[[Any], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._vm = vm
        self._tasks = tasks
        self._on_open_report = on_open_report
        self._rendering = False
        self._setup_ui()
        self.snapshotReady.connect(self.show_snapshot)
        self._unsubscribe = vm.subscribe(self.snapshotReady.emit)

    def _setup_ui(self) -> None:
        root = QVBoxLayout(self)

        title = QLabel("Video Reports")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        root.addWidget(title)

        toolbar = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search by title")
        self.search_input.returnPressed.connect(self._on_search)
        self.btn_search = QPushButton("Search")
        self.btn_search.clicked.connect(self._on_search)
        self.btn_delete = QPushButton("Delete selected")
        self.btn_delete.clicked.connect(self._on_delete_selected)
        self.btn_retry = QPushButton("Retry")
        self.btn_retry.clicked.connect(lambda: self._tasks.submit("retry", self._vm.retry))
        toolbar.addWidget(self.search_input, 1)
        toolbar.addWidget(self.btn_search)
        toolbar.addWidget(self.btn_delete)
        toolbar.addWidget(self.btn_retry)
        root.addLayout(toolbar)

        self.hint_label = QLabel()
        self.hint_label.setWordWrap(True)
        root.addWidget(self.hint_label)

        self.table = QTableWidget(0, NUM_COLUMNS)
        self.table.setHorizontalHeaderLabels(HEADERS)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.horizontalHeader().setSectionResizeMode(COL_TITLE, QHeaderView.Stretch)
        self.table.itemChanged.connect(self._on_item_changed)
        self.table.cellDoubleClicked.connect(self._on_cell_double_clicked)
        root.addWidget(self.table, 1)

        self.pagination = QHBoxLayout()
        root.addLayout(self.pagination)

    def load(self) -> None:
        """Start loading the list in the background."""
        self._tasks.submit("load", self._vm.load)

    # Rendering

    def show_snapshot(self, snap: ReportListSnapshot) -> None:
        """Redraw the page from `snap`."""
        self._rendering = True
        try:
            busy = snap.state in (ListState.LOADING, ListState.DELETING)
            self.search_input.setEnabled(snap.state is ListState.READY)
            self.btn_search.setEnabled(snap.state is ListState.READY)
            self.btn_delete.setEnabled(snap.can_delete)
            self.btn_retry.setVisible(snap.state is ListState.ERROR)

            if snap.state is ListState.ERROR:
                self.hint_label.setText(snap.error_message)
            elif busy:
                self.hint_label.setText(
                    "Loading..." if snap.state is ListState.LOADING else "Deleting..."
                )
            else:
                self.hint_label.setText(snap.notice or snap.empty_hint)

            self._render_rows(snap)
            self._render_pagination(snap)
        finally:
            self._rendering = False

    def _render_rows(self, snap: ReportListSnapshot) -> None:
        self.table.setRowCount(len(snap.items))
        for r, row in enumerate(snap.items):
            check = QTableWidgetItem()
            check.setFlags(Qt.ItemIsUserCheckable | Qt.ItemIsEnabled)
            check.setCheckState(Qt.Checked if row.is_selected else Qt.Unchecked)
            check.setData(ID_ROLE, row.id)
            self.table.setItem(r, COL_SEL, check)
            self.table.setItem(r, COL_NO, QTableWidgetItem(str(row.row_number)))
            self.table.setItem(r, COL_TITLE, QTableWidgetItem(row.title))
            self.table.setItem(r, COL_DATE, QTableWidgetItem(row.display_date))
            self.table.setItem(r, COL_AUTHOR, QTableWidgetItem(row.author))

    def _render_pagination(self, snap: ReportListSnapshot) -> None:
        while self.pagination.count():
            item = self.pagination.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        if not snap.show_pagination:
            return
        self.pagination.addStretch(1)
        for page in range(1, snap.total_pages + 1):
            btn = QPushButton(str(page))
            btn.setCheckable(True)
            btn.setChecked(page == snap.current_page)
            btn.clicked.connect(lambda _checked=False, p=page: self._vm.set_page(p))
            self.pagination.addWidget(btn)
        self.pagination.addStretch(1)

    # Actions

    def _on_search(self) -> None:
        self._vm.search(self.search_input.text())

    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        if self._rendering or item.column() != COL_SEL:
            return
        self._vm.toggle_select(item.data(ID_ROLE))

    def _on_cell_double_clicked(self, row: int, _column: int) -> None:
        check = self.table.item(row, COL_SEL)
        if check is not None:
            self._on_open_report(check.data(ID_ROLE))

    def _on_delete_selected(self) -> None:
        count = self._vm.selection.selected_count()
        if count == 0:
            # Lets the VM surface its "select first" notice.
            self._vm.delete_selected()
            return
        answer = QMessageBox.question(self, "Confirm Delete", f"Delete {count} report(s)?")
        if answer != QMessageBox.Yes:
            return
        self._tasks.submit("delete_selected", self._vm.delete_selected)
