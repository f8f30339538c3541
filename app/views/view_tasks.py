"""Background execution of blocking view-model commands on the Qt thread pool."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QRunnable, QThreadPool
from loguru import logger


class _ViewModelTask(QRunnable):
    """QRunnable running one blocking view-model command off the GUI thread.

    Results reach the GUI through the view-model's snapshot listeners, which
    the pages connect to Qt signals, so the task itself returns nothing.
    """

    def __init__(self, *, name: str, command: Callable[[], Any]) -> None:
        super().__init__()
        self._name = name
        self._command = command

    def run(self) -> None:  # type: ignore[override]
        try:
            self._command()
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.exception("View task {} failed: {}", self._name, ex)


class ViewTaskRunner:
    """Dispatches view-model commands that hit the network to the thread pool."""

    def __init__(self, pool: QThreadPool | None = None) -> None:
        self._pool = pool or QThreadPool.globalInstance()

    def submit(self, name: str, command: Callable[[], Any]) -> None:
        """Run `command` in the background; `name` only labels log lines."""
        logger.debug("Submitting view task {}", name)
        self._pool.start(_ViewModelTask(name=name, command=command))
