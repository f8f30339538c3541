from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.views.main_window import MainWindow
from infrastructure.logging import init_logging
from infrastructure.report_client import RequestsReportClient
from infrastructure.settings import JsonSettings, load_app_config


BASE_DIR = Path(__file__).parent


def main() -> int:
    init_logging()
    settings = JsonSettings(BASE_DIR / "settings.json")
    config = load_app_config(settings)
    logger.info(
        "Starting report viewer for user {} against {}", config.user_no, config.api_base_url
    )

    app = QApplication(sys.argv)

    client = RequestsReportClient(config)
    win = MainWindow(client=client, config=config)
    win.list_page.load()
    win.statusBar().showMessage("Ready", 2000)
    win.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
