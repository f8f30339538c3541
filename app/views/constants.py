"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

from PySide6.QtCore import Qt

# Report table columns
HEADERS: list[str] = [
    "",
    "No",
    "Title",
    "Date",
    "Author",
]

COL_SEL: int = 0
COL_NO: int = 1
COL_TITLE: int = 2
COL_DATE: int = 3
COL_AUTHOR: int = 4
NUM_COLUMNS: int = 5


# Data roles
ID_ROLE: int = Qt.UserRole  # report id stored on the check item


# Window defaults
WINDOW_TITLE: str = "Video Reports"
WINDOW_MIN_WIDTH: int = 720
WINDOW_MIN_HEIGHT: int = 480
MEDIA_MIN_HEIGHT: int = 240
