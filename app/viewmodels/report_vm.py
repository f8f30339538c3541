"""Lightweight view model wrappers around `Report`."""

from __future__ import annotations

from dataclasses import dataclass

from core.media_utils import format_offset, is_video
from core.models import Highlight, Report

UNKNOWN_DATE_TEXT = "-"


def format_date(report: Report) -> str:
    """ISO date text, or a dash when the date is unknown."""
    return report.date.isoformat() if report.date is not None else UNKNOWN_DATE_TEXT


def format_highlight(highlight: Highlight) -> str:
    """Render a highlight as `[start s ~ end s] label` when both bounds exist."""
    if highlight.start is not None and highlight.end is not None:
        return (
            f"[{format_offset(highlight.start)}s ~ {format_offset(highlight.end)}s] "
            f"{highlight.label}"
        )
    return highlight.label


@dataclass(frozen=True)
class ReportRow:
    """One row of the report table."""

    report: Report
    row_number: int
    is_selected: bool

    @property
    def id(self):
        return self.report.id

    @property
    def title(self) -> str:
        return self.report.title

    @property
    def author(self) -> str:
        return self.report.author

    @property
    def display_date(self) -> str:
        """Date column text."""
        return format_date(self.report)


@dataclass(frozen=True)
class ReportVM:
    """Expose convenient properties of a detailed report for the view."""

    report: Report
    no_summary_text: str = ""

    @property
    def display_date(self) -> str:
        return format_date(self.report)

    @property
    def has_media(self) -> bool:
        return bool(self.report.video_url)

    @property
    def is_video_media(self) -> bool:
        """True if the media URL is a playable video rather than an image."""
        return is_video(self.report.video_url)

    @property
    def summary_text(self) -> str:
        return self.report.summary or self.no_summary_text

    @property
    def highlight_lines(self) -> list[str]:
        return [format_highlight(h) for h in self.report.highlights]
