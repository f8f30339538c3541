"""Normalization of raw report records into canonical `Report` objects.

Remote records come from different endpoints that disagree on field names
(`id` vs `record_no`, `title` vs `r_title`, ...). Each canonical field is
resolved from a fixed list of candidate keys; the first usable value wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Hashable

from core.errors import NormalizationError
from core.models import Highlight, Report

ID_FIELDS: tuple[str, ...] = ("id", "record_no", "report_no")
TITLE_FIELDS: tuple[str, ...] = ("title", "r_title")
DATE_FIELDS: tuple[str, ...] = ("date", "r_date", "createdDate")
AUTHOR_FIELDS: tuple[str, ...] = ("author",)
MEDIA_FIELDS: tuple[str, ...] = ("video_url", "thumbnail_url")
SUMMARY_FIELDS: tuple[str, ...] = ("r_content", "summary")
STATS_FIELDS: tuple[str, ...] = ("behavior_stats", "behaviorStats")

_DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d %H:%M:%S", "%Y.%m.%d", "%Y/%m/%d")


@dataclass(frozen=True)
class Placeholders:
    """Display text used when a record lacks a title or author."""

    title: str = "Untitled"
    author: str = "-"


DEFAULT_PLACEHOLDERS = Placeholders()


def _first_present(raw: Mapping[str, Any], fields: tuple[str, ...]) -> Any:
    for name in fields:
        value = raw.get(name)
        if value is not None:
            return value
    return None


def _first_text(raw: Mapping[str, Any], fields: tuple[str, ...]) -> str:
    for name in fields:
        value = raw.get(name)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def parse_date(value: Any) -> date | None:
    """Parse `value` into a calendar date.

    Accepts date/datetime objects, ISO 8601 strings (with optional `Z`
    suffix) and a few common separators. Returns None if unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _to_seconds(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _parse_highlights(value: Any) -> tuple[Highlight, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    result: list[Highlight] = []
    for entry in value:
        if not isinstance(entry, Mapping):
            continue
        label = entry.get("label")
        result.append(
            Highlight(
                label="" if label is None else str(label),
                start=_to_seconds(entry.get("start")),
                end=_to_seconds(entry.get("end")),
            )
        )
    return tuple(result)


def normalize(
    raw: Mapping[str, Any],
    fallback_id: Hashable | None = None,
    placeholders: Placeholders = DEFAULT_PLACEHOLDERS,
) -> Report:
    """Map a raw remote record onto a canonical `Report`.

    Args:
        raw: Record as returned by the report client.
        fallback_id: Identifier used when the record carries none, e.g. the
            id taken from the detail route.
        placeholders: Display text for missing title/author.

    Raises:
        NormalizationError: If no usable identifier can be resolved.
    """
    if not isinstance(raw, Mapping):
        raise NormalizationError(f"Raw record is not a mapping: {type(raw).__name__}")

    report_id = _first_present(raw, ID_FIELDS)
    if report_id is None:
        report_id = fallback_id
    if report_id is None:
        raise NormalizationError(f"No identifier in record (tried {', '.join(ID_FIELDS)})")
    try:
        hash(report_id)
    except TypeError:
        kind = type(report_id).__name__
        raise NormalizationError(f"Identifier is not hashable: {kind}") from None

    report_date: date | None = None
    for name in DATE_FIELDS:
        report_date = parse_date(raw.get(name))
        if report_date is not None:
            break

    stats = _first_present(raw, STATS_FIELDS)

    return Report(
        id=report_id,
        title=_first_text(raw, TITLE_FIELDS) or placeholders.title,
        date=report_date,
        author=_first_text(raw, AUTHOR_FIELDS) or placeholders.author,
        video_url=_first_text(raw, MEDIA_FIELDS),
        summary=_first_text(raw, SUMMARY_FIELDS),
        highlights=_parse_highlights(raw.get("highlights")),
        behavior_stats=dict(stats) if isinstance(stats, Mapping) else {},
    )
