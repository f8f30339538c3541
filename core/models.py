"""Core domain models for video analysis reports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Hashable


@dataclass(frozen=True)
class Highlight:
    """A labelled moment of the analysed video.

    `start`/`end` are offsets in seconds and may be missing upstream.
    """

    label: str = ""
    start: float | None = None
    end: float | None = None


@dataclass(frozen=True)
class Report:
    """A canonical report produced by the normalizer.

    `date` is None when the upstream record has no parseable date.
    Detail-only fields default to empty values so list rows and detail
    records share one shape.
    """

    id: Hashable
    title: str
    date: date | None
    author: str
    video_url: str = ""
    summary: str = ""
    highlights: tuple[Highlight, ...] = ()
    behavior_stats: Mapping[str, Any] = field(default_factory=dict, hash=False)
