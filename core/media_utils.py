"""Media type detection for report attachments."""

from __future__ import annotations

from urllib.parse import urlparse

VIDEO_EXTENSIONS = {".mp4", ".webm", ".ogg"}


def is_video(url: str) -> bool:
    """Check if a media URL points at a playable video based on extension.

    Query strings and fragments are ignored, and the comparison is
    case-insensitive.

    Args:
        url: Media URL or path to check

    Returns:
        bool: True if the file is a video format
    """
    if not url:
        return False
    path = urlparse(url).path or url
    dot = path.rfind(".")
    if dot < 0 or "/" in path[dot:]:
        return False
    return path[dot:].lower() in VIDEO_EXTENSIONS


def format_offset(seconds: float) -> str:
    """Format a highlight offset, dropping a zero fractional part."""
    if float(seconds).is_integer():
        return str(int(seconds))
    return f"{seconds:g}"
