"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any

from loguru import logger

from core.messages import DEFAULT_MESSAGES
from core.services.collection_store import DEFAULT_PAGE_SIZE
from core.services.normalizer import Placeholders


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


@dataclass(frozen=True)
class AppConfig:
    """Typed application configuration derived from `settings.json`."""

    user_no: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    max_delete_workers: int = 8
    api_base_url: str = "http://127.0.0.1:8000"
    api_timeout: float = 10.0
    list_path: str = "/api/reports/video"
    detail_path: str = "/api/reports/video/{report_id}"
    placeholders: Placeholders = Placeholders()
    messages: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MESSAGES))


def _positive_int(settings: JsonSettings, key: str, default: int) -> int:
    raw = settings.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for {}: {!r}, using {}", key, raw, default)
        return default
    if value < 1:
        logger.warning("Non-positive value for {}: {}, using {}", key, value, default)
        return default
    return value


def _positive_float(settings: JsonSettings, key: str, default: float) -> float:
    raw = settings.get(key, default)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid number for {}: {!r}, using {}", key, raw, default)
        return default
    return value if value > 0 else default


def _text(settings: JsonSettings, key: str, default: str) -> str:
    raw = settings.get(key, default)
    return str(raw) if raw else default


def load_app_config(settings: JsonSettings) -> AppConfig:
    """Build an `AppConfig` from `settings`, falling back to defaults."""
    defaults = AppConfig()
    messages = dict(DEFAULT_MESSAGES)
    raw_messages = settings.get("messages", {})
    if isinstance(raw_messages, dict):
        messages.update({str(k): str(v) for k, v in raw_messages.items() if v})

    return AppConfig(
        user_no=_positive_int(settings, "user.user_no", defaults.user_no),
        page_size=_positive_int(settings, "list.page_size", defaults.page_size),
        max_delete_workers=_positive_int(
            settings, "list.max_delete_workers", defaults.max_delete_workers
        ),
        api_base_url=_text(settings, "api.base_url", defaults.api_base_url).rstrip("/"),
        api_timeout=_positive_float(settings, "api.timeout_seconds", defaults.api_timeout),
        list_path=_text(settings, "api.list_path", defaults.list_path),
        detail_path=_text(settings, "api.detail_path", defaults.detail_path),
        placeholders=Placeholders(
            title=_text(settings, "placeholders.title", defaults.placeholders.title),
            author=_text(settings, "placeholders.author", defaults.placeholders.author),
        ),
        messages=messages,
    )
