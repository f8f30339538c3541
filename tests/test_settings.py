"""Tests for JSON settings and AppConfig parsing."""

import json
from pathlib import Path

import pytest

from core.messages import DEFAULT_MESSAGES
from infrastructure.settings import AppConfig, JsonSettings, load_app_config


def _settings(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return JsonSettings(path)


class TestJsonSettings:
    def test_dotted_get(self, tmp_path):
        settings = _settings(tmp_path, {"api": {"base_url": "http://x"}})

        assert settings.get("api.base_url") == "http://x"
        assert settings.get("api.missing", 5) == 5
        assert settings.get("api.base_url.deeper", "d") == "d"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonSettings(tmp_path / "nope.json")


class TestLoadAppConfig:
    def test_defaults_for_empty_file(self, tmp_path):
        config = load_app_config(_settings(tmp_path, {}))

        assert config == AppConfig()
        assert config.page_size == 5
        assert config.user_no == 1

    def test_values_are_read(self, tmp_path):
        config = load_app_config(
            _settings(
                tmp_path,
                {
                    "user": {"user_no": 42},
                    "api": {"base_url": "https://reports.example.com/", "timeout_seconds": 2.5},
                    "list": {"page_size": 10, "max_delete_workers": 2},
                    "placeholders": {"title": "제목 없음"},
                    "messages": {"load_failed": "목록을 불러오지 못했습니다."},
                },
            )
        )

        assert config.user_no == 42
        assert config.api_base_url == "https://reports.example.com"
        assert config.api_timeout == 2.5
        assert config.page_size == 10
        assert config.max_delete_workers == 2
        assert config.placeholders.title == "제목 없음"
        assert config.placeholders.author == "-"
        assert config.messages["load_failed"] == "목록을 불러오지 못했습니다."
        assert config.messages["no_summary"] == DEFAULT_MESSAGES["no_summary"]

    @pytest.mark.parametrize("bad", [0, -3, "many", None])
    def test_invalid_page_size_falls_back(self, tmp_path, bad):
        config = load_app_config(_settings(tmp_path, {"list": {"page_size": bad}}))
        assert config.page_size == 5

    def test_repository_settings_file_parses(self):
        path = Path(__file__).resolve().parent.parent / "settings.json"
        config = load_app_config(JsonSettings(path))

        assert config.page_size == 5
        assert config.user_no == 1
