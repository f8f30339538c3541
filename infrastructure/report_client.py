"""HTTP report client backed by `requests`.

Translates transport problems into the core error taxonomy so view-models
only ever see `TransportError` / `ReportNotFoundError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Hashable
from urllib.parse import quote

from loguru import logger
import requests

from core.errors import ReportNotFoundError, TransportError
from infrastructure.settings import AppConfig

_LIST_KEYS = ("items", "reports", "data")


class RequestsReportClient:
    """Report client talking to the report REST API."""

    def __init__(self, config: AppConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self._config.api_base_url}{path}"

    def _detail_url(self, report_id: Hashable) -> str:
        path = self._config.detail_path.format(report_id=quote(str(report_id), safe=""))
        return self._url(path)

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self._session.request(
                method, url, timeout=self._config.api_timeout, **kwargs
            )
        except requests.RequestException as ex:
            logger.error("{} {} failed: {}", method, url, ex)
            raise TransportError(f"{method} {url} failed: {ex}") from ex
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as ex:
            logger.error("Non-JSON response from {}: {}", response.url, ex)
            raise TransportError(f"Server returned non-JSON for {response.url}") from ex

    def fetch_list(self, user_no: int) -> list[Mapping[str, Any]]:
        """Return raw report records of `user_no`."""
        url = self._url(self._config.list_path)
        response = self._request("GET", url, params={"user_no": user_no})
        if not response.ok:
            logger.error("Report list request failed: {} {}", response.status_code, url)
            raise TransportError(f"Report list request failed: {response.status_code}")
        data = self._json(response)
        if isinstance(data, Mapping):
            for key in _LIST_KEYS:
                if isinstance(data.get(key), list):
                    data = data[key]
                    break
        if not isinstance(data, list):
            raise TransportError("Report list response is not a list")
        logger.info("Fetched {} raw report(s) for user {}", len(data), user_no)
        return data

    def fetch_one(self, report_id: Hashable) -> Mapping[str, Any]:
        """Return the raw record of `report_id`."""
        url = self._detail_url(report_id)
        response = self._request("GET", url)
        if response.status_code == 404:
            raise ReportNotFoundError(f"Report {report_id} not found")
        if not response.ok:
            logger.error("Report detail request failed: {} {}", response.status_code, url)
            raise TransportError(f"Report detail request failed: {response.status_code}")
        data = self._json(response)
        if not isinstance(data, Mapping):
            raise TransportError(f"Report {report_id} response is not an object")
        return data

    def delete_one(self, report_id: Hashable) -> bool:
        """Delete `report_id`; returns True when the server accepted it."""
        url = self._detail_url(report_id)
        response = self._request("DELETE", url)
        if not response.ok:
            logger.warning("Delete of report {} rejected: {}", report_id, response.status_code)
            return False
        return True
