"""HTTP transport for datasource requests.

Posts ``{"datasource", "query", "payload"}`` as JSON to a configured endpoint
and expects ``{"state", "errors", "data"}`` back, where each ``data`` entry is
either ``{"refId", "fields": {name: [values]}}`` or ``{"refId", "rows": [...]}``.

The blocking ``requests`` call runs in a worker thread so the event loop is
never blocked. Network failures are retried with exponential backoff and
jitter unless the caller passes ``retry=False`` (writes are sent exactly once);
an explicit error state from the server is returned as-is (it is a
query-level outcome, not a transport failure).
"""
from __future__ import annotations

import asyncio
import random
from typing import Any, Protocol

from app_logging import get_logger
from config import get_settings
from exceptions import DatasourceRequestError
from models import ResultSet

from .base import DatasourceResponse, LoadingState, ReplaceVariables, interpolate_query


class HTTPClient(Protocol):
    def __call__(self, url: str, json: dict[str, Any] | None = None, headers: dict[str, str] | None = None, timeout: float | None = None) -> Any:  # noqa: D401,E501
        ...


class HttpDatasourceRequest:
    name: str = "http"

    def __init__(self, url: str | None = None, http: HTTPClient | None = None, *, timeout: float | None = None, token: str | None = None):
        settings = get_settings()
        self._url = url or settings.datasource_url or ""
        self._http = http or self._default_http
        self._timeout = timeout if timeout is not None else settings.api_timeout
        self._token = token if token is not None else settings.datasource_token
        self._max_retries = settings.api_max_retries
        self._backoff_base = settings.api_backoff_base
        self._backoff_jitter = settings.api_backoff_jitter
        self._log = get_logger(f"datasource.{self.name}")

    async def __call__(self, *, query: dict[str, Any], datasource: str, payload: Any, replace_variables: ReplaceVariables, retry: bool = True) -> DatasourceResponse:  # noqa: E501
        if not self._url:
            raise DatasourceRequestError(datasource, "no datasource url configured")
        body = {
            "datasource": datasource,
            "query": interpolate_query(query, replace_variables),
            "payload": payload,
        }
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._log.debug("request", extra={"url": self._url, "datasource": datasource})
        max_retries = self._max_retries if retry else 0
        raw = await self._request_with_retries(datasource, body, headers, max_retries)
        response = self._normalize(raw)
        self._log.info("fetched", extra={"datasource": datasource, "state": response.state.value, "frames": len(response.data)})
        return response

    async def _request_with_retries(self, datasource: str, body: dict[str, Any], headers: dict[str, str], max_retries: int):
        attempt = 0
        while True:
            try:
                return await asyncio.to_thread(self._http, self._url, json=body, headers=headers, timeout=self._timeout)
            except DatasourceRequestError:
                raise
            except Exception as e:  # broad catch to wrap network errors
                if attempt >= max_retries:
                    raise DatasourceRequestError(datasource, f"failed after {attempt + 1} attempts: {e}") from e
                sleep_for = self._backoff_base * (2 ** attempt)
                if self._backoff_jitter:
                    sleep_for += random.random() * self._backoff_jitter
                self._log.warning(
                    "retrying", extra={"attempt": attempt + 1, "max": max_retries + 1, "sleep": round(sleep_for, 4)}
                )
                await asyncio.sleep(sleep_for)
                attempt += 1

    @staticmethod
    def _normalize(raw: Any) -> DatasourceResponse:
        if not isinstance(raw, dict):
            raise DatasourceRequestError("http", f"unexpected response type {type(raw).__name__}")
        try:
            state = LoadingState(raw.get("state", LoadingState.DONE.value))
        except ValueError:
            state = LoadingState.DONE
        frames: list[ResultSet] = []
        for entry in raw.get("data") or []:
            ref_id = entry.get("refId", "")
            if "fields" in entry:
                frames.append(ResultSet.from_fields(entry["fields"], ref_id=ref_id))
            else:
                frames.append(ResultSet.from_records(entry.get("rows", []), ref_id=ref_id))
        return DatasourceResponse(state=state, errors=raw.get("errors"), data=frames)

    # Default HTTP client using requests (lazy import so tests can inject a stub)
    def _default_http(self, url: str, json: dict[str, Any] | None = None, headers: dict[str, str] | None = None, timeout: float | None = None):  # noqa: E501
        import requests

        r = requests.post(url, json=json, headers=headers, timeout=timeout or 10)
        r.raise_for_status()
        return r.json()


__all__ = ["HttpDatasourceRequest", "HTTPClient"]
