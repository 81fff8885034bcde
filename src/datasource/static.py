"""Datasource request answering from a fixed list of responses.

Useful for previews and tests: each call pops the next queued response (or
raises the queued exception) and records the call arguments.
"""
from __future__ import annotations

from typing import Any

from .base import DatasourceResponse, ReplaceVariables, interpolate_query


class StaticDatasourceRequest:
    name: str = "static"

    def __init__(self, responses: list[DatasourceResponse | BaseException] | None = None, *, default: DatasourceResponse | None = None):
        self._responses = list(responses or [])
        self._default = default or DatasourceResponse()
        self.calls: list[dict[str, Any]] = []

    def queue(self, response: DatasourceResponse | BaseException) -> None:
        self._responses.append(response)

    async def __call__(self, *, query: dict[str, Any], datasource: str, payload: Any, replace_variables: ReplaceVariables, retry: bool = True) -> DatasourceResponse:  # noqa: E501
        self.calls.append(
            {
                "query": interpolate_query(query, replace_variables),
                "datasource": datasource,
                "payload": payload,
                "retry": retry,
            }
        )
        response = self._responses.pop(0) if self._responses else self._default
        if isinstance(response, BaseException):
            raise response
        return response


__all__ = ["StaticDatasourceRequest"]
