"""Datasource request collaborator.

The grid core treats the remote data source as an opaque async request
executor. It only inspects ``state`` (error vs. anything else) and
``data[0]`` (first result set) of a response.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from models import ResultSet

ReplaceVariables = Callable[[str], str]


class LoadingState(str, Enum):
    NOT_STARTED = "NotStarted"
    LOADING = "Loading"
    STREAMING = "Streaming"
    DONE = "Done"
    ERROR = "Error"


@dataclass
class DatasourceResponse:
    state: LoadingState = LoadingState.DONE
    errors: Optional[list[Any]] = None
    data: list[ResultSet] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.state == LoadingState.ERROR


class DatasourceRequest(Protocol):
    async def __call__(
        self,
        *,
        query: dict[str, Any],
        datasource: str,
        payload: Any,
        replace_variables: ReplaceVariables,
        retry: bool = True,
    ) -> DatasourceResponse:  # noqa: D401
        """Run one request; ``retry=False`` for writes that must be sent at most once."""
        ...


def identity_replace(value: str) -> str:
    return value


def interpolate_query(query: Any, replace_variables: ReplaceVariables) -> Any:
    """Apply ``replace_variables`` to every string inside a query template."""
    if isinstance(query, str):
        return replace_variables(query)
    if isinstance(query, dict):
        return {key: interpolate_query(value, replace_variables) for key, value in query.items()}
    if isinstance(query, list):
        return [interpolate_query(value, replace_variables) for value in query]
    return query


__all__ = [
    "ReplaceVariables",
    "LoadingState",
    "DatasourceResponse",
    "DatasourceRequest",
    "identity_replace",
    "interpolate_query",
]
