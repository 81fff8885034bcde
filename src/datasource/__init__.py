"""Datasource request registry/factory."""
from __future__ import annotations

from .base import DatasourceRequest, DatasourceResponse, LoadingState, ReplaceVariables, identity_replace, interpolate_query
from .http_transport import HttpDatasourceRequest
from .static import StaticDatasourceRequest

_REQUESTS: dict[str, type] = {
    HttpDatasourceRequest.name: HttpDatasourceRequest,
    StaticDatasourceRequest.name: StaticDatasourceRequest,
}


def get_datasource_request(name: str, **kwargs) -> DatasourceRequest:
    cls = _REQUESTS.get(name.lower())
    if not cls:
        raise ValueError(f"Unknown datasource request: {name}")
    return cls(**kwargs)


__all__ = [
    "get_datasource_request",
    "DatasourceRequest",
    "DatasourceResponse",
    "HttpDatasourceRequest",
    "LoadingState",
    "ReplaceVariables",
    "StaticDatasourceRequest",
    "identity_replace",
    "interpolate_query",
]
