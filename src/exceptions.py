"""Error taxonomy for the grid core.

Configuration absence is never an error (callers treat it as a no-op or a
deny). Everything raised from a remote call derives from ``GridCoreError``.
"""
from __future__ import annotations

from typing import Any


class GridCoreError(RuntimeError):
    pass


class DatasourceRequestError(GridCoreError):
    def __init__(self, datasource: str, message: str):  # noqa: D401
        super().__init__(f"[{datasource}] {message}")
        self.datasource = datasource
        self.message = message


class QueryError(GridCoreError):
    """Datasource answered with an explicit error state.

    ``errors`` keeps the collected error list exactly as returned so that
    callers can pick the first entry for display.
    """

    def __init__(self, errors: list[Any] | None):
        self.errors = list(errors or [])
        first = self.errors[0] if self.errors else "Query error"
        if isinstance(first, dict):
            first = first.get("message", first)
        super().__init__(str(first))


class MutationError(GridCoreError):
    def __init__(self, operation: str, message: str):  # noqa: D401
        super().__init__(f"{operation} Error: {message}")
        self.operation = operation
        self.message = message

__all__ = ["GridCoreError", "DatasourceRequestError", "QueryError", "MutationError"]
