"""Readable messages for mutation and load failures."""
from __future__ import annotations

import json
from typing import Any

from exceptions import QueryError


def _first_error(errors: Any) -> Any:
    first = errors[0]
    if isinstance(first, dict) and "message" in first:
        return first["message"]
    return first


def get_error_message(error: Any) -> str:
    """Extraction order: error message, first element of an error list, JSON dump."""
    if isinstance(error, QueryError) and error.errors:
        return str(_first_error(error.errors))
    if isinstance(error, BaseException):
        return str(error)
    if isinstance(error, (list, tuple)) and error:
        return str(_first_error(error))
    try:
        return json.dumps(error, default=str)
    except (TypeError, ValueError):
        return repr(error)


def get_load_error_message(error: Any) -> str:
    if isinstance(error, BaseException):
        return str(error)
    return "Unknown Error"


__all__ = ["get_error_message", "get_load_error_message"]
