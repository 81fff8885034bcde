"""Helpers for reading and writing dashboard variables."""
from __future__ import annotations

from typing import Any

from .store import VARIABLE_PREFIX, Variable, VariableStore


def get_variables_map(variables: list[Variable]) -> dict[str, Variable]:
    return {variable.name: variable for variable in variables}


def get_variable(store: VariableStore, name: str) -> Variable | None:
    if not name:
        return None
    return get_variables_map(store.get_variables()).get(name)


def get_variable_current_value(variable: Variable) -> Any:
    if variable.current is None:
        return ""
    return variable.current.value


def get_variable_number_value(variable: Variable | None) -> int | float | None:
    """Numeric value of a variable, ``None`` when unset or not a number.

    Multi-value variables use their first selected value.
    """
    if variable is None or variable.current is None:
        return None
    raw = variable.current.value
    if isinstance(raw, (list, tuple)):
        raw = raw[0] if raw else ""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if number != number:  # NaN
        return None
    return number


def get_variable_key_for_location(name: str) -> str:
    return f"{VARIABLE_PREFIX}{name}"


def set_variables_value(store: VariableStore, payload: dict[str, Any]) -> bool:
    """Write every key of ``payload`` in one location update; False if nothing to write."""
    if not payload:
        return False
    store.partial(payload, True)
    return True


__all__ = [
    "get_variables_map",
    "get_variable",
    "get_variable_current_value",
    "get_variable_number_value",
    "get_variable_key_for_location",
    "set_variables_value",
]
