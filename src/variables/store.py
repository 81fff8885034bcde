"""Dashboard variable store.

The store is the only shared mutable state of the grid core. Writes go
through ``partial`` which applies every ``var-`` key of one update and then
publishes a single ``RefreshEvent``, so observers never see a half-applied
batch. Writes are last-writer-wins.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

from app_logging import get_logger

from .events import EventBus, RefreshEvent

VARIABLE_PREFIX = "var-"

_log = get_logger("variables.store")


@dataclass
class VariableCurrent:
    value: Any = ""
    text: Any = ""


@dataclass
class Variable:
    """Dashboard variable.

    Attributes:
        name: Variable name as referenced by ``$name``
        type: Host variable kind (query, custom, textbox, constant, ...)
        multi: Whether several values may be selected
        current: Selected value, ``None`` for variables without a selection
    """
    name: str
    type: str = "textbox"
    multi: bool = False
    current: Optional[VariableCurrent] = field(default_factory=VariableCurrent)


@runtime_checkable
class VariableStore(Protocol):
    event_bus: EventBus

    def get_variables(self) -> list[Variable]:
        ...

    def partial(self, update: dict[str, Any], replace_history: bool = False) -> None:
        ...


class InMemoryVariableStore:
    def __init__(self, variables: list[Variable] | None = None, event_bus: EventBus | None = None):
        self._variables: dict[str, Variable] = {v.name: v for v in (variables or [])}
        self.event_bus = event_bus or EventBus()
        self.location: dict[str, Any] = {}
        self.history: list[tuple[dict[str, Any], bool]] = []

    def get_variables(self) -> list[Variable]:
        return list(self._variables.values())

    def get_variable(self, name: str) -> Variable | None:
        return self._variables.get(name)

    def add_variable(self, variable: Variable) -> None:
        self._variables[variable.name] = variable

    def set_variable_value(self, name: str, value: Any) -> None:
        """Change a variable without touching the location (host-side edit)."""
        variable = self._variables.get(name)
        if variable is None:
            variable = Variable(name=name)
            self._variables[name] = variable
        variable.current = VariableCurrent(value=value, text=value)

    def partial(self, update: dict[str, Any], replace_history: bool = False) -> None:
        if not update:
            return
        self.history.append((dict(update), replace_history))
        for key, value in update.items():
            self.location[key] = value
            if not key.startswith(VARIABLE_PREFIX):
                continue
            name = key[len(VARIABLE_PREFIX):]
            if name not in self._variables:
                _log.debug("location update for unknown variable", extra={"variable": name})
                continue
            stored = [str(v) for v in value] if isinstance(value, (list, tuple)) else str(value)
            self.set_variable_value(name, stored)
        self.event_bus.publish(RefreshEvent(payload=dict(update)))

    def refresh(self) -> None:
        self.event_bus.publish(RefreshEvent())


__all__ = ["VARIABLE_PREFIX", "Variable", "VariableCurrent", "VariableStore", "InMemoryVariableStore"]
