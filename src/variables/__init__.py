"""Dashboard variables: store, refresh events and helpers."""

from .events import EventBus, RefreshEvent, Subscription
from .store import VARIABLE_PREFIX, InMemoryVariableStore, Variable, VariableCurrent, VariableStore
from .utils import (
    get_variable,
    get_variable_current_value,
    get_variable_key_for_location,
    get_variable_number_value,
    get_variables_map,
    set_variables_value,
)

__all__ = [
    "EventBus",
    "RefreshEvent",
    "Subscription",
    "VARIABLE_PREFIX",
    "InMemoryVariableStore",
    "Variable",
    "VariableCurrent",
    "VariableStore",
    "get_variable",
    "get_variable_current_value",
    "get_variable_key_for_location",
    "get_variable_number_value",
    "get_variables_map",
    "set_variables_value",
]
