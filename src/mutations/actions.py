"""Post-mutation actions: notify, then refresh or reset the highlight variable."""
from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from models import ROW_HIGHLIGHT_STATE_KEY, MutationOperation, TableConfig
from variables import VariableStore, get_variable_key_for_location, set_variables_value


def on_request_success(
    notify_success: Callable[[], None],
    refresh_dashboard: Callable[[], None],
    variable_store: Optional[VariableStore],
    table: Optional[TableConfig],
    operation: MutationOperation,
    row: Mapping[str, Any],
) -> bool:
    """Run after a successful remote write.

    Returns True when the highlight variable was reset instead of refreshing.
    Resetting the variable triggers the refresh chain by itself, so refreshing
    too would run the query twice.
    """
    notify_success()

    if operation == "delete" and table is not None and variable_store is not None:
        is_highlighted = bool(row.get(ROW_HIGHLIGHT_STATE_KEY))
        variable_to_reset = table.row_highlight.variable

        if is_highlighted and table.row_highlight.reset_variable and variable_to_reset:
            set_variables_value(variable_store, {get_variable_key_for_location(variable_to_reset): ""})
            return True

    refresh_dashboard()
    return False


__all__ = ["on_request_success"]
