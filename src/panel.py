"""GridPanel facade (flat layout).

Wires the core components for one table from a ``TableConfig`` and the host
collaborators, the way the dashboard panel consumes them.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

import pandas as pd

from datasource import DatasourceRequest, ReplaceVariables, identity_replace
from filters import FilterSynchronizer, apply_column_filters
from models import ColumnFiltersState, NestedObjectConfig, ResultSet, TableConfig, TotalCount
from mutations import MutationExecutor
from nested_objects import NestedObjectResolver
from notifications import Notifier
from pagination import PaginationController
from permissions import PermissionContext, User, check_column_edit_permission, check_operation_permission
from sessions import AddSession, DeleteSession, EditSession, create_session
from variables import VariableStore


class GridPanel:
    def __init__(
        self,
        table: TableConfig,
        *,
        request: DatasourceRequest,
        variable_store: VariableStore,
        refresh: Optional[Callable[[], None]] = None,
        notifier: Optional[Notifier] = None,
        nested_objects: Optional[list[NestedObjectConfig]] = None,
        user: Optional[User] = None,
        replace_variables: ReplaceVariables = identity_replace,
        user_filter_preference: Optional[ColumnFiltersState] = None,
    ):
        self.table = table
        self.user = user
        self.notifier = notifier or Notifier()
        self.data: list[ResultSet] = []

        self.executor = MutationExecutor(
            table,
            request,
            variable_store=variable_store,
            refresh=refresh,
            notifier=self.notifier,
            replace_variables=replace_variables,
        )
        self.add: AddSession = create_session("add", table.items, self.executor)  # type: ignore[assignment]
        self.edit: EditSession = create_session("edit", table.items, self.executor)  # type: ignore[assignment]
        self.delete: DeleteSession = create_session("delete", table.items, self.executor)  # type: ignore[assignment]
        self.filters = FilterSynchronizer(table.items, variable_store, user_filter_preference=user_filter_preference)
        self.pagination = PaginationController(table.pagination, variable_store)
        self.nested_objects = NestedObjectResolver(
            nested_objects or [],
            request,
            notifier=self.notifier,
            replace_variables=replace_variables,
        )

    # ----------------- Lifecycle -----------------
    def mount(self) -> None:
        self.filters.mount()
        self.pagination.mount()

    def unmount(self) -> None:
        self.filters.unmount()
        self.pagination.unmount()

    def set_data(self, data: list[ResultSet]) -> None:
        self.data = list(data)

    # ----------------- Permissions -----------------
    def permission_context(self) -> PermissionContext:
        return PermissionContext(user=self.user, data=self.data)

    def can_add(self) -> bool:
        return check_operation_permission(self.table.add_row, self.permission_context())

    def can_delete(self) -> bool:
        return check_operation_permission(self.table.delete_row, self.permission_context())

    def can_edit_column(self, column_id: str) -> bool:
        column = next((item for item in self.table.items if item.id == column_id), None)
        if column is None:
            return False
        return check_column_edit_permission(column, self.permission_context())

    # ----------------- Rows -----------------
    def visible_frame(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Rows after client filters; query-driven tables are filtered upstream."""
        if self.pagination.is_query_mode:
            return frame
        return apply_column_filters(frame, self.filters.filters)

    def total(self, frame: Optional[pd.DataFrame] = None) -> TotalCount:
        rows = self.visible_frame(frame) if frame is not None else None
        return self.pagination.total(data=self.data, rows=rows)

    async def load_nested_objects(self, column_id: str, rows: list[Mapping[str, Any]]) -> bool:
        column = next((item for item in self.table.items if item.id == column_id), None)
        if column is None or not column.object_id:
            return False
        return await self.nested_objects.on_load(column, rows)


__all__ = ["GridPanel"]
