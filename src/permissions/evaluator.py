"""Permission evaluation for column edits and table add/delete operations.

``evaluate`` is pure and never raises: missing configuration denies.
For query-field policies the **last** value of the field decides, so fields
reduced or aggregated upstream keep working.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import pandas as pd

from models import ColumnConfig, OperationConfig, PermissionMode, PermissionPolicy, ResultSet, get_field_by_source


@dataclass(frozen=True)
class User:
    role: str = ""
    login: str = ""


@dataclass(frozen=True)
class PermissionContext:
    """What a policy is checked against: the current user and the loaded result sets."""
    user: Optional[User] = None
    data: list[ResultSet] = field(default_factory=list)


def _is_truthy(value: Any) -> bool:
    if value is None:
        return False
    try:
        if pd.isna(value):
            return False
    except (TypeError, ValueError):
        pass
    return bool(value)


def check_permission_by_user_role(policy: PermissionPolicy, user: Optional[User]) -> bool:
    if user is None:
        return False
    return user.role in policy.user_role


def check_permission_by_query_field(policy: PermissionPolicy, data: list[ResultSet]) -> bool:
    if policy.field is None:
        return False
    series = get_field_by_source(data, policy.field)
    if series is None or series.empty:
        return False
    return _is_truthy(series.iloc[-1])


def evaluate(policy: PermissionPolicy, context: PermissionContext) -> bool:
    if policy.mode == PermissionMode.ALLOWED:
        return True
    if policy.mode == PermissionMode.USER_ROLE:
        return check_permission_by_user_role(policy, context.user)
    if policy.mode == PermissionMode.QUERY:
        return check_permission_by_query_field(policy, context.data)
    return False


def check_column_edit_permission(column: ColumnConfig, context: PermissionContext) -> bool:
    if not column.edit.enabled:
        return False
    return evaluate(column.edit.permission, context)


def check_operation_permission(operation: OperationConfig, context: PermissionContext) -> bool:
    """Table-level gate for add/delete."""
    if not operation.enabled:
        return False
    return evaluate(operation.permission, context)


__all__ = [
    "User",
    "PermissionContext",
    "evaluate",
    "check_permission_by_user_role",
    "check_permission_by_query_field",
    "check_column_edit_permission",
    "check_operation_permission",
]
