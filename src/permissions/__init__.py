"""Permission evaluation."""

from .evaluator import (
    PermissionContext,
    User,
    check_column_edit_permission,
    check_operation_permission,
    check_permission_by_query_field,
    check_permission_by_user_role,
    evaluate,
)

__all__ = [
    "PermissionContext",
    "User",
    "check_column_edit_permission",
    "check_operation_permission",
    "check_permission_by_query_field",
    "check_permission_by_user_role",
    "evaluate",
]
