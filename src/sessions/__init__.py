"""Row edit sessions (add, edit, delete) and their factory."""
from __future__ import annotations

from functools import partial

from models import ColumnConfig
from mutations import MutationExecutor

from .add import AddSession, get_new_row_default
from .base import RowEditSession, SaveRow, SessionState, as_draft
from .delete import DeleteSession
from .edit import EditSession
from .textarea import ESCAPED_BACKSLASH, ESCAPED_NEWLINE, escape_newlines, unescape_newlines

_SESSIONS: dict[str, type[RowEditSession]] = {
    "add": AddSession,
    "edit": EditSession,
    "update": EditSession,
    "delete": DeleteSession,
}


def create_session(operation: str, columns: list[ColumnConfig], executor: MutationExecutor, **kwargs) -> RowEditSession:
    cls = _SESSIONS.get(operation.lower())
    if not cls:
        raise ValueError(f"Unknown session operation: {operation}")
    return cls(columns, partial(executor.execute, cls.operation), **kwargs)


__all__ = [
    "AddSession",
    "DeleteSession",
    "EditSession",
    "ESCAPED_BACKSLASH",
    "ESCAPED_NEWLINE",
    "RowEditSession",
    "SaveRow",
    "SessionState",
    "as_draft",
    "create_session",
    "escape_newlines",
    "get_new_row_default",
    "unescape_newlines",
]
