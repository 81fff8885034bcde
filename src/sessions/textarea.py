"""Newline escaping for multi-line text editors.

Drafts show real newlines as the two characters ``\\n`` so single-line
widgets can display them; the escape is reversed right before persisting.
Backslashes are doubled first, so a value that already holds ``\\n`` comes
back unchanged.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Mapping

from models import ColumnConfig, ColumnEditorConfig, ColumnEditorType

ESCAPED_NEWLINE = "\\n"
ESCAPED_BACKSLASH = "\\\\"

_ESCAPE_SEQUENCE = re.compile(r"\\(\\|n)")
_UNESCAPED = {"\\": "\\", "n": "\n"}


def escape_newlines(value: Any) -> Any:
    if isinstance(value, str):
        return value.replace("\\", ESCAPED_BACKSLASH).replace("\n", ESCAPED_NEWLINE)
    return value


def unescape_newlines(value: Any) -> Any:
    # single left-to-right pass; a lone backslash is kept as typed
    if isinstance(value, str):
        return _ESCAPE_SEQUENCE.sub(lambda match: _UNESCAPED[match.group(1)], value)
    return value


def textarea_column_ids(columns: Iterable[ColumnConfig], editor_of: Callable[[ColumnConfig], ColumnEditorConfig | None]) -> set[str]:
    ids = set()
    for column in columns:
        editor = editor_of(column)
        if editor is not None and editor.type == ColumnEditorType.TEXTAREA:
            ids.add(column.id)
    return ids


def transform_values(original: Mapping[str, Any], column_ids: set[str], transform: Callable[[Any], Any]) -> dict[str, Any]:
    return {key: transform(value) if key in column_ids else value for key, value in original.items()}


__all__ = [
    "ESCAPED_BACKSLASH",
    "ESCAPED_NEWLINE",
    "escape_newlines",
    "unescape_newlines",
    "textarea_column_ids",
    "transform_values",
]
