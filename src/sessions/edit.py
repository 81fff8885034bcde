"""Edit session: seeds the draft from an existing row."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from models import ColumnConfig, ColumnEditorConfig, DraftRow

from .base import RowEditSession, as_draft
from .textarea import escape_newlines, textarea_column_ids, transform_values, unescape_newlines


def _edit_editor(column: ColumnConfig) -> Optional[ColumnEditorConfig]:
    return column.edit.editor if column.edit.enabled else None


class EditSession(RowEditSession):
    operation = "update"

    def _create_draft(self, row: DraftRow | Mapping[str, Any] | None, **identity: Any) -> DraftRow:
        if row is None:
            raise ValueError("edit session needs a row to start")
        draft = as_draft(row, **identity)
        ids = textarea_column_ids(self._columns, _edit_editor)
        return draft.with_original(transform_values(draft.original, ids, escape_newlines))

    def _prepare_payload(self, row: DraftRow) -> dict[str, Any]:
        ids = textarea_column_ids(self._columns, _edit_editor)
        return transform_values(row.original, ids, unescape_newlines)


__all__ = ["EditSession"]
