"""Add session: synthesizes a blank row from each column's new-row editor."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from models import ACTIONS_COLUMN_ID, ColumnConfig, ColumnEditorConfig, ColumnEditorType, DraftRow

from .base import RowEditSession, SaveRow
from .textarea import textarea_column_ids, transform_values, unescape_newlines


def _new_row_editor(column: ColumnConfig) -> Optional[ColumnEditorConfig]:
    return column.new_row_edit.editor if column.new_row_edit.enabled else None


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_new_row_default(editor: Optional[ColumnEditorConfig], now: Callable[[], Any] = _utc_now) -> Any:
    if editor is None:
        return ""
    if editor.type == ColumnEditorType.BOOLEAN:
        return False
    if editor.type == ColumnEditorType.NUMBER:
        return editor.min if editor.min is not None else 0
    if editor.type == ColumnEditorType.DATETIME:
        return editor.min if editor.min is not None else now()
    return ""


class AddSession(RowEditSession):
    operation = "add"

    def __init__(self, columns: list[ColumnConfig], save: SaveRow, *, now: Callable[[], Any] = _utc_now):
        super().__init__(columns, save)
        self._now = now

    def _create_draft(self, row: DraftRow | Mapping[str, Any] | None, **identity: Any) -> DraftRow:
        # any seed row and identity are ignored, a new row always starts from defaults
        original = {
            column.id: get_new_row_default(_new_row_editor(column), self._now)
            for column in self._columns
            if column.id != ACTIONS_COLUMN_ID
        }
        return DraftRow(id="0", original=original, index=0, depth=0)

    def _prepare_payload(self, row: DraftRow) -> dict[str, Any]:
        ids = textarea_column_ids(self._columns, _new_row_editor)
        return transform_values(row.original, ids, unescape_newlines)


__all__ = ["AddSession", "get_new_row_default"]
