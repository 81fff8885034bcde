"""Row edit session state machine shared by add, edit and delete.

States: IDLE (no draft) -> EDITING (draft) -> SAVING (request in flight),
then back to IDLE on success or EDITING on failure with the draft intact.

There is no internal lock: callers disable their save control while
``is_saving`` is true. Starting or cancelling bumps a generation counter so a
save that resolves after the session moved on never clears a newer draft.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

from app_logging import get_logger
from models import ColumnConfig, DraftRow, MutationOperation

SaveRow = Callable[[dict[str, Any]], Awaitable[None]]


class SessionState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    SAVING = "saving"


def as_draft(row: DraftRow | Mapping[str, Any], row_id: str = "0", index: int = 0, depth: int = 0) -> DraftRow:
    """Wrap a plain mapping; a ``DraftRow`` keeps its own identity."""
    if isinstance(row, DraftRow):
        return row
    return DraftRow(id=row_id, original=dict(row), index=index, depth=depth)


class RowEditSession:
    operation: MutationOperation = "update"

    def __init__(self, columns: list[ColumnConfig], save: SaveRow):
        self._columns = list(columns)
        self._save = save
        self._row: Optional[DraftRow] = None
        self._is_saving = False
        self._generation = 0
        self.last_error: Optional[BaseException] = None
        self._log = get_logger(f"sessions.{self.operation}")

    # ----------------- State -----------------
    @property
    def row(self) -> Optional[DraftRow]:
        return self._row

    @property
    def is_saving(self) -> bool:
        return self._is_saving

    @property
    def state(self) -> SessionState:
        if self._is_saving:
            return SessionState.SAVING
        if self._row is not None:
            return SessionState.EDITING
        return SessionState.IDLE

    @property
    def columns(self) -> list[ColumnConfig]:
        return list(self._columns)

    def set_columns(self, columns: list[ColumnConfig]) -> None:
        self._columns = list(columns)

    def find_column(self, column_id: str) -> Optional[ColumnConfig]:
        for column in self._columns:
            if column.id == column_id:
                return column
        return None

    # ----------------- Transitions -----------------
    def on_start(
        self,
        row: DraftRow | Mapping[str, Any] | None = None,
        *,
        row_id: str = "0",
        index: int = 0,
        depth: int = 0,
    ) -> DraftRow:
        """Create the draft; replaces any draft already held (no merge).

        ``row_id``, ``index`` and ``depth`` identify a plain mapping seed in the
        grid; a ``DraftRow`` seed carries its own.
        """
        draft = self._create_draft(row, row_id=row_id, index=index, depth=depth)
        self._generation += 1
        self._row = draft
        self.last_error = None
        return draft

    def on_change(self, row: DraftRow, column_id: str, value: Any) -> Optional[DraftRow]:
        if self.state != SessionState.EDITING:
            self._log.warning("change ignored", extra={"column": column_id, "state": self.state.value})
            return None
        self._row = row.with_value(column_id, value)
        return self._row

    def on_cancel(self) -> None:
        self._generation += 1
        self._row = None

    async def on_save(self, row: Optional[DraftRow] = None) -> None:
        """Persist the draft.

        Raises whatever the save callback raised; the draft stays in place so
        the user can fix the input and submit again.
        """
        draft = row if row is not None else self._row
        if draft is None:
            return

        generation = self._generation
        self._is_saving = True
        try:
            await self._save(self._prepare_payload(draft))
        except Exception as e:
            self.last_error = e
            self._log.warning("save failed", extra={"error": str(e)})
            raise
        else:
            self.last_error = None
            if generation == self._generation:
                self._row = None
                self._generation += 1
            else:
                self._log.debug("stale save result ignored")
        finally:
            self._is_saving = False

    # ----------------- Overridables -----------------
    def _create_draft(self, row: DraftRow | Mapping[str, Any] | None, **identity: Any) -> DraftRow:
        if row is None:
            raise ValueError(f"{self.operation} session needs a row to start")
        return as_draft(row, **identity)

    def _prepare_payload(self, row: DraftRow) -> dict[str, Any]:
        return row.to_payload()


__all__ = ["RowEditSession", "SessionState", "SaveRow", "as_draft"]
