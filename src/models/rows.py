"""Draft rows held by edit sessions."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

ACTIONS_COLUMN_ID = "__actions"
ROW_HIGHLIGHT_STATE_KEY = "__rowHighlightStateKey"


@dataclass(frozen=True)
class DraftRow:
    """Uncommitted row value.

    Attributes:
        id: Stable row identifier
        original: Column id -> value
        index: Row position in the grid
        depth: Grouping depth in the grid
    """
    id: str
    original: Mapping[str, Any] = field(default_factory=dict)
    index: int = 0
    depth: int = 0

    def with_value(self, column_id: str, value: Any) -> "DraftRow":
        return replace(self, original={**self.original, column_id: value})

    def with_original(self, original: Mapping[str, Any]) -> "DraftRow":
        return replace(self, original=dict(original))

    def to_payload(self) -> dict[str, Any]:
        return dict(self.original)


__all__ = ["ACTIONS_COLUMN_ID", "ROW_HIGHLIGHT_STATE_KEY", "DraftRow"]
