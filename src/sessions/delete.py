"""Delete session: the draft is the target row, persisted unchanged."""
from __future__ import annotations

from .base import RowEditSession


class DeleteSession(RowEditSession):
    operation = "delete"


__all__ = ["DeleteSession"]
