"""Permission policy configuration."""
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import Field

from .base import ConfigModel


class PermissionMode(str, Enum):
    ALLOWED = ""
    QUERY = "query"
    USER_ROLE = "userRole"


class FieldReference(ConfigModel):
    """Field inside the query result: ``source`` is a ref id (str) or a result-set index (int)."""

    source: Union[int, str] = ""
    name: str


class PermissionPolicy(ConfigModel):
    mode: PermissionMode = PermissionMode.ALLOWED
    user_role: list[str] = Field(default_factory=list)
    field: Optional[FieldReference] = None


__all__ = ["PermissionMode", "FieldReference", "PermissionPolicy"]
