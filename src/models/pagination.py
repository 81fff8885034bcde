"""Pagination state and total-count variants."""
from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class PaginationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_index: int = Field(default=0, ge=0)
    page_size: int = Field(default=10, gt=0)


@dataclass(frozen=True)
class ExactTotal:
    value: int
    is_estimate = False


@dataclass(frozen=True)
class EstimatedTotal:
    """Assumes at least one more page until the real count is known."""
    value: int
    is_estimate = True


TotalCount = ExactTotal | EstimatedTotal

__all__ = ["PaginationState", "ExactTotal", "EstimatedTotal", "TotalCount"]
