"""Column filter values.

``ColumnFilterValue`` is a tagged union: the ``type`` discriminator always
matches the shape of ``value``, pydantic rejects anything else.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError

from .base import ConfigModel


class ColumnFilterType(str, Enum):
    SEARCH = "search"
    NUMBER = "number"
    FACETED = "faceted"
    TIMESTAMP = "timestamp"


class ColumnFilterMode(str, Enum):
    CLIENT = "client"
    QUERY = "query"


class NumberFilterOperator(str, Enum):
    MORE = ">"
    MORE_OR_EQUAL = ">="
    LESS = "<"
    LESS_OR_EQUAL = "<="
    BETWEEN = "between"
    EQUAL = "="
    NOT_EQUAL = "!="


class NoneFilter(ConfigModel):
    type: Literal["none"] = "none"


class SearchFilter(ConfigModel):
    type: Literal["search"] = "search"
    value: str = ""
    case_sensitive: bool = False


class FacetedFilter(ConfigModel):
    type: Literal["faceted"] = "faceted"
    value: list[Union[str, int, float]] = Field(default_factory=list)


class NumberFilter(ConfigModel):
    type: Literal["number"] = "number"
    operator: NumberFilterOperator = NumberFilterOperator.MORE
    value: tuple[float, float] = (0, 0)


class TimeRange(ConfigModel):
    from_: Optional[datetime] = Field(default=None, alias="from")
    to: Optional[datetime] = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.from_ is not None and self.to is not None


class TimestampFilter(ConfigModel):
    type: Literal["timestamp"] = "timestamp"
    value: TimeRange = Field(default_factory=TimeRange)


ColumnFilterValue = Annotated[
    Union[NoneFilter, SearchFilter, FacetedFilter, NumberFilter, TimestampFilter],
    Field(discriminator="type"),
]

_filter_adapter: TypeAdapter = TypeAdapter(ColumnFilterValue)


class ColumnFilter(ConfigModel):
    """One entry of ``ColumnFiltersState``; ``value=None`` means "remove"."""

    id: str
    value: Optional[ColumnFilterValue] = None


ColumnFiltersState = list[ColumnFilter]


def identify_filter(value: Any) -> ColumnFilterValue:
    """Coerce an arbitrary payload into a filter value, ``NoneFilter`` when unrecognised."""
    if isinstance(value, (NoneFilter, SearchFilter, FacetedFilter, NumberFilter, TimestampFilter)):
        return value
    try:
        return _filter_adapter.validate_python(value)
    except ValidationError:
        return NoneFilter()


def get_filter_with_new_type(filter_type: ColumnFilterType | str) -> ColumnFilterValue:
    """Empty filter of the requested kind, used when the user switches filter type."""
    kind = filter_type.value if isinstance(filter_type, ColumnFilterType) else filter_type
    if kind == ColumnFilterType.NUMBER.value:
        return NumberFilter(value=(0, 0), operator=NumberFilterOperator.MORE)
    if kind == ColumnFilterType.SEARCH.value:
        return SearchFilter(value="", case_sensitive=False)
    if kind == ColumnFilterType.FACETED.value:
        return FacetedFilter(value=[])
    if kind == ColumnFilterType.TIMESTAMP.value:
        return TimestampFilter(value=TimeRange(raw={"from": None, "to": None}))
    return NoneFilter()


__all__ = [
    "ColumnFilterType",
    "ColumnFilterMode",
    "NumberFilterOperator",
    "NoneFilter",
    "SearchFilter",
    "FacetedFilter",
    "NumberFilter",
    "TimeRange",
    "TimestampFilter",
    "ColumnFilterValue",
    "ColumnFilter",
    "ColumnFiltersState",
    "identify_filter",
    "get_filter_with_new_type",
]
