"""
Column filter helpers: variable-driven filters, merging and client filtering.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional

import numpy as np
import pandas as pd

from models import (
    ColumnConfig,
    ColumnFilter,
    ColumnFilterMode,
    ColumnFiltersState,
    ColumnFilterType,
    FacetedFilter,
    NumberFilter,
    NumberFilterOperator,
    SearchFilter,
    TimestampFilter,
    identify_filter,
)
from variables import Variable, get_variable_current_value


def get_supported_filter_types_for_variable(variable: Optional[Variable]) -> list[ColumnFilterType]:
    if variable is None:
        return []
    if variable.type in ("query", "custom"):
        if variable.multi:
            return [ColumnFilterType.FACETED]
        return []
    if variable.type in ("textbox", "constant"):
        return [ColumnFilterType.SEARCH]
    return []


def get_variable_column_filters(columns: Iterable[ColumnConfig], variables: list[Variable]) -> ColumnFiltersState:
    """Filters driven by dashboard variables.

    Only columns with an enabled query-mode filter take part. A bound variable
    without a usable value yields ``ColumnFilter(id, None)`` so merging removes
    any stale filter for that column; unknown variables yield nothing.
    """
    columns_to_sync = [
        column for column in columns if column.filter.enabled and column.filter.mode == ColumnFilterMode.QUERY
    ]
    if not columns_to_sync:
        return []

    variables_by_name = {variable.name: variable for variable in variables}
    column_filters: ColumnFiltersState = []

    for column in columns_to_sync:
        variable = variables_by_name.get(column.filter.variable)
        if variable is None:
            continue

        current_value = get_variable_current_value(variable)
        supported = get_supported_filter_types_for_variable(variable)
        filter_type = supported[0] if supported else None

        if filter_type is not None and current_value:
            if filter_type == ColumnFilterType.SEARCH:
                value = current_value[0] if isinstance(current_value, (list, tuple)) else current_value
                column_filters.append(ColumnFilter(id=column.id, value=SearchFilter(value=str(value), case_sensitive=False)))
                continue
            if filter_type == ColumnFilterType.FACETED:
                values = list(current_value) if isinstance(current_value, (list, tuple)) else [current_value]
                column_filters.append(ColumnFilter(id=column.id, value=FacetedFilter(value=values)))
                continue

        column_filters.append(ColumnFilter(id=column.id, value=None))

    return column_filters


def merge_column_filters(current: ColumnFiltersState, overrides: ColumnFiltersState) -> ColumnFiltersState:
    """Overlay ``overrides`` onto ``current`` keyed by column id.

    A value replaces the entry in place (new ids are appended), ``None``
    removes it. Columns absent from ``overrides`` keep their filter.
    """
    filters: dict[str, ColumnFilter] = {item.id: item for item in current}

    for item in overrides:
        if item.value is not None:
            filters[item.id] = item
        else:
            filters.pop(item.id, None)

    return list(filters.values())


def get_default_filters(columns: Iterable[ColumnConfig]) -> ColumnFiltersState:
    return [
        ColumnFilter(id=column.id, value=column.filter.default_client_value)
        for column in columns
        if column.filter.default_client_value is not None
    ]


def coerce_filters(items: Iterable[ColumnFilter | Mapping[str, Any]]) -> ColumnFiltersState:
    return [item if isinstance(item, ColumnFilter) else ColumnFilter.model_validate(item) for item in items]


# ============================================================================
# Client-side filtering
# ============================================================================

def _to_epoch_ms(value: datetime) -> int:
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return int(ts.value // 1_000_000)


def _search_mask(series: pd.Series, flt: SearchFilter) -> pd.Series:
    if not flt.value:
        return pd.Series(True, index=series.index)
    text = series.astype(str)
    return series.notna() & text.str.contains(flt.value, case=flt.case_sensitive, regex=False)


def _faceted_mask(series: pd.Series, flt: FacetedFilter) -> pd.Series:
    if not flt.value:
        return pd.Series(True, index=series.index)
    return series.isin(flt.value)


_NUMBER_OPERATORS: dict[NumberFilterOperator, Callable[[pd.Series, float], pd.Series]] = {
    NumberFilterOperator.MORE: lambda s, v: s > v,
    NumberFilterOperator.MORE_OR_EQUAL: lambda s, v: s >= v,
    NumberFilterOperator.LESS: lambda s, v: s < v,
    NumberFilterOperator.LESS_OR_EQUAL: lambda s, v: s <= v,
    NumberFilterOperator.EQUAL: lambda s, v: s == v,
    NumberFilterOperator.NOT_EQUAL: lambda s, v: s != v,
}


def _number_mask(series: pd.Series, flt: NumberFilter) -> pd.Series:
    numeric = pd.to_numeric(series, errors="coerce")
    if flt.operator == NumberFilterOperator.BETWEEN:
        low, high = min(flt.value), max(flt.value)
        return (numeric >= low) & (numeric <= high)
    compare = _NUMBER_OPERATORS.get(flt.operator)
    if compare is None:
        return pd.Series(False, index=series.index)
    return compare(numeric, flt.value[0]).fillna(False).astype(bool)


def _timestamp_mask(series: pd.Series, flt: TimestampFilter) -> pd.Series:
    # values that are neither numbers nor parseable date strings are not filtered
    if not flt.value.is_valid:
        return pd.Series(True, index=series.index)
    start = _to_epoch_ms(flt.value.from_)
    end = _to_epoch_ms(flt.value.to)

    def keep(value: Any) -> bool:
        if isinstance(value, (bool, np.bool_)):
            return True
        if isinstance(value, (int, float, np.integer, np.floating)):
            if pd.isna(value):
                return True
            return start <= value <= end
        if isinstance(value, (str, datetime, pd.Timestamp)):
            parsed = pd.to_datetime(value, errors="coerce", utc=True)
            if pd.isna(parsed):
                return True
            return start <= int(parsed.value // 1_000_000) <= end
        return True

    return series.map(keep).astype(bool)


def column_filter_mask(series: pd.Series, value: Any) -> pd.Series:
    flt = identify_filter(value)
    if isinstance(flt, SearchFilter):
        return _search_mask(series, flt)
    if isinstance(flt, FacetedFilter):
        return _faceted_mask(series, flt)
    if isinstance(flt, NumberFilter):
        return _number_mask(series, flt)
    if isinstance(flt, TimestampFilter):
        return _timestamp_mask(series, flt)
    return pd.Series(True, index=series.index)


def apply_column_filters(frame: pd.DataFrame, filters: ColumnFiltersState) -> pd.DataFrame:
    """Rows of ``frame`` matching every filter; filters on unknown columns are ignored."""
    if frame.empty or not filters:
        return frame
    mask = pd.Series(True, index=frame.index)
    for item in filters:
        if item.value is None or item.id not in frame.columns:
            continue
        mask &= column_filter_mask(frame[item.id], item.value)
    return frame[mask]


def filter_rows(rows: list[Mapping[str, Any]], filters: ColumnFiltersState) -> list[Mapping[str, Any]]:
    if not rows or not filters:
        return list(rows)
    frame = pd.DataFrame.from_records(list(rows))
    kept = apply_column_filters(frame, filters)
    return [rows[i] for i in kept.index]


__all__ = [
    "get_supported_filter_types_for_variable",
    "get_variable_column_filters",
    "merge_column_filters",
    "get_default_filters",
    "coerce_filters",
    "column_filter_mask",
    "apply_column_filters",
    "filter_rows",
]
