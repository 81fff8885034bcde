"""
Data models shared by the grid core: configuration, filters, rows, result sets.
"""

from .filters import (
    ColumnFilter,
    ColumnFilterMode,
    ColumnFiltersState,
    ColumnFilterType,
    ColumnFilterValue,
    FacetedFilter,
    NoneFilter,
    NumberFilter,
    NumberFilterOperator,
    SearchFilter,
    TimeRange,
    TimestampFilter,
    get_filter_with_new_type,
    identify_filter,
)
from .frame import ResultSet, frame_to_records, get_field_by_source, get_source_key
from .pagination import EstimatedTotal, ExactTotal, PaginationState, TotalCount
from .permission import FieldReference, PermissionMode, PermissionPolicy
from .rows import ACTIONS_COLUMN_ID, ROW_HIGHLIGHT_STATE_KEY, DraftRow
from .table import (
    ColumnConfig,
    ColumnEditConfig,
    ColumnEditorConfig,
    ColumnEditorType,
    ColumnFilterConfig,
    ColumnNewRowEditConfig,
    MutationOperation,
    NestedObjectConfig,
    NestedObjectEditorConfig,
    NestedObjectType,
    OperationConfig,
    PaginationConfig,
    PaginationMode,
    PaginationQueryConfig,
    RequestConfig,
    RowHighlightConfig,
    TableConfig,
)

__all__ = [
    "ACTIONS_COLUMN_ID",
    "ROW_HIGHLIGHT_STATE_KEY",
    "ColumnConfig",
    "ColumnEditConfig",
    "ColumnEditorConfig",
    "ColumnEditorType",
    "ColumnFilter",
    "ColumnFilterConfig",
    "ColumnFilterMode",
    "ColumnFiltersState",
    "ColumnFilterType",
    "ColumnFilterValue",
    "ColumnNewRowEditConfig",
    "DraftRow",
    "EstimatedTotal",
    "ExactTotal",
    "FacetedFilter",
    "FieldReference",
    "MutationOperation",
    "NestedObjectConfig",
    "NestedObjectEditorConfig",
    "NestedObjectType",
    "NoneFilter",
    "NumberFilter",
    "NumberFilterOperator",
    "OperationConfig",
    "PaginationConfig",
    "PaginationMode",
    "PaginationQueryConfig",
    "PaginationState",
    "PermissionMode",
    "PermissionPolicy",
    "RequestConfig",
    "ResultSet",
    "RowHighlightConfig",
    "SearchFilter",
    "TableConfig",
    "TimeRange",
    "TimestampFilter",
    "TotalCount",
    "frame_to_records",
    "get_field_by_source",
    "get_filter_with_new_type",
    "get_source_key",
    "identify_filter",
]
