"""Panel configuration for one table: columns, editors, requests, pagination."""
from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import Field

from .base import ConfigModel
from .filters import ColumnFilterMode, ColumnFilterValue
from .permission import FieldReference, PermissionPolicy

MutationOperation = Literal["add", "update", "delete"]


class ColumnEditorType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    SELECT = "select"
    DATETIME = "datetime"
    TEXTAREA = "textarea"
    BOOLEAN = "boolean"


class ColumnEditorConfig(ConfigModel):
    type: ColumnEditorType = ColumnEditorType.STRING
    min: Optional[Union[int, float, str]] = None
    max: Optional[Union[int, float, str]] = None
    options: list[Any] = Field(default_factory=list)


class ColumnEditConfig(ConfigModel):
    enabled: bool = False
    editor: ColumnEditorConfig = Field(default_factory=ColumnEditorConfig)
    permission: PermissionPolicy = Field(default_factory=PermissionPolicy)


class ColumnNewRowEditConfig(ConfigModel):
    enabled: bool = False
    editor: ColumnEditorConfig = Field(default_factory=ColumnEditorConfig)


class ColumnFilterConfig(ConfigModel):
    enabled: bool = False
    mode: ColumnFilterMode = ColumnFilterMode.CLIENT
    variable: str = ""
    default_client_value: Optional[ColumnFilterValue] = None


class ColumnConfig(ConfigModel):
    field: FieldReference
    label: str = ""
    enabled: bool = True
    object_id: str = ""
    edit: ColumnEditConfig = Field(default_factory=ColumnEditConfig)
    new_row_edit: ColumnNewRowEditConfig = Field(default_factory=ColumnNewRowEditConfig)
    filter: ColumnFilterConfig = Field(default_factory=ColumnFilterConfig)

    @property
    def id(self) -> str:
        return self.field.name


class RequestConfig(ConfigModel):
    datasource: str = ""
    payload: dict[str, Any] = Field(default_factory=dict)
    success_message: str = ""


class OperationConfig(ConfigModel):
    enabled: bool = False
    request: Optional[RequestConfig] = None
    permission: PermissionPolicy = Field(default_factory=PermissionPolicy)


class PaginationMode(str, Enum):
    CLIENT = "client"
    QUERY = "query"


class PaginationQueryConfig(ConfigModel):
    page_index_variable: str = ""
    page_size_variable: str = ""
    offset_variable: str = ""
    total_count_field: Optional[FieldReference] = None


class PaginationConfig(ConfigModel):
    enabled: bool = False
    mode: PaginationMode = PaginationMode.CLIENT
    default_page_size: int = Field(default=10, gt=0)
    query: PaginationQueryConfig = Field(default_factory=PaginationQueryConfig)


class RowHighlightConfig(ConfigModel):
    enabled: bool = False
    variable: str = ""
    reset_variable: bool = False


class TableConfig(ConfigModel):
    name: str = ""
    items: list[ColumnConfig] = Field(default_factory=list)
    update: Optional[RequestConfig] = None
    add_row: OperationConfig = Field(default_factory=OperationConfig)
    delete_row: OperationConfig = Field(default_factory=OperationConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    row_highlight: RowHighlightConfig = Field(default_factory=RowHighlightConfig)

    def get_request(self, operation: MutationOperation) -> Optional[RequestConfig]:
        if operation == "add":
            return self.add_row.request
        if operation == "update":
            return self.update
        if operation == "delete":
            return self.delete_row.request
        return None


class NestedObjectType(str, Enum):
    CARDS = "cards"


class NestedObjectEditorConfig(ConfigModel):
    type: NestedObjectType = NestedObjectType.CARDS
    id: str = ""
    title: str = ""
    body: str = ""
    time: str = ""
    author: str = ""


class NestedObjectConfig(ConfigModel):
    id: str
    name: str = ""
    type: NestedObjectType = NestedObjectType.CARDS
    get: RequestConfig = Field(default_factory=RequestConfig)
    editor: NestedObjectEditorConfig = Field(default_factory=NestedObjectEditorConfig)


__all__ = [
    "MutationOperation",
    "ColumnEditorType",
    "ColumnEditorConfig",
    "ColumnEditConfig",
    "ColumnNewRowEditConfig",
    "ColumnFilterConfig",
    "ColumnConfig",
    "RequestConfig",
    "OperationConfig",
    "PaginationMode",
    "PaginationQueryConfig",
    "PaginationConfig",
    "RowHighlightConfig",
    "TableConfig",
    "NestedObjectType",
    "NestedObjectEditorConfig",
    "NestedObjectConfig",
]
