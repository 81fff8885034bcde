"""Persisted per-user table preferences (column visibility and filters).

Only the saved filters feed the grid core: they seed the filter state of a
table once, see ``FilterSynchronizer``.
"""
from __future__ import annotations

from typing import Optional

from pydantic import Field, ValidationError

from app_logging import get_logger
from models import ColumnConfig, ColumnFilter, ColumnFiltersState, ColumnFilterValue, FacetedFilter, NumberFilter, SearchFilter, TimestampFilter
from models.base import ConfigModel

_log = get_logger("filters.preferences")


class TablePreferenceColumn(ConfigModel):
    name: str
    enabled: bool = True
    filter: Optional[ColumnFilterValue] = None


class TablePreference(ConfigModel):
    name: str
    columns: list[TablePreferenceColumn] = Field(default_factory=list)


class UserPreferences(ConfigModel):
    tables: list[TablePreference] = Field(default_factory=list)

    def get_table(self, name: str) -> Optional[TablePreference]:
        for table in self.tables:
            if table.name == name:
                return table
        return None


def save_with_correct_filters(value: ColumnFilterValue) -> Optional[ColumnFilterValue]:
    """Filter worth persisting, ``None`` for empty or incomplete ones."""
    if isinstance(value, SearchFilter):
        return value if value.value else None
    if isinstance(value, FacetedFilter):
        return value if value.value else None
    if isinstance(value, NumberFilter):
        return value
    if isinstance(value, TimestampFilter):
        return value if value.value.is_valid else None
    return None


def get_saved_filters(preferences: UserPreferences, table_name: str) -> ColumnFiltersState:
    table = preferences.get_table(table_name)
    if table is None:
        return []
    return [ColumnFilter(id=column.name, value=column.filter) for column in table.columns if column.filter is not None]


def prepare_column_configs_for_preferences(columns: list[ColumnConfig], table_name: str, preferences: UserPreferences) -> list[TablePreferenceColumn]:
    table = preferences.get_table(table_name)
    existing = {column.name: column for column in table.columns} if table else {}
    return [
        TablePreferenceColumn(
            name=column.field.name,
            enabled=column.enabled,
            filter=existing[column.field.name].filter if column.field.name in existing else None,
        )
        for column in columns
    ]


def prepare_columns_with_filters(
    preferences: UserPreferences,
    table_name: str,
    columns: list[ColumnConfig],
    column_name: str,
    filter_value: Optional[ColumnFilterValue] = None,
) -> list[TablePreferenceColumn]:
    table = preferences.get_table(table_name)
    if table is None or not table.columns:
        source = prepare_column_configs_for_preferences(columns, table_name, preferences)
    else:
        source = table.columns
    saved = save_with_correct_filters(filter_value) if filter_value is not None else None
    return [
        column.model_copy(update={"filter": saved}) if column.name == column_name else column
        for column in source
    ]


def update_user_preference_tables(table_name: str, preferences: UserPreferences, columns: list[TablePreferenceColumn]) -> list[TablePreference]:
    tables = list(preferences.tables)
    for index, table in enumerate(tables):
        if table.name == table_name:
            tables[index] = table.model_copy(update={"columns": list(columns)})
            return tables
    tables.append(TablePreference(name=table_name, columns=list(columns)))
    return tables


class UserPreferenceStore:
    """Keeps serialized preferences per panel, JSON in/out like the host's user storage."""

    def __init__(self, items: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(items or {})

    @staticmethod
    def key(panel_id: int | str) -> str:
        return f"grid.panel.{panel_id}.user.preferences"

    def load(self, panel_id: int | str) -> UserPreferences:
        raw = self._items.get(self.key(panel_id))
        if not raw:
            return UserPreferences()
        try:
            return UserPreferences.model_validate_json(raw)
        except ValidationError as e:
            _log.warning("discarding unreadable preferences", extra={"panel": panel_id, "error": str(e)})
            return UserPreferences()

    def save(self, panel_id: int | str, preferences: UserPreferences) -> None:
        self._items[self.key(panel_id)] = preferences.model_dump_json(by_alias=True)

    def save_filter(self, panel_id: int | str, table_name: str, columns: list[ColumnConfig], column_name: str, value: Optional[ColumnFilterValue]) -> UserPreferences:
        preferences = self.load(panel_id)
        updated_columns = prepare_columns_with_filters(preferences, table_name, columns, column_name, value)
        updated = preferences.model_copy(update={"tables": update_user_preference_tables(table_name, preferences, updated_columns)})
        self.save(panel_id, updated)
        return updated

    def get_filters(self, panel_id: int | str, table_name: str) -> ColumnFiltersState:
        return get_saved_filters(self.load(panel_id), table_name)


__all__ = [
    "TablePreferenceColumn",
    "TablePreference",
    "UserPreferences",
    "UserPreferenceStore",
    "save_with_correct_filters",
    "get_saved_filters",
    "prepare_column_configs_for_preferences",
    "prepare_columns_with_filters",
    "update_user_preference_tables",
]
