"""Column filters: variable sync, merging, client filtering and saved preferences."""

from .column_filters import (
    apply_column_filters,
    coerce_filters,
    column_filter_mask,
    filter_rows,
    get_default_filters,
    get_supported_filter_types_for_variable,
    get_variable_column_filters,
    merge_column_filters,
)
from .preferences import (
    TablePreference,
    TablePreferenceColumn,
    UserPreferences,
    UserPreferenceStore,
    get_saved_filters,
    prepare_column_configs_for_preferences,
    prepare_columns_with_filters,
    save_with_correct_filters,
    update_user_preference_tables,
)
from .synchronizer import FilterSynchronizer

__all__ = [
    "FilterSynchronizer",
    "TablePreference",
    "TablePreferenceColumn",
    "UserPreferences",
    "UserPreferenceStore",
    "apply_column_filters",
    "coerce_filters",
    "column_filter_mask",
    "filter_rows",
    "get_default_filters",
    "get_saved_filters",
    "get_supported_filter_types_for_variable",
    "get_variable_column_filters",
    "merge_column_filters",
    "prepare_column_configs_for_preferences",
    "prepare_columns_with_filters",
    "save_with_correct_filters",
    "update_user_preference_tables",
]
