"""Authoritative column filter state for one table.

Three sources feed the state, applied in this order:

1. a non-empty user preference replaces the state whenever it changes;
2. variable-driven filters are merged on every column change and on every
   refresh event;
3. ``set_filters`` (user interaction) wins until the next refresh event.

Default filters that change while no preference is set are merged the same
way as variable-driven filters. Recomputation is idempotent: merging the same
variable values twice leaves the state untouched.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Union

from app_logging import get_logger
from metrics import record_filter_sync
from models import ColumnConfig, ColumnFilter, ColumnFiltersState
from variables import EventBus, RefreshEvent, Subscription, VariableStore

from .column_filters import coerce_filters, get_default_filters, get_variable_column_filters, merge_column_filters

FiltersUpdater = Callable[[ColumnFiltersState], Iterable[Union[ColumnFilter, Mapping[str, Any]]]]
Listener = Callable[[ColumnFiltersState], None]


class FilterSynchronizer:
    def __init__(
        self,
        columns: list[ColumnConfig],
        variable_store: VariableStore,
        *,
        event_bus: Optional[EventBus] = None,
        user_filter_preference: Optional[ColumnFiltersState] = None,
    ):
        self._columns = list(columns)
        self._store = variable_store
        self._event_bus = event_bus or variable_store.event_bus
        self._preference: ColumnFiltersState = coerce_filters(user_filter_preference or [])
        self._subscription: Optional[Subscription] = None
        self._listeners: list[Listener] = []
        self._log = get_logger("filters.synchronizer")
        self._filters: ColumnFiltersState = self._initial_filters()

    # ----------------- State -----------------
    @property
    def filters(self) -> ColumnFiltersState:
        return list(self._filters)

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _variable_filters(self) -> ColumnFiltersState:
        return get_variable_column_filters(self._columns, self._store.get_variables())

    def _initial_filters(self) -> ColumnFiltersState:
        if self._preference:
            return list(self._preference)
        defaults = get_default_filters(self._columns)
        variable_filters = self._variable_filters()
        if variable_filters:
            return merge_column_filters(defaults, variable_filters)
        return defaults

    def _apply(self, filters: ColumnFiltersState, trigger: str) -> None:
        record_filter_sync(trigger)
        if filters == self._filters:
            return
        self._filters = list(filters)
        self._log.debug("filters changed", extra={"trigger": trigger, "count": len(self._filters)})
        for listener in list(self._listeners):
            listener(self.filters)

    # ----------------- Subscription lifecycle -----------------
    def mount(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self._event_bus.subscribe(RefreshEvent, self._on_refresh)

    def unmount(self) -> None:
        if self._subscription is None:
            return
        self._subscription.unsubscribe()
        self._subscription = None

    def set_event_bus(self, event_bus: EventBus) -> None:
        if event_bus is self._event_bus:
            return
        was_mounted = self.is_mounted
        self.unmount()
        self._event_bus = event_bus
        if was_mounted:
            self.mount()

    def __enter__(self) -> "FilterSynchronizer":
        self.mount()
        return self

    def __exit__(self, *exc) -> None:
        self.unmount()

    # ----------------- Inputs -----------------
    def _on_refresh(self, _event: RefreshEvent) -> None:
        self._apply(merge_column_filters(self._filters, self._variable_filters()), "refresh")

    def set_columns(self, columns: list[ColumnConfig]) -> None:
        old_defaults = get_default_filters(self._columns)
        self._columns = list(columns)
        self._apply(merge_column_filters(self._filters, self._variable_filters()), "columns")

        new_defaults = get_default_filters(self._columns)
        if self._preference or new_defaults == old_defaults:
            return
        new_ids = {item.id for item in new_defaults}
        removed = [ColumnFilter(id=item.id, value=None) for item in old_defaults if item.id not in new_ids]
        merged = merge_column_filters(self._filters, new_defaults + removed)
        self._apply(merge_column_filters(merged, self._variable_filters()), "defaults")

    def set_user_preference(self, preference: Optional[ColumnFiltersState]) -> None:
        self._preference = coerce_filters(preference or [])
        if self._preference:
            self._apply(list(self._preference), "preference")

    def set_filters(self, value_or_updater: Union[Iterable[Union[ColumnFilter, Mapping[str, Any]]], FiltersUpdater]) -> ColumnFiltersState:
        value = value_or_updater(self.filters) if callable(value_or_updater) else value_or_updater
        self._apply(coerce_filters(value), "manual")
        return self.filters


__all__ = ["FilterSynchronizer"]
