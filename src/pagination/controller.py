"""Pagination in client mode or query ("manual") mode.

Client mode keeps page index/size locally and counts the locally available
rows. Query mode is bound to dashboard variables: the state is seeded once
from them and every change is written back in a single location update so
an external observer never sees page index, page size and offset disagree.
"""
from __future__ import annotations

import math
from typing import Any, Callable, Mapping, Optional, Sized, Union

from app_logging import get_logger
from config import get_settings
from metrics import record_variable_write
from models import (
    EstimatedTotal,
    ExactTotal,
    PaginationConfig,
    PaginationMode,
    PaginationState,
    ResultSet,
    TotalCount,
    get_field_by_source,
)
from variables import (
    EventBus,
    RefreshEvent,
    Subscription,
    Variable,
    VariableStore,
    get_variable_key_for_location,
    get_variable_number_value,
    get_variables_map,
    set_variables_value,
)

PaginationUpdater = Callable[[PaginationState], Union[PaginationState, Mapping[str, Any]]]


def _as_state(value: Union[PaginationState, Mapping[str, Any]], current: PaginationState) -> PaginationState:
    if isinstance(value, PaginationState):
        return value
    return PaginationState(
        page_index=value.get("page_index", value.get("pageIndex", current.page_index)),
        page_size=value.get("page_size", value.get("pageSize", current.page_size)),
    )


def estimate_total(state: PaginationState) -> EstimatedTotal:
    """Current page plus one more, so "next" stays usable before the real count is known."""
    return EstimatedTotal((state.page_index + 1) * state.page_size + state.page_size)


class PaginationController:
    def __init__(self, config: Optional[PaginationConfig], variable_store: VariableStore, *, event_bus: Optional[EventBus] = None):
        self._config = config or PaginationConfig(default_page_size=get_settings().default_page_size)
        self._store = variable_store
        self._event_bus = event_bus or variable_store.event_bus
        self._variables: dict[str, Variable] = get_variables_map(variable_store.get_variables())
        self._subscription: Optional[Subscription] = None
        self._log = get_logger("pagination.controller")
        self._state = self._seed(PaginationState(page_index=0, page_size=self._config.default_page_size))

    # ----------------- Flags -----------------
    @property
    def config(self) -> PaginationConfig:
        return self._config

    @property
    def is_enabled(self) -> bool:
        return self._config.enabled

    @property
    def is_query_mode(self) -> bool:
        return self._config.mode == PaginationMode.QUERY

    @property
    def is_manual(self) -> bool:
        """Rows are paged outside the grid (disabled, or paged by the query)."""
        return not self._config.enabled or self.is_query_mode

    @property
    def value(self) -> PaginationState:
        return self._state

    # ----------------- Variables -----------------
    def _get_variable(self, name: str) -> Optional[Variable]:
        if not name:
            return None
        return self._variables.get(name)

    @property
    def page_index_variable(self) -> Optional[Variable]:
        return self._get_variable(self._config.query.page_index_variable)

    @property
    def page_size_variable(self) -> Optional[Variable]:
        return self._get_variable(self._config.query.page_size_variable)

    @property
    def offset_variable(self) -> Optional[Variable]:
        return self._get_variable(self._config.query.offset_variable)

    def _seed(self, state: PaginationState) -> PaginationState:
        if not self.is_query_mode:
            return state

        page_size = state.page_size
        size_value = get_variable_number_value(self.page_size_variable)
        if size_value is not None and size_value > 0:
            page_size = int(size_value)

        page_index = 0
        index_value = get_variable_number_value(self.page_index_variable)
        offset_value = get_variable_number_value(self.offset_variable)
        if index_value is not None:
            page_index = int(index_value)
        elif offset_value is not None:
            page_index = math.floor(offset_value / page_size)

        return PaginationState(page_index=max(page_index, 0), page_size=page_size)

    def _on_refresh(self, _event: RefreshEvent) -> None:
        self._variables = get_variables_map(self._store.get_variables())

    def mount(self) -> None:
        if self._subscription is None:
            self._subscription = self._event_bus.subscribe(RefreshEvent, self._on_refresh)

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    # ----------------- Total -----------------
    def total(self, data: Optional[list[ResultSet]] = None, rows: Optional[Sized] = None) -> TotalCount:
        """Total row count.

        Enabled query mode reads the configured total-count field from ``data``
        and falls back to ``estimate_total``. Otherwise (client mode, or
        pagination disabled) it counts ``rows``, which should already be
        filtered.
        """
        if self.is_enabled and self.is_query_mode:
            field_ref = self._config.query.total_count_field
            if field_ref is not None and data:
                series = get_field_by_source(data, field_ref)
                if series is not None and not series.empty:
                    try:
                        return ExactTotal(int(series.iloc[0]))
                    except (TypeError, ValueError):
                        self._log.warning("total count field is not numeric", extra={"field": field_ref.name})
            return estimate_total(self._state)
        return ExactTotal(len(rows) if rows is not None else 0)

    # ----------------- Change -----------------
    def on_change(self, value_or_updater: Union[PaginationState, Mapping[str, Any], PaginationUpdater]) -> PaginationState:
        raw = value_or_updater(self._state) if callable(value_or_updater) else value_or_updater
        updated = _as_state(raw, self._state)

        if not self.is_query_mode:
            self._state = updated
            return updated

        payload: dict[str, Any] = {}
        if self.page_index_variable is not None:
            payload[get_variable_key_for_location(self.page_index_variable.name)] = updated.page_index
        if self.page_size_variable is not None:
            payload[get_variable_key_for_location(self.page_size_variable.name)] = updated.page_size
        if self.offset_variable is not None:
            payload[get_variable_key_for_location(self.offset_variable.name)] = updated.page_index * updated.page_size

        self._state = updated
        if set_variables_value(self._store, payload):
            record_variable_write("pagination")
        return updated


__all__ = ["PaginationController", "estimate_total"]
