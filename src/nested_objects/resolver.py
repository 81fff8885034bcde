"""
Batch loader for nested objects (child records referenced by id columns).
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from loguru import logger

from datasource import DatasourceRequest, ReplaceVariables, identity_replace
from exceptions import QueryError
from metrics import record_nested_object_load
from models import ColumnConfig, NestedObjectConfig
from mutations import get_load_error_message
from notifications import Notifier

from .frame import collect_ids, prepare_frame_for_nested_object

NestedObjectLookup = dict[str, dict[Any, dict[str, Any]]]


class NestedObjectResolver:
    """
    Loads child records for a nested-object column and caches them per object type.

    A load replaces only the entries of its own object type. Failed loads
    leave the cache untouched; a load superseded by a newer one for the same
    object type is discarded when it resolves.
    """

    def __init__(
        self,
        objects: list[NestedObjectConfig],
        request: DatasourceRequest,
        *,
        notifier: Optional[Notifier] = None,
        replace_variables: ReplaceVariables = identity_replace,
    ):
        self._objects = {item.id: item for item in objects}
        self._request = request
        self._notifier = notifier or Notifier()
        self._replace_variables = replace_variables
        self._data: NestedObjectLookup = {}
        self._loading: dict[str, bool] = {}
        self._tokens: dict[str, int] = {}

    @property
    def data(self) -> NestedObjectLookup:
        return dict(self._data)

    @property
    def loading_state(self) -> dict[str, bool]:
        return dict(self._loading)

    def set_objects(self, objects: list[NestedObjectConfig]) -> None:
        self._objects = {item.id: item for item in objects}

    def get_values_for_column(self, object_id: str) -> Optional[dict[Any, dict[str, Any]]]:
        return self._data.get(object_id)

    async def on_load(self, column: ColumnConfig, rows: list[Mapping[str, Any]]) -> bool:
        """
        Load nested objects referenced by ``column`` across ``rows``.

        Returns:
            True when the cache for the object type was updated
        """
        config = self._objects.get(column.object_id)
        ids = collect_ids(rows, column.field.name)

        if config is None or not ids:
            logger.debug(f"Nested object load skipped for column {column.id}")
            return False

        key = config.id
        token = self._tokens.get(key, 0) + 1
        self._tokens[key] = token
        self._loading[key] = True

        try:
            response = await self._request(
                query=config.get.payload,
                datasource=config.get.datasource,
                payload={"rows": [dict(row) for row in rows], "ids": ids},
                replace_variables=self._replace_variables,
            )
            if response.is_error:
                raise QueryError(response.errors)
        except Exception as e:
            if token == self._tokens.get(key):
                self._loading[key] = False
                self._notifier.error("Error", get_load_error_message(e))
            record_nested_object_load(key, "error")
            logger.error(f"Nested object load for {key} failed: {e}")
            return False

        if token != self._tokens.get(key):
            logger.debug(f"Discarding superseded nested object load for {key}")
            record_nested_object_load(key, "stale")
            return False

        self._loading[key] = False
        if response.data:
            self._data = {**self._data, key: prepare_frame_for_nested_object(config, response.data[0])}
        record_nested_object_load(key, "success")
        logger.info(f"Loaded {len(self._data.get(key, {}))} nested objects for {key}")
        return True


__all__ = ["NestedObjectResolver", "NestedObjectLookup"]
