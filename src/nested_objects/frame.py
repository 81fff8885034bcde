"""Conversion of a nested-object result set into a lookup keyed by record id."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from models import NestedObjectConfig, ResultSet, frame_to_records


def get_id_field(config: NestedObjectConfig) -> str:
    return config.editor.id or "id"


def prepare_frame_for_nested_object(config: NestedObjectConfig, result_set: ResultSet) -> dict[Any, dict[str, Any]]:
    id_key = get_id_field(config)
    lookup: dict[Any, dict[str, Any]] = {}
    for record in frame_to_records(result_set.frame):
        lookup[record.get(id_key)] = record
    return lookup


def collect_ids(rows: Iterable[Mapping[str, Any]], field_name: str) -> list[Any]:
    """Distinct foreign-key ids referenced by ``field_name``, in first-seen order.

    A cell holds a scalar id or a list of ids; empty lists and missing values
    contribute nothing.
    """
    ids: dict[Any, None] = {}
    for row in rows:
        value = row.get(field_name)
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None or item == "":
                continue
            ids.setdefault(item, None)
    return list(ids)


__all__ = ["get_id_field", "prepare_frame_for_nested_object", "collect_ids"]
