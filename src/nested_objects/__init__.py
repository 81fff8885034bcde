"""Nested objects: child records referenced from table rows."""

from .frame import collect_ids, get_id_field, prepare_frame_for_nested_object
from .resolver import NestedObjectLookup, NestedObjectResolver

__all__ = [
    "NestedObjectLookup",
    "NestedObjectResolver",
    "collect_ids",
    "get_id_field",
    "prepare_frame_for_nested_object",
]
