"""Query result sets and field lookup.

A ``ResultSet`` wraps one result set returned by the host query engine (or by
a datasource request) as a ``pandas.DataFrame``: columns are fields, rows are
records. ``ref_id`` is the name the query was registered under.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

import pandas as pd

from .permission import FieldReference


@dataclass
class ResultSet:
    frame: pd.DataFrame = field(default_factory=pd.DataFrame)
    ref_id: str = ""

    @classmethod
    def from_fields(cls, fields: Mapping[str, Iterable[Any]], ref_id: str = "") -> "ResultSet":
        return cls(frame=pd.DataFrame({name: list(values) for name, values in fields.items()}), ref_id=ref_id)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], ref_id: str = "") -> "ResultSet":
        return cls(frame=pd.DataFrame.from_records(list(records)), ref_id=ref_id)

    @property
    def field_names(self) -> list[str]:
        return [str(c) for c in self.frame.columns]

    def __len__(self) -> int:
        return len(self.frame.index)


def get_source_key(ref: FieldReference) -> str:
    if ref.source != "" and ref.source is not None:
        return f"{ref.source}:{ref.name}"
    return ref.name


def get_field_by_source(data: list[ResultSet], ref: FieldReference) -> pd.Series | None:
    """Locate a field across loaded result sets.

    ``ref.source`` as int addresses a result set by position, as a non-empty
    string by ``ref_id``; an empty source searches every result set in order.
    """
    if isinstance(ref.source, int) and not isinstance(ref.source, bool):
        candidates = [data[ref.source]] if 0 <= ref.source < len(data) else []
    elif ref.source:
        candidates = [rs for rs in data if rs.ref_id == ref.source]
    else:
        candidates = list(data)

    for result_set in candidates:
        if ref.name in result_set.frame.columns:
            return result_set.frame[ref.name]
    return None


def frame_to_records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    # NaN -> None so records compare cleanly against plain dicts
    cleaned = frame.astype(object).where(pd.notna(frame), None)
    return cleaned.to_dict(orient="records")


__all__ = ["ResultSet", "get_source_key", "get_field_by_source", "frame_to_records"]
