"""Shared pydantic base for panel configuration models.

Panel options arrive as camelCase JSON from the dashboard host; the models
accept both that form and snake_case keyword arguments.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


__all__ = ["ConfigModel"]
