"""Pydantic models for config entries, scopes and store errors."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from ai_builder_config.common import NonEmptyString


class ConfigScope(str, Enum):
    """Configuration scope levels."""

    GLOBAL = "global"
    PROJECT = "project"


class ConfigEntry(BaseModel):
    """A single stored setting.

    ``value`` holds the plain value, or the ciphertext envelope when
    ``encrypted`` is set. Timestamps serialize as ``createdAt``/``updatedAt``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    key: NonEmptyString
    value: JsonValue
    scope: ConfigScope
    encrypted: bool = False
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


type ConfigDocument = dict[str, ConfigEntry]


class ScopeNotConfiguredError(BaseModel):
    """Project scope used before a project root was set."""

    model_config = ConfigDict(extra="forbid")

    scope: ConfigScope
    message: str


class PersistenceError(BaseModel):
    """A scope document could not be written or removed."""

    model_config = ConfigDict(extra="forbid")

    scope: ConfigScope
    path: Path
    message: str
