"""Crypto error models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class DecryptError(BaseModel):
    """Envelope is malformed or failed authentication."""

    model_config = ConfigDict(extra="forbid")

    key: str | None = None
    message: str


class KeyMaterialError(BaseModel):
    """Encryption key could not be persisted."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    message: str
