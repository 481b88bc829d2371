"""BlobStore error models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class BlobStoreError(BaseModel):
    """Base blob store error."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    message: str


class BlobReadError(BlobStoreError):
    """Error reading a blob."""


class BlobWriteError(BlobStoreError):
    """Error writing or removing a blob."""
