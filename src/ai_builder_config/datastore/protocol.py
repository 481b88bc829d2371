"""BlobStore protocol."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from result import Result

from .models import BlobReadError, BlobWriteError


class BlobStore(Protocol):
    """Whole-blob durable storage: every write replaces the previous content."""

    def exists(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> Result[str, BlobReadError]: ...

    def write_text(self, path: Path, text: str, mode: int | None = None) -> Result[None, BlobWriteError]: ...

    def delete(self, path: Path) -> Result[None, BlobWriteError]: ...

    def ensure_directory(self, path: Path) -> Result[None, BlobWriteError]: ...

    def is_accessible(self, path: Path) -> bool: ...
