"""File-based BlobStore implementation."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from result import Err, Ok, Result

from ai_builder_config.common import create_logger

from .models import BlobReadError, BlobWriteError

logger = create_logger("datastore")

DEFAULT_FILE_MODE = 0o600


class FileBlobStore:
    """File-based implementation of BlobStore protocol.

    Writes go to a temporary sibling file which is fsynced and then renamed over
    the target, so readers observe either the old or the new content. Written
    files get ``mode``, or ``DEFAULT_FILE_MODE`` (owner read/write only) when no
    mode is given.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> Result[str, BlobReadError]:
        try:
            return Ok(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            return Err(BlobReadError(path=path, message=f"Failed to read data: {e}"))

    def write_text(self, path: Path, text: str, mode: int | None = None) -> Result[None, BlobWriteError]:
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())

            os.chmod(tmp_name, DEFAULT_FILE_MODE if mode is None else mode)

            os.replace(tmp_name, path)
            tmp_name = None

            logger.debug("Blob written", path=str(path))
            return Ok(None)

        except OSError as e:
            return Err(BlobWriteError(path=path, message=f"Failed to write data: {e}"))

        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

    def delete(self, path: Path) -> Result[None, BlobWriteError]:
        try:
            path.unlink(missing_ok=True)
            return Ok(None)
        except OSError as e:
            return Err(BlobWriteError(path=path, message=f"Failed to delete data: {e}"))

    def ensure_directory(self, path: Path) -> Result[None, BlobWriteError]:
        try:
            path.mkdir(parents=True, exist_ok=True)
            return Ok(None)
        except OSError as e:
            return Err(BlobWriteError(path=path, message=f"Failed to create directory: {e}"))

    def is_accessible(self, path: Path) -> bool:
        return os.access(path, os.R_OK | os.W_OK)
