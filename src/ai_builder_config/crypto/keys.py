"""Encryption key loading and generation."""

from __future__ import annotations

import re
import secrets
from pathlib import Path

from result import Err, Ok, Result, is_err

from ai_builder_config.common import create_logger
from ai_builder_config.datastore import BlobStore

from .models import KeyMaterialError

logger = create_logger("crypto")

KEY_BYTES = 32
KEY_FILE_MODE = 0o600

_KEY_PATTERN = re.compile(rf"^[0-9a-fA-F]{{{KEY_BYTES * 2}}}$")


class KeyMaterial:
    """Owns the hex-encoded AES-256 key stored at ``path``.

    The key is read (or generated) once and cached for the lifetime of the
    instance. A key file that cannot be read, or does not hold a 64 character
    hex string, is replaced by a fresh key. Values encrypted with the old key
    can no longer be decrypted after that.
    """

    def __init__(self, path: Path, blobs: BlobStore) -> None:
        self._path = path
        self._blobs = blobs
        self._key: str | None = None

    @property
    def path(self) -> Path:
        return self._path

    def obtain(self) -> Result[str, KeyMaterialError]:
        if self._key is not None:
            return Ok(self._key)

        existing = self._load_existing()
        if existing is not None:
            self._key = existing
            return Ok(existing)

        key = secrets.token_hex(KEY_BYTES)
        write_result = self._blobs.write_text(self._path, key, mode=KEY_FILE_MODE)
        if is_err(write_result):
            error = write_result.unwrap_err()
            logger.error("Failed to persist encryption key", path=str(self._path), error=error.message)
            return Err(KeyMaterialError(path=self._path, message=error.message))

        logger.info("Generated new encryption key", path=str(self._path))
        self._key = key
        return Ok(key)

    def _load_existing(self) -> str | None:
        if not self._blobs.exists(self._path):
            return None

        read_result = self._blobs.read_text(self._path)
        if is_err(read_result):
            logger.warning(
                "Failed to read encryption key, generating new one",
                path=str(self._path),
                error=read_result.unwrap_err().message,
            )
            return None

        candidate = read_result.unwrap().strip()
        if not _KEY_PATTERN.match(candidate):
            logger.warning("Encryption key file is malformed, generating new one", path=str(self._path))
            return None

        return candidate
