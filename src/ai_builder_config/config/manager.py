"""Scoped configuration with transparent encryption of sensitive values."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from pathlib import Path

from pydantic import JsonValue
from result import Err, Ok, Result, is_err

from ai_builder_config.common import JsonDict, create_logger, load_json_document
from ai_builder_config.crypto import DecryptError, KeyMaterial, KeyMaterialError, decrypt, encrypt
from ai_builder_config.datastore import BlobStore, FileBlobStore
from ai_builder_config.store import (
    ConfigEntry,
    ConfigScope,
    FileScopedStore,
    PersistenceError,
    ScopedStoreSettings,
    ScopeNotConfiguredError,
)

from .defaults import DEFAULT_CONFIG
from .models import ENCRYPTED_PLACEHOLDER, ConfigManagerError, ConfigValueError, ValidationReport
from .sensitive import should_encrypt

logger = create_logger("config")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ConfigManager:
    """Public operations over the global and project config documents.

    Values whose key looks sensitive (see ``should_encrypt``) are stored as
    AES-256-GCM envelopes. Every operation is a read-modify-write of one whole
    document; there is no locking, so concurrent writers to the same scope race
    and the last write wins.

    Build instances with ``ConfigManager.open`` which creates the config root
    and loads the key before anything else touches the store.
    """

    def __init__(
        self,
        store: FileScopedStore,
        keys: KeyMaterial,
        blobs: BlobStore,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._keys = keys
        self._blobs = blobs
        self._clock = clock

    @classmethod
    def open(
        cls,
        settings: ScopedStoreSettings,
        blobs: BlobStore | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> Result[ConfigManager, PersistenceError | KeyMaterialError]:
        blobs = blobs or FileBlobStore()

        ensure_result = blobs.ensure_directory(settings.config_root)
        if is_err(ensure_result):
            error = ensure_result.unwrap_err()
            logger.error("Failed to create config directory", path=str(settings.config_root), error=error.message)
            return Err(PersistenceError(scope=ConfigScope.GLOBAL, path=error.path, message=error.message))

        keys = KeyMaterial(settings.key_path, blobs)
        key_result = keys.obtain()
        if is_err(key_result):
            return key_result

        return Ok(cls(FileScopedStore(settings, blobs), keys, blobs, clock=clock))

    @property
    def store(self) -> FileScopedStore:
        return self._store

    def set_project_path(self, project_root: Path) -> None:
        self._store.set_project_path(project_root)

    def set(
        self, key: str, value: JsonValue, scope: ConfigScope = ConfigScope.GLOBAL
    ) -> Result[None, ConfigManagerError]:
        logger.debug("Setting config", key=key, scope=scope.value)

        document_result = self._store.read(scope)
        if is_err(document_result):
            return document_result
        document = document_result.unwrap()

        encrypted = should_encrypt(key)
        stored_result = self._encode_value(key, value, encrypted)
        if is_err(stored_result):
            return stored_result

        now = self._clock()
        existing = document.get(key)
        document[key] = ConfigEntry(
            key=key,
            value=stored_result.unwrap(),
            scope=scope,
            encrypted=encrypted,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )

        return self._store.write(scope, document).inspect(
            lambda _: logger.debug("Config saved", key=key, scope=scope.value, encrypted=encrypted)
        )

    def get(
        self, key: str, scope: ConfigScope = ConfigScope.GLOBAL
    ) -> Result[JsonValue, ScopeNotConfiguredError | DecryptError]:
        """Return the stored value, or ``Ok(None)`` when the key is absent.

        A value that cannot be decrypted is an error, never "absent".
        """
        logger.debug("Getting config", key=key, scope=scope.value)

        document_result = self._store.read(scope)
        if is_err(document_result):
            return document_result

        entry = document_result.unwrap().get(key)
        if entry is None:
            return Ok(None)

        if not entry.encrypted:
            return Ok(entry.value)

        return self._decode_secret(entry).inspect_err(
            lambda error: logger.error(
                "Failed to decrypt config value", key=key, scope=scope.value, error=error.message
            )
        )

    def list(self, scope: ConfigScope = ConfigScope.GLOBAL) -> Result[list[ConfigEntry], ScopeNotConfiguredError]:
        logger.debug("Listing config entries", scope=scope.value)
        return self._store.read(scope).map(lambda document: list(document.values()))

    def delete(
        self, key: str, scope: ConfigScope = ConfigScope.GLOBAL
    ) -> Result[None, ScopeNotConfiguredError | PersistenceError]:
        logger.debug("Deleting config", key=key, scope=scope.value)

        document_result = self._store.read(scope)
        if is_err(document_result):
            return document_result

        document = document_result.unwrap()
        if key not in document:
            return Ok(None)

        del document[key]
        return self._store.write(scope, document).inspect(
            lambda _: logger.debug("Config deleted", key=key, scope=scope.value)
        )

    def export_config(
        self, scope: ConfigScope = ConfigScope.GLOBAL, include_encrypted: bool = False
    ) -> Result[JsonDict, ScopeNotConfiguredError]:
        """Export stored values. Never decrypts.

        Encrypted entries export as ``ENCRYPTED_PLACEHOLDER``, or as their raw
        envelope when ``include_encrypted`` is set.
        """
        return self.list(scope).map(
            lambda entries: {
                entry.key: ENCRYPTED_PLACEHOLDER if entry.encrypted and not include_encrypted else entry.value
                for entry in entries
            }
        )

    def import_config(
        self, data: Mapping[str, JsonValue], scope: ConfigScope = ConfigScope.GLOBAL
    ) -> Result[None, ConfigManagerError]:
        imported = 0
        for key, value in data.items():
            if isinstance(value, str) and value == ENCRYPTED_PLACEHOLDER:
                logger.debug("Skipping encrypted placeholder on import", key=key, scope=scope.value)
                continue

            result = self.set(key, value, scope)
            if is_err(result):
                return result
            imported += 1

        logger.info("Configuration imported", scope=scope.value, imported=imported)
        return Ok(None)

    def reset_config(
        self, scope: ConfigScope = ConfigScope.GLOBAL
    ) -> Result[None, ScopeNotConfiguredError | PersistenceError]:
        return self._store.delete(scope).inspect(lambda _: logger.info("Configuration reset", scope=scope.value))

    def set_default_config(self) -> Result[None, ConfigManagerError]:
        document_result = self._store.read(ConfigScope.GLOBAL)
        if is_err(document_result):
            return document_result

        document = document_result.unwrap()
        missing = {key: value for key, value in DEFAULT_CONFIG.items() if key not in document}
        for key, value in missing.items():
            result = self.set(key, value, ConfigScope.GLOBAL)
            if is_err(result):
                return result

        logger.info("Default configuration initialized", added=len(missing))
        return Ok(None)

    def validate_config(self) -> ValidationReport:
        errors: list[str] = []
        warnings: list[str] = []

        try:
            config_root = self._store.config_root
            if not self._blobs.exists(config_root):
                errors.append("Configuration directory does not exist")
            elif not self._blobs.is_accessible(config_root):
                errors.append("Configuration directory is not accessible")

            if not self._blobs.exists(self._keys.path):
                warnings.append("Encryption key not found, will be created automatically")

            global_path = self._store.global_path
            if self._blobs.exists(global_path):
                errors.extend(self._check_global_document(global_path))

        except Exception as exc:  # noqa: BLE001
            errors.append(f"Configuration validation failed: {exc}")

        report = ValidationReport(errors=errors, warnings=warnings)
        logger.debug("Config validated", valid=report.valid, errors=len(errors), warnings=len(warnings))
        return report

    def _check_global_document(self, path: Path) -> list[str]:
        read_result = self._blobs.read_text(path)
        if is_err(read_result):
            return [f"Global config could not be read: {read_result.unwrap_err().message}"]

        try:
            raw = load_json_document(read_result.unwrap())
        except ValueError:
            return ["Global config contains invalid JSON"]

        if not isinstance(raw, dict):
            return ["Global config is not a valid JSON object"]
        return []

    def _encode_value(
        self, key: str, value: JsonValue, encrypted: bool
    ) -> Result[JsonValue, ConfigValueError | KeyMaterialError]:
        if not key:
            return Err(ConfigValueError(key=key, message="Config key must not be empty"))

        try:
            serialized = json.dumps(value, allow_nan=False)
        except (TypeError, ValueError) as exc:
            return Err(ConfigValueError(key=key, message=f"Value is not JSON-serializable: {exc}"))

        if not encrypted:
            return Ok(json.loads(serialized))

        return self._keys.obtain().map(lambda secret: encrypt(serialized, secret))

    def _decode_secret(self, entry: ConfigEntry) -> Result[JsonValue, DecryptError]:
        if not isinstance(entry.value, str):
            return Err(DecryptError(key=entry.key, message="Encrypted value is not an envelope string"))

        key_result = self._keys.obtain()
        if is_err(key_result):
            return Err(
                DecryptError(key=entry.key, message=f"Encryption key unavailable: {key_result.unwrap_err().message}")
            )

        decrypted = decrypt(entry.value, key_result.unwrap())
        if is_err(decrypted):
            return Err(decrypted.unwrap_err().model_copy(update={"key": entry.key}))

        try:
            return Ok(load_json_document(decrypted.unwrap()))
        except ValueError:
            return Err(DecryptError(key=entry.key, message="Decrypted value is not valid JSON"))
