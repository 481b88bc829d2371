"""File-based scoped store implementation."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError
from result import Err, Ok, Result, is_err

from ai_builder_config.common import create_logger, load_json_document, resolve_project_root
from ai_builder_config.datastore import BlobStore

from .models import ConfigDocument, ConfigEntry, ConfigScope, PersistenceError, ScopeNotConfiguredError
from .protocol import ScopedStore
from .settings import ScopedStoreSettings

logger = create_logger("store")


class FileScopedStore(ScopedStore):
    """Reads and writes one JSON document per scope.

    Reads are lenient: a missing, unreadable or malformed document is treated as
    empty. Writes are strict and report every failure.
    """

    def __init__(self, settings: ScopedStoreSettings, blobs: BlobStore) -> None:
        self.settings = settings
        self._blobs = blobs
        self._project_root: Path | None = None

    @property
    def config_root(self) -> Path:
        return self.settings.config_root

    @property
    def global_path(self) -> Path:
        return self.settings.global_path

    @property
    def key_path(self) -> Path:
        return self.settings.key_path

    @property
    def project_root(self) -> Path | None:
        return self._project_root

    def set_project_path(self, project_root: Path) -> None:
        resolved = resolve_project_root(project_root)
        if self._project_root is not None and self._project_root != resolved:
            raise ValueError(f"Project root already set to {self._project_root}, refusing to switch to {resolved}")

        self._project_root = resolved
        logger.debug("Project root set", project_root=str(resolved))

    def resolve_path(self, scope: ConfigScope) -> Result[Path, ScopeNotConfiguredError]:
        match scope:
            case ConfigScope.GLOBAL:
                return Ok(self.settings.global_path)
            case ConfigScope.PROJECT:
                if self._project_root is None:
                    return Err(
                        ScopeNotConfiguredError(
                            scope=scope,
                            message="Project config path not set. Call set_project_path() first.",
                        )
                    )
                return Ok(self.settings.project_path(self._project_root))
            case _:
                raise ValueError(f"Unexpected scope: {scope}")

    def read(self, scope: ConfigScope) -> Result[ConfigDocument, ScopeNotConfiguredError]:
        path_result = self.resolve_path(scope)
        if is_err(path_result):
            return path_result

        path = path_result.unwrap()
        if not self._blobs.exists(path):
            return Ok({})

        read_result = self._blobs.read_text(path)
        if is_err(read_result):
            logger.error(
                "Config document read error",
                scope=scope.value,
                path=str(path),
                error=read_result.unwrap_err().message,
            )
            return Ok({})

        try:
            raw = load_json_document(read_result.unwrap())
        except ValueError as exc:
            logger.error(
                "Config document JSON parse error",
                scope=scope.value,
                path=str(path),
                line=getattr(exc, "lineno", None),
                column=getattr(exc, "colno", None),
                error=str(exc),
            )
            return Ok({})

        if not isinstance(raw, dict):
            logger.error("Config document must be a JSON object", scope=scope.value, path=str(path))
            return Ok({})

        return Ok(self._parse_entries(raw, scope, path))

    def write(
        self, scope: ConfigScope, document: ConfigDocument
    ) -> Result[None, ScopeNotConfiguredError | PersistenceError]:
        path_result = self.resolve_path(scope)
        if is_err(path_result):
            return path_result

        path = path_result.unwrap()
        try:
            payload = {key: entry.model_dump(mode="json", by_alias=True) for key, entry in document.items()}
            text = json.dumps(payload, indent=2)
        except (TypeError, ValueError) as exc:
            return Err(PersistenceError(scope=scope, path=path, message=f"Failed to serialize config: {exc}"))

        return (
            self._blobs.write_text(path, text + "\n")
            .map_err(lambda error: PersistenceError(scope=scope, path=path, message=error.message))
            .inspect_err(
                lambda error: logger.error(
                    "Config document write failed", scope=scope.value, path=str(path), error=error.message
                )
            )
            .inspect(lambda _: logger.debug("Config document written", scope=scope.value, entries=len(document)))
        )

    def delete(self, scope: ConfigScope) -> Result[None, ScopeNotConfiguredError | PersistenceError]:
        path_result = self.resolve_path(scope)
        if is_err(path_result):
            return path_result

        path = path_result.unwrap()
        if not self._blobs.exists(path):
            return Ok(None)

        return self._blobs.delete(path).map_err(
            lambda error: PersistenceError(scope=scope, path=path, message=error.message)
        )

    def _parse_entries(self, raw: dict[str, object], scope: ConfigScope, path: Path) -> ConfigDocument:
        document: ConfigDocument = {}
        for key, data in raw.items():
            if not isinstance(data, dict):
                logger.warning("Skipping malformed config entry", scope=scope.value, path=str(path), key=key)
                continue
            try:
                document[key] = ConfigEntry.model_validate({**data, "key": key})
            except ValidationError as exc:
                field = None
                if exc.errors():
                    loc = exc.errors()[0].get("loc") or ()
                    field = ".".join(str(part) for part in loc) or None
                logger.warning("Skipping invalid config entry", scope=scope.value, path=str(path), key=key, field=field)
        return document
