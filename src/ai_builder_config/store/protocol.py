"""Scoped store protocol."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from result import Result

from .models import ConfigDocument, ConfigScope, PersistenceError, ScopeNotConfiguredError


class ScopedStore(Protocol):
    """Whole-document persistence of config entries, one document per scope."""

    def set_project_path(self, project_root: Path) -> None: ...

    def resolve_path(self, scope: ConfigScope) -> Result[Path, ScopeNotConfiguredError]: ...

    def read(self, scope: ConfigScope) -> Result[ConfigDocument, ScopeNotConfiguredError]:
        """Load a scope's document.

        Returns:
            Ok(document), empty when the document is absent or unreadable.
            Err(ScopeNotConfiguredError) for the project scope without a project root.
        """
        ...

    def write(
        self, scope: ConfigScope, document: ConfigDocument
    ) -> Result[None, ScopeNotConfiguredError | PersistenceError]: ...

    def delete(self, scope: ConfigScope) -> Result[None, ScopeNotConfiguredError | PersistenceError]: ...
