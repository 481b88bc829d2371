"""File-based scoped store settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ScopedStoreSettings:
    """Where the scoped store keeps its files.

    Attributes:
        config_root: Directory holding the global document and the key file
        project_subdir_name: Directory inside a project root holding the project document
        document_filename: Filename of a scope's document
        key_filename: Filename of the encryption key inside ``config_root``
    """

    config_root: Path
    project_subdir_name: str = ".ai-builder"
    document_filename: str = "config.json"
    key_filename: str = ".key"

    @property
    def global_path(self) -> Path:
        return self.config_root / self.document_filename

    @property
    def key_path(self) -> Path:
        return self.config_root / self.key_filename

    def project_path(self, project_root: Path) -> Path:
        return project_root / self.project_subdir_name / self.document_filename
