from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from ai_builder_config.common import AppInfo, AppPaths, resolve_config_root
from ai_builder_config.store import ScopedStoreSettings


class Settings(BaseSettings):
    app: AppInfo = AppInfo()
    paths: AppPaths = AppPaths()

    model_config = SettingsConfigDict(
        env_prefix="AI_BUILDER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        nested_model_default_partial_update=True,
    )

    @property
    def config_root(self) -> Path:
        return resolve_config_root(self.paths.config_root)

    @property
    def logs_dir(self) -> Path:
        return self.config_root / self.paths.logs_dir_name

    def to_store_settings(self) -> ScopedStoreSettings:
        return ScopedStoreSettings(
            config_root=self.config_root,
            project_subdir_name=self.paths.project_subdir_name,
            document_filename=self.paths.document_filename,
            key_filename=self.paths.key_filename,
        )


__all__ = [
    "AppInfo",
    "AppPaths",
    "Settings",
]
