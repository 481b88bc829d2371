"""Common models used across ai-builder-config."""

from typing import Literal

from pydantic import BaseModel

from ai_builder_config.constants import APP_NAME


class AppInfo(BaseModel):
    project_name: str = APP_NAME
    version: str = "0.1.0"
    environment: Literal["test", "dev", "prod"] = "dev"


class AppPaths(BaseModel):
    config_root: str = f"~/.{APP_NAME}"
    project_subdir_name: str = f".{APP_NAME}"
    document_filename: str = "config.json"
    key_filename: str = ".key"
    logs_dir_name: str = "logs"
