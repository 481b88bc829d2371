"""Common models and types used across ai-builder-config modules."""

from .documents import load_json_document
from .fields import JsonDict, JsonValue, NonEmptyString
from .logging import LoggingConfig, create_logger, disable_library_logging, enable_library_logging, setup_cli_logging
from .models import AppInfo, AppPaths
from .paths import resolve_config_root, resolve_project_root

__all__ = [
    "AppInfo",
    "AppPaths",
    "JsonDict",
    "JsonValue",
    "LoggingConfig",
    "NonEmptyString",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "load_json_document",
    "resolve_config_root",
    "resolve_project_root",
    "setup_cli_logging",
]
