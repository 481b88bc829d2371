"""Scoped, whole-document persistence of config entries."""

from .file import FileScopedStore
from .models import (
    ConfigDocument,
    ConfigEntry,
    ConfigScope,
    PersistenceError,
    ScopeNotConfiguredError,
)
from .protocol import ScopedStore
from .settings import ScopedStoreSettings

__all__ = [
    "ConfigDocument",
    "ConfigEntry",
    "ConfigScope",
    "FileScopedStore",
    "PersistenceError",
    "ScopeNotConfiguredError",
    "ScopedStore",
    "ScopedStoreSettings",
]
