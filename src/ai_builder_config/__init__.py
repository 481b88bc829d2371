"""ai-builder-config - scoped, file-backed settings with encrypted secrets.

By default, internal logging is disabled when used as a library.
Library users can enable logging by calling ai_builder_config.enable_logging().
"""

from ai_builder_config.common import disable_library_logging, enable_library_logging

from .config import ENCRYPTED_PLACEHOLDER, ConfigManager, ValidationReport, should_encrypt
from .crypto import DecryptError, KeyMaterialError
from .store import ConfigEntry, ConfigScope, PersistenceError, ScopedStoreSettings, ScopeNotConfiguredError

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "ENCRYPTED_PLACEHOLDER",
    "ConfigEntry",
    "ConfigManager",
    "ConfigScope",
    "DecryptError",
    "KeyMaterialError",
    "PersistenceError",
    "ScopeNotConfiguredError",
    "ScopedStoreSettings",
    "ValidationReport",
    "enable_logging",
    "should_encrypt",
]
