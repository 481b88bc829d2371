"""Public configuration API for ai-builder-config."""

from __future__ import annotations

from .defaults import DEFAULT_CONFIG
from .manager import ConfigManager
from .models import ENCRYPTED_PLACEHOLDER, ConfigManagerError, ConfigValueError, ValidationReport
from .sensitive import SENSITIVE_KEY_FRAGMENTS, should_encrypt

__all__ = [
    "DEFAULT_CONFIG",
    "ENCRYPTED_PLACEHOLDER",
    "SENSITIVE_KEY_FRAGMENTS",
    "ConfigManager",
    "ConfigManagerError",
    "ConfigValueError",
    "ValidationReport",
    "should_encrypt",
]
