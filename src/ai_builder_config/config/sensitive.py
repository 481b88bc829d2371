"""Heuristic classification of config keys that hold secrets."""

from __future__ import annotations

SENSITIVE_KEY_FRAGMENTS: tuple[str, ...] = (
    "password",
    "token",
    "secret",
    "key",
    "credential",
    "api_key",
    "api_secret",
    "private_key",
    "auth_token",
)


def should_encrypt(key: str, fragments: tuple[str, ...] = SENSITIVE_KEY_FRAGMENTS) -> bool:
    """Return True when the lower-cased key contains any sensitive fragment."""
    key_lower = key.lower()
    return any(fragment in key_lower for fragment in fragments)
