"""Settings seeded into the global scope by ``set_default_config``."""

from __future__ import annotations

from pydantic import JsonValue

DEFAULT_CONFIG: dict[str, JsonValue] = {
    "cli.default_region": "us-east-1",
    "cli.auto_confirm": False,
    "cli.verbose": False,
    "build.parallel": True,
    "build.timeout": 300_000,  # 5 minutes, in ms
    "deploy.health_check_enabled": True,
    "deploy.auto_rollback": False,
    "deploy.max_retries": 3,
    "logs.level": "info",
    "logs.format": "pretty",
    "templates.auto_update": True,
    "welcome.shown": False,
}
