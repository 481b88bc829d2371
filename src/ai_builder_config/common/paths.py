"""Path resolution utilities."""

from __future__ import annotations

from pathlib import Path


def resolve_config_root(config_root: str | Path) -> Path:
    """Expand ``~`` and make the config root absolute without requiring it to exist."""
    base = Path(config_root).expanduser()
    try:
        return base.resolve(strict=False)
    except OSError:
        return base


def resolve_project_root(project_root: Path | None) -> Path:
    base = project_root or Path.cwd()
    if base.is_file():
        base = base.parent
    try:
        return base.resolve(strict=False)
    except OSError:
        return base
