from __future__ import annotations

import os
from typing import Annotated

import typer
from pydantic import ValidationError

from ai_builder_config.common import LoggingConfig, create_logger, setup_cli_logging
from ai_builder_config.datastore import FileBlobStore
from ai_builder_config.settings import Settings
from ai_builder_config.store import ConfigDocument, ConfigScope, FileScopedStore

from .commands import config as config_commands

logger = create_logger("cli")

app = typer.Typer(help="ai-builder configuration command-line interface.")
app.add_typer(config_commands.app, name="config")

_LEVEL_ALIASES = {"warn": "WARNING"}
_FORMAT_ALIASES = {"pretty": "text"}
_PASSTHROUGH_KEYS = {
    "logs.enabled": "enabled",
    "logs.file": "log_file",
    "logs.rotation": "rotation",
    "logs.retention": "retention",
}


@app.callback(invoke_without_command=True)
def _root_callback(
    ctx: typer.Context,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colored output")] = False,
) -> None:
    # Respect NO_COLOR environment variable and --no-color flag
    if no_color or os.getenv("NO_COLOR"):
        ctx.color = False

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def logging_config_from_document(document: ConfigDocument) -> LoggingConfig:
    """Build the CLI logging config from the ``logs.*`` keys of the global document."""
    data: dict[str, object] = {}

    level = document.get("logs.level")
    if level is not None and isinstance(level.value, str):
        data["log_level"] = _LEVEL_ALIASES.get(level.value.lower(), level.value.upper())

    log_format = document.get("logs.format")
    if log_format is not None and isinstance(log_format.value, str):
        data["format"] = _FORMAT_ALIASES.get(log_format.value.lower(), log_format.value.lower())

    for key, field in _PASSTHROUGH_KEYS.items():
        entry = document.get(key)
        if entry is not None and entry.value is not None:
            data[field] = entry.value

    try:
        return LoggingConfig.model_validate(data)
    except ValidationError:
        return LoggingConfig()


def _setup_logging(settings: Settings) -> None:
    store = FileScopedStore(settings.to_store_settings(), FileBlobStore())
    document = store.read(ConfigScope.GLOBAL).unwrap_or({})
    logging_config = logging_config_from_document(document)

    if logging_config.enabled:
        setup_cli_logging(
            app_info=settings.app,
            config=logging_config,
            logs_dir=settings.logs_dir,
        )
        logger.debug("CLI logging initialized", config=logging_config.model_dump())


def main() -> None:
    """Entrypoint for the ai-builder-config CLI."""
    _setup_logging(Settings())
    app()
