from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Literal, TypeVar

import typer
import yaml
from result import Result, is_err

from ai_builder_config.common import resolve_project_root
from ai_builder_config.config import ConfigManager, ConfigManagerError
from ai_builder_config.settings import Settings
from ai_builder_config.store import ConfigScope

T = TypeVar("T")

ScopeOption = Annotated[
    ConfigScope,
    typer.Option("--scope", "-s", case_sensitive=False, help="Config scope (global or project)."),
]
ProjectDirOption = Annotated[
    Path | None,
    typer.Option(
        "--project-dir",
        help="Project root used by the project scope. Defaults to the current directory.",
    ),
]
FormatOption = Annotated[
    Literal["yaml", "json"],
    typer.Option("--format", "-f", show_default=True, case_sensitive=False, help="Output format (yaml or json)."),
]

app = typer.Typer(help="Manage configuration values.")


@app.callback(invoke_without_command=True)
def _config_root(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Config key.")],
    value: Annotated[str, typer.Argument(help="Config value.")],
    as_json: Annotated[bool, typer.Option("--json", help="Parse VALUE as JSON.")] = False,
    scope: ScopeOption = ConfigScope.GLOBAL,
    project_dir: ProjectDirOption = None,
) -> None:
    parsed: object = value
    if as_json:
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as exc:
            typer.secho(f"Invalid JSON value: {exc}", err=True, fg=typer.colors.RED)
            raise typer.Exit(code=1) from exc

    manager = _open_manager(scope, project_dir)
    _unwrap_or_exit(manager.set(key, parsed, scope))
    typer.secho(f"Config '{key}' set ({scope.value})", fg=typer.colors.GREEN)


@app.command("get")
def get_value(
    key: Annotated[str, typer.Argument(help="Config key.")],
    scope: ScopeOption = ConfigScope.GLOBAL,
    project_dir: ProjectDirOption = None,
) -> None:
    manager = _open_manager(scope, project_dir)
    value = _unwrap_or_exit(manager.get(key, scope))
    if value is None:
        typer.echo("Key not found")
        return

    typer.echo(json.dumps({key: value}, indent=2))


@app.command("list")
def list_entries(
    scope: ScopeOption = ConfigScope.GLOBAL,
    project_dir: ProjectDirOption = None,
) -> None:
    manager = _open_manager(scope, project_dir)
    entries = _unwrap_or_exit(manager.list(scope))
    typer.echo(json.dumps([entry.model_dump(mode="json", by_alias=True) for entry in entries], indent=2))


@app.command("delete")
def delete_value(
    key: Annotated[str, typer.Argument(help="Config key.")],
    scope: ScopeOption = ConfigScope.GLOBAL,
    project_dir: ProjectDirOption = None,
) -> None:
    manager = _open_manager(scope, project_dir)
    _unwrap_or_exit(manager.delete(key, scope))
    typer.secho(f"Config '{key}' deleted ({scope.value})", fg=typer.colors.GREEN)


@app.command("export")
def export_values(
    include_encrypted: Annotated[
        bool, typer.Option("--include-encrypted", help="Emit raw ciphertext envelopes instead of a placeholder.")
    ] = False,
    format: FormatOption = "yaml",
    scope: ScopeOption = ConfigScope.GLOBAL,
    project_dir: ProjectDirOption = None,
) -> None:
    manager = _open_manager(scope, project_dir)
    payload = _unwrap_or_exit(manager.export_config(scope, include_encrypted=include_encrypted))
    typer.echo(_format_payload(payload, format.lower()))


@app.command("import")
def import_values(
    file: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="YAML or JSON mapping.")],
    scope: ScopeOption = ConfigScope.GLOBAL,
    project_dir: ProjectDirOption = None,
) -> None:
    try:
        data = yaml.safe_load(file.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        typer.secho(f"Failed to parse {file}: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    if not isinstance(data, dict):
        typer.secho(f"{file} must contain a mapping of keys to values", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    manager = _open_manager(scope, project_dir)
    _unwrap_or_exit(manager.import_config({str(key): value for key, value in data.items()}, scope))
    typer.secho(f"Configuration imported ({scope.value})", fg=typer.colors.GREEN)


@app.command("reset")
def reset(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
    scope: ScopeOption = ConfigScope.GLOBAL,
    project_dir: ProjectDirOption = None,
) -> None:
    if not yes:
        typer.confirm(f"Delete all {scope.value} configuration?", abort=True)

    manager = _open_manager(scope, project_dir)
    _unwrap_or_exit(manager.reset_config(scope))
    typer.secho(f"Configuration reset ({scope.value})", fg=typer.colors.GREEN)


@app.command("validate")
def validate() -> None:
    manager = _open_manager(ConfigScope.GLOBAL, None)
    report = manager.validate_config()

    for error in report.errors:
        typer.secho(f"error: {error}", err=True, fg=typer.colors.RED)
    for warning in report.warnings:
        typer.secho(f"warning: {warning}", err=True, fg=typer.colors.YELLOW)

    if not report.valid:
        raise typer.Exit(code=1)
    typer.secho("Configuration is valid", fg=typer.colors.GREEN)


@app.command("init-defaults")
def init_defaults() -> None:
    manager = _open_manager(ConfigScope.GLOBAL, None)
    _unwrap_or_exit(manager.set_default_config())
    typer.secho("Default configuration initialized", fg=typer.colors.GREEN)


def _open_manager(scope: ConfigScope, project_dir: Path | None) -> ConfigManager:
    manager = _unwrap_or_exit(ConfigManager.open(Settings().to_store_settings()))
    if scope == ConfigScope.PROJECT:
        manager.set_project_path(resolve_project_root(project_dir))
    return manager


def _unwrap_or_exit(result: Result[T, ConfigManagerError]) -> T:
    if is_err(result):
        _handle_error(result.unwrap_err())
        raise typer.Exit(code=1)
    return result.unwrap()


def _format_payload(payload: dict[str, object], format: str) -> str:
    if format == "json":
        return json.dumps(payload, indent=2, sort_keys=True)
    return yaml.safe_dump(payload, sort_keys=True)


def _handle_error(error: ConfigManagerError) -> None:
    message = error.message
    scope = getattr(error, "scope", None)
    key = getattr(error, "key", None)
    path = getattr(error, "path", None)
    if scope is not None:
        message = f"[{scope.value}] {message}"
    if key is not None:
        message = f"{message} (key: {key})"
    if path is not None:
        message = f"{message} ({path})"

    typer.secho(message, err=True, fg=typer.colors.RED)
