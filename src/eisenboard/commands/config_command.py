"""Configuration management commands."""

from typing import Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from eisenboard.config import get_config_manager
from eisenboard.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from eisenboard.utils.typer_helpers import SuggestingGroup
from eisenboard.utils.ui.console import get_console
from eisenboard.utils.ui.formatters import format_error, format_output, format_success

from .decorators import AppError, command_wrapper, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")


def _parse_value(value: str) -> str | int | float | bool | None:
    """Best-effort conversion of a command-line string to a config value."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("none", "null"):
        return None
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


@app.command("show")
@command_wrapper
def show_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
) -> None:
    """Show the current configuration."""
    output = resolve_output(output, json_opt)
    config_manager = get_config_manager(profile)
    format_output(config_manager.config.model_dump(mode="json"), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., board.unknown_bucket)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    config_manager = get_config_manager(profile)
    value = config_manager.get(key)
    if value is None and key != "storage.db_path":
        raise AppError(f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND)
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json")
    get_console().print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., board.unknown_bucket)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    config_manager = get_config_manager(profile)
    parsed_value = _parse_value(value)
    try:
        config_manager.set(key, parsed_value)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND) from e
    except PydanticValidationError as e:
        first = e.errors()[0]
        raise AppError(
            f"Invalid value for '{key}': {first['msg']}", exit_code=ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_error("Cancelled")
            raise typer.Exit(0)

    config_manager = get_config_manager(profile)
    try:
        config_manager.reset(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")


@app.command("path")
@command_wrapper
def show_paths(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show where the config file and board database live."""
    config_manager = get_config_manager(profile)
    console = get_console()
    console.print(f"[cyan]Config:[/cyan]   {config_manager.config_file}", soft_wrap=True)
    console.print(f"[cyan]Database:[/cyan] {config_manager.db_path()}", soft_wrap=True)
