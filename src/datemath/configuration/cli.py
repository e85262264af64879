"""CLI commands for managing datemath settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from datemath.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
)
from datemath.errors import InvalidConfigError, format_error_for_cli


config_app = typer.Typer(help="Manage datemath configuration")


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    zone: Optional[str] = typer.Option(None, help="Default zone, e.g. Europe/Helsinki"),
    locale: Optional[str] = typer.Option(None, help="Locale for month names"),
    pinned_now: Optional[str] = typer.Option(None, help="Freeze 'now' at this expression"),
) -> None:
    """Initialize the datemath settings file."""

    overrides = {}
    if zone:
        overrides["default_zone"] = zone
    if locale:
        overrides["locale"] = locale
    if pinned_now:
        overrides["pinned_now"] = pinned_now

    try:
        settings = bootstrap_settings(path=config_path, overrides=overrides)
    except InvalidConfigError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Configuration initialized at {config_path}")
    typer.echo(_summarize_settings(settings))


@config_app.command("show")
def show_config(config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config")) -> None:
    """Display effective configuration."""

    try:
        settings = bootstrap_settings(path=config_path, persist=False)
    except InvalidConfigError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(_summarize_settings(settings))


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key, e.g. datemath.default_zone"),
    value: str = typer.Argument(..., help="New value"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Update a configuration value."""

    try:
        settings = load_settings(config_path) if config_path.exists() else Settings()
    except InvalidConfigError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    payload = settings.model_dump(mode="python")
    _assign(payload, key.split("."), value)
    try:
        updated = Settings.model_validate(payload)
    except ValueError as exc:
        typer.echo(f"❌ Invalid value for {key}: {exc}", err=True)
        raise typer.Exit(code=1)
    save_settings(updated, config_path)
    typer.echo(f"Updated {key}")


def _summarize_settings(settings: Settings) -> str:
    data = settings.model_dump(mode="json")
    return json.dumps(data, indent=2)


def _assign(payload: dict, keys: list[str], value: str) -> None:
    current = payload
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value
