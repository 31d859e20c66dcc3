"""Conversion queue settings CLI.

This module provides the command-line interface for inspecting and
changing the persisted operational settings, and for running the
startup sequence by hand.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Final, NoReturn

import typer

from convsync.app import ConverterApp, StartupReport, configure_logging
from convsync.config import AppConfig
from convsync.errors import (
    EngineError,
    InvalidSettingValueError,
    SettingNotSavedError,
)

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Conversion queue settings CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "convsync.cli"

CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
VALUE_ARGUMENT = typer.Argument(..., help="Maximum number of concurrent conversions")
ENABLE_OPTION = typer.Option(..., "--enable/--disable", help="Check for updates on startup")


def _load_config(config: Path | None, debug: bool) -> AppConfig:
    try:
        cfg = AppConfig.load(config)
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    configure_logging(debug or cfg.debug)
    return cfg


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def show(config: Path | None = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Print the settings the application would start with."""
    cfg = _load_config(config, debug)

    async def _show() -> tuple[int, bool]:
        # No update check here: showing settings stays offline
        settings = ConverterApp(cfg).settings
        return (
            await settings.load_initial_max_concurrency(),
            await settings.load_auto_update_check(),
        )

    limit, auto_update = asyncio.run(_show())
    typer.echo(f"max concurrency:   {limit}")
    typer.echo(f"auto update check: {'on' if auto_update else 'off'}")


# Let "-3" through as a value so validation, not the parser, rejects it
@app.command("set-concurrency", context_settings={"ignore_unknown_options": True})
def set_concurrency(
    value: int = VALUE_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Change the maximum number of concurrent conversions."""
    cfg = _load_config(config, debug)

    async def _persist() -> None:
        converter = ConverterApp(cfg)
        await converter.settings.load_initial_max_concurrency()
        await converter.settings.persist_max_concurrency(value)

    try:
        asyncio.run(_persist())
    except InvalidSettingValueError as exc:
        _fail(str(exc))
    except EngineError as exc:
        _fail(f"Engine rejected the new limit: {exc}")
    except SettingNotSavedError as exc:
        _fail(f"Setting not saved, it will reset on restart: {exc.original_error}")

    typer.secho(f"Max concurrency set to {value}", fg=typer.colors.GREEN)


@app.command("set-auto-update")
def set_auto_update(
    enabled: bool = ENABLE_OPTION,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Turn the automatic update check on or off."""
    cfg = _load_config(config, debug)

    async def _persist() -> None:
        await ConverterApp(cfg).settings.persist_auto_update_check(enabled)

    try:
        asyncio.run(_persist())
    except SettingNotSavedError as exc:
        _fail(f"Setting not saved: {exc.original_error}")

    typer.secho(f"Auto update check {'enabled' if enabled else 'disabled'}", fg=typer.colors.GREEN)


@app.command("check-updates")
def check_updates(config: Path | None = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Ask the update endpoint for a newer release."""
    cfg = _load_config(config, debug)

    async def _check() -> StartupReport:
        return await ConverterApp(cfg).start()

    if not cfg.update_url:
        _fail("No update_url configured")

    report = asyncio.run(_check())
    if not report.auto_update_check:
        typer.echo("Automatic update check is disabled")
    elif report.update is None:
        typer.echo(f"Up to date ({cfg.current_version})")
    else:
        typer.secho(f"Update available: {report.update.version}", fg=typer.colors.YELLOW)
        if report.update.url:
            typer.echo(report.update.url)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        AppConfig.load(file)
        typer.echo("✅ Config valid")
    except RuntimeError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
