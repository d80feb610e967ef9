"""Settings loading shared by CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from pydantic import SecretStr
from rich.console import Console

from telenotify.core.log import configure_logging
from telenotify.core.models.config import Settings

if TYPE_CHECKING:
    from pathlib import Path

console = Console(stderr=True)


def load_settings(
    config_file: Path | None,
    *,
    token: str | None = None,
    interval: float | None = None,
) -> Settings:
    """Load settings, apply command-line overrides and configure logging."""
    settings = Settings.from_yaml(config_file) if config_file else Settings()

    if token:
        settings.api.token = SecretStr(token)
    if interval is not None:
        settings.polling.interval = interval

    if not settings.api.token.get_secret_value():
        console.print("[red]No bot token given (use --token or TELENOTIFY_API__TOKEN)[/red]")
        raise typer.Exit(2)

    configure_logging(settings.logging.level, settings.logging.json_output)
    return settings
