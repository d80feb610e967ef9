"""Main CLI application."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from telenotify import __version__
from telenotify.core.events.types import UpdateKind

# Create main app
app = typer.Typer(
    name="telenotify",
    help="Long-polling notifier for the Telegram Bot API",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

TokenOption = Annotated[
    str | None,
    typer.Option(
        "--token",
        "-t",
        help="Bot token (defaults to TELENOTIFY_API__TOKEN)",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Config file path"),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]telenotify[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """telenotify - Telegram update notifier."""
    pass


@app.command()
def me(
    token: TokenOption = None,
    config: ConfigOption = None,
) -> None:
    """Show the identity of the bot owning the token."""
    from telenotify.cli.commands.me import run_me
    from telenotify.cli.commands.settings import load_settings

    settings = load_settings(config, token=token)
    raise typer.Exit(asyncio.run(run_me(settings)))


@app.command()
def listen(
    kind: Annotated[
        list[UpdateKind] | None,
        typer.Option("--kind", "-k", help="Update kind to print (repeatable, default all)"),
    ] = None,
    interval: Annotated[
        float | None,
        typer.Option("--interval", "-i", help="Seconds between polls"),
    ] = None,
    token: TokenOption = None,
    config: ConfigOption = None,
) -> None:
    """Poll for updates and print them until interrupted."""
    from telenotify.cli.commands.listen import run_listen
    from telenotify.cli.commands.settings import load_settings

    settings = load_settings(config, token=token, interval=interval)
    asyncio.run(run_listen(settings, kinds=kind or None))


def main() -> None:
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()
