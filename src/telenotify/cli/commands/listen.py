"""listen command implementation."""

from __future__ import annotations

import asyncio
import contextlib
import signal
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from telenotify.core.notifier.notifier import UpdateNotifier
from telenotify.core.transport.client import BotApiClient

if TYPE_CHECKING:
    from telenotify.core.errors import NotifierError
    from telenotify.core.events.types import UpdateKind
    from telenotify.core.events.update import Update
    from telenotify.core.models.config import Settings

console = Console()


async def run_listen(settings: Settings, kinds: list[UpdateKind] | None = None) -> None:
    """Run a notifier until SIGINT/SIGTERM, printing updates and errors."""
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows event loops
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop_event.set)

    async with BotApiClient.from_config(settings.api) as client:
        notifier = UpdateNotifier.from_config(client, settings.polling)
        _, updates = await notifier.subscribe(kinds)

        console.print(
            "[bold]Listening for updates[/bold] "
            f"({', '.join(k.value for k in kinds) if kinds else 'all kinds'}), Ctrl+C to stop"
        )
        printers = [
            asyncio.create_task(_print_updates(updates)),
            asyncio.create_task(_print_errors(notifier.errors)),
        ]
        try:
            await notifier.run(stop_event)
        finally:
            for printer in printers:
                printer.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await printer

    console.print(f"[dim]Stopped at update {notifier.cursor}[/dim]")


async def _print_updates(updates: asyncio.Queue[Update]) -> None:
    while True:
        update = await updates.get()
        message = update.message
        if message is None:
            console.print(
                f"[yellow]#{update.sequence_id} {update.kind.value}[/yellow] "
                f"{escape(str(update.payload))}"
            )
            continue

        chat = (message.chat.title or message.chat.username) if message.chat else ""
        sender = message.from_user.username if message.from_user else ""
        console.print(
            f"[cyan]#{update.sequence_id} {update.kind.value}[/cyan] "
            f"[bold]{escape(sender or chat or '?')}[/bold]: {escape(message.text)}"
        )


async def _print_errors(errors: asyncio.Queue[NotifierError]) -> None:
    while True:
        error = await errors.get()
        console.print(f"[red]Error getting updates: {escape(str(error))}[/red]")
