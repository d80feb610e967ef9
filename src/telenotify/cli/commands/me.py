"""getMe command implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from telenotify.core.errors import NotifierError
from telenotify.core.transport.client import BotApiClient

if TYPE_CHECKING:
    from telenotify.core.models.config import Settings

console = Console()


async def run_me(settings: Settings) -> int:
    """Print the bot identity. Returns the process exit code."""
    async with BotApiClient.from_config(settings.api) as client:
        try:
            user = await client.get_me()
        except NotifierError as e:
            console.print(f"[red]{e}[/red]")
            return 1

    table = Table(title="Bot")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("id", str(user.id))
    table.add_row("username", user.username)
    table.add_row("name", f"{user.first_name} {user.last_name}".strip())
    table.add_row("can join groups", str(user.can_join_groups))
    table.add_row("reads all group messages", str(user.can_read_all_group_messages))
    table.add_row("inline queries", str(user.supports_inline_queries))
    console.print(table)
    return 0
