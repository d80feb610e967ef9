"""
Echo Bot Example

Subscribes to private messages and echoes them back until Ctrl+C.
Set TELENOTIFY_API__TOKEN before running.
"""
import asyncio
import contextlib
import signal

from telenotify import BotApiClient, UpdateKind, UpdateNotifier
from telenotify.core.models.config import Settings


async def echo(client, updates):
    while True:
        update = await updates.get()
        message = update.message
        if message is None or message.chat is None or not message.text:
            continue
        await client.send_message(message.chat.id, message.text)


async def report_errors(notifier):
    while True:
        error = await notifier.errors.get()
        print(f"Got an error: {error}")


async def main():
    settings = Settings()
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, stop.set)

    async with BotApiClient.from_config(settings.api) as client:
        me = await client.get_me()
        print(f"Successful login for bot {me.username} [{me.first_name} {me.last_name}]")

        notifier = UpdateNotifier.from_config(client, settings.polling)
        _, messages = await notifier.subscribe({UpdateKind.MESSAGE})

        workers = [
            asyncio.create_task(echo(client, messages)),
            asyncio.create_task(report_errors(notifier)),
        ]
        try:
            # Blocks until Ctrl+C
            await notifier.run(stop)
        finally:
            for worker in workers:
                worker.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await worker


if __name__ == "__main__":
    asyncio.run(main())
