"""
Discord bot client - converts gateway callbacks into the inbound event stream.

The client does no command handling of its own. Ready and message events
are queued in arrival order and consumed by the EventDispatcher, which runs
as a task for the lifetime of the connection.
"""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Optional

import discord

from core.config import BotConfig
from core.images import ImageStore
from core.types import InboundEvent, MessageEvent, ReadyEvent
from services.commands import CommandRouter
from services.dispatcher import EventDispatcher

from .delivery import DiscordReplySender

logger = logging.getLogger("pittie.bot")


class EventStream:
    """Ordered, unbounded queue of inbound events with an explicit end."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Optional[InboundEvent]] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, event: InboundEvent) -> None:
        if self._closed:
            return
        self._queue.put_nowait(event)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(None)

    async def __aiter__(self) -> AsyncIterator[InboundEvent]:
        while True:
            event = await self._queue.get()
            if event is None:
                return
            yield event


class PittieBot(discord.Client):
    """
    Main Discord client.

    Handles:
    - Gateway intents (guild messages + message content)
    - Feeding ready/message events into the dispatcher
    - Dispatcher lifetime
    """

    def __init__(self, config: BotConfig, store: ImageStore) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents)

        self.config = config
        self.store = store
        self.events = EventStream()
        self.router = CommandRouter(store, DiscordReplySender(self))
        self.dispatcher = EventDispatcher(config.prefix, self.router)
        self._dispatch_task: Optional[asyncio.Task] = None

    # ─── Lifecycle ────────────────────────────────────────────────────────────

    async def setup_hook(self) -> None:
        """Called once before connecting to the gateway."""
        self._dispatch_task = asyncio.create_task(self._run_dispatcher())

    async def _run_dispatcher(self) -> None:
        try:
            await self.dispatcher.run(self.events)
        except Exception as e:
            logger.error("Dispatcher stopped: %s", e)

    async def close(self) -> None:
        """End the event stream, then disconnect."""
        self.events.close()
        await super().close()

    # ─── Gateway Events ───────────────────────────────────────────────────────

    async def on_ready(self) -> None:
        if self.user is None:
            return
        self.events.push(ReadyEvent(user_id=self.user.id, user_tag=str(self.user)))

    async def on_message(self, message: discord.Message) -> None:
        self.events.push(to_message_event(message))


def to_message_event(message: discord.Message) -> MessageEvent:
    return MessageEvent(
        message_id=message.id,
        channel_id=message.channel.id,
        author_id=message.author.id,
        author_is_bot=message.author.bot,
        content=message.content or "",
    )
