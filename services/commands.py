"""
Command routing and handlers.

Maps a parsed command name to its handler. Handlers never raise for
outbound failures: a reply that cannot be delivered is logged and dropped.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Set

from core.constants import NO_IMAGES_TEXT, Command
from core.images import ImageStore
from core.types import MessageEvent, OutgoingReply, ParsedCommand, ReplySender
from core.utils import sanitize_text

logger = logging.getLogger("pittie.commands")

Handler = Callable[[ParsedCommand, MessageEvent], Awaitable[None]]


class CommandRouter:
    def __init__(self, store: ImageStore, sender: ReplySender) -> None:
        self.store = store
        self.sender = sender
        self.handlers: Dict[str, Handler] = {
            Command.PITTIE: self.send_random_image,
            Command.ADD_PITTIE: self.add_image,
        }
        self.typing_tasks: Set[asyncio.Task] = set()

    async def route(self, command: ParsedCommand, event: MessageEvent) -> bool:
        """
        Run the handler for ``command``.

        Returns False for unknown (including empty) command names; nothing
        is sent to the channel in that case.
        """
        handler = self.handlers.get(command.name)
        if handler is None:
            logger.warning("Unknown command: %s", sanitize_text(command.name))
            return False
        await handler(command, event)
        return True

    async def send_random_image(self, command: ParsedCommand, event: MessageEvent) -> None:
        self.start_typing(event.channel_id)

        entry = await self.store.pick_random()
        if entry is None:
            reply = OutgoingReply(channel_id=event.channel_id, content=NO_IMAGES_TEXT)
        else:
            reply = OutgoingReply(channel_id=event.channel_id, attachment=entry)

        try:
            await self.sender.send(reply)
        except Exception as e:
            logger.error(
                "Failed to run command %s in channel %s: %s",
                command.name,
                event.channel_id,
                e,
            )

    async def add_image(self, command: ParsedCommand, event: MessageEvent) -> None:
        # TODO: accept message attachments and pass them to ImageStore.add().
        logger.debug("Ignoring %s in channel %s", command.name, event.channel_id)

    def start_typing(self, channel_id: int) -> asyncio.Task:
        """Show the typing indicator in the background; the reply never waits on it."""
        task = asyncio.create_task(self._trigger_typing(channel_id))
        self.typing_tasks.add(task)
        task.add_done_callback(self.typing_tasks.discard)
        return task

    async def _trigger_typing(self, channel_id: int) -> None:
        try:
            await self.sender.trigger_typing(channel_id)
        except Exception as e:
            logger.debug("Typing indicator failed in channel %s: %s", channel_id, e)
