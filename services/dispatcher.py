"""
Inbound event dispatch.

Consumes the event stream in arrival order, drops everything that is not a
prefixed command from someone other than the bot, and hands each command to
its own task. Handler-tasks run concurrently with the loop and with each
other; whatever they raise is logged here and goes no further.
"""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterable, Optional, Set

from core.types import InboundEvent, MessageEvent, ParsedCommand, ReadyEvent
from core.utils import parse_command

from .commands import CommandRouter

logger = logging.getLogger("pittie.dispatch")


class EventDispatcher:
    def __init__(self, prefix: str, router: CommandRouter) -> None:
        self.prefix = prefix
        self.router = router
        self.user_id: Optional[int] = None
        self.user_tag: Optional[str] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def run(self, events: AsyncIterable[InboundEvent]) -> None:
        """Dispatch events until the stream is exhausted."""
        async for event in events:
            self.handle(event)
        logger.info("Inbound event stream closed")

    def handle(self, event: InboundEvent) -> Optional[asyncio.Task]:
        """
        Process one event. Returns the spawned handler-task, if any.

        Never awaits the handler, so the next event can be picked up before
        this one's reply has gone out.
        """
        if isinstance(event, ReadyEvent):
            self.user_id = event.user_id
            self.user_tag = event.user_tag
            logger.info("Logged in as %s", event.user_tag)
            return None
        if not isinstance(event, MessageEvent):
            return None
        if self.user_id is not None and event.author_id == self.user_id:
            return None

        command = parse_command(event.content, self.prefix)
        if command is None:
            return None

        task = asyncio.create_task(self._run_guarded(command, event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_guarded(self, command: ParsedCommand, event: MessageEvent) -> None:
        try:
            await self.router.route(command, event)
        except Exception as e:
            logger.error(
                "Command %s from message %s in channel %s failed: %s",
                command.name,
                event.message_id,
                event.channel_id,
                e,
            )

    async def wait_for_pending(self) -> None:
        """Wait until every handler-task spawned so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
