"""
Reply delivery.

Turns an OutgoingReply into a Discord message in the target channel.
"""
from __future__ import annotations

import io
import logging
from typing import Any, Optional

import discord

from core.types import ImageEntry, OutgoingReply

logger = logging.getLogger("pittie.delivery")


def build_file(entry: ImageEntry) -> discord.File:
    """Build a discord.File from a buffered payload or a path on disk."""
    if entry.data is not None:
        return discord.File(io.BytesIO(entry.data), filename=entry.name)
    if entry.path is not None:
        return discord.File(entry.path, filename=entry.name)
    raise ValueError(f"Image {entry.name!r} has neither data nor path")


class DiscordReplySender:
    """ReplySender implementation backed by a discord.Client."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    async def _resolve_channel(self, channel_id: int) -> Any:
        channel: Optional[Any] = self._client.get_channel(channel_id)
        if channel is None:
            channel = await self._client.fetch_channel(channel_id)
        return channel

    async def send(self, reply: OutgoingReply) -> None:
        channel = await self._resolve_channel(reply.channel_id)
        if reply.attachment is not None:
            await channel.send(file=build_file(reply.attachment))
        else:
            await channel.send(content=reply.content)
        logger.debug(
            "Sent %s to channel %s",
            reply.attachment.name if reply.attachment else "text reply",
            reply.channel_id,
        )

    async def trigger_typing(self, channel_id: int) -> None:
        channel = await self._resolve_channel(channel_id)
        await channel.typing()
