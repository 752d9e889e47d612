"""
Type definitions and dataclasses for the bot.

Events coming off the gateway are converted into these platform-agnostic
values before the dispatcher sees them, so the dispatch and command layers
can be driven without a live Discord connection.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Union, runtime_checkable


@dataclass(frozen=True)
class ImageEntry:
    """
    One image in the pool.

    Buffered entries carry the full payload in ``data``; lazy entries only
    carry ``path`` and are read from disk when sent.
    """
    name: str
    data: bytes | None = None
    path: Path | None = None

    @property
    def is_buffered(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class ReadyEvent:
    """The client finished connecting and resolved its own identity."""
    user_id: int
    user_tag: str


@dataclass(frozen=True)
class MessageEvent:
    """A message was created in a channel the bot can read."""
    message_id: int
    channel_id: int
    author_id: int
    author_is_bot: bool
    content: str


InboundEvent = Union[ReadyEvent, MessageEvent]


@dataclass(frozen=True)
class ParsedCommand:
    """Command name and arguments taken from a prefixed message."""
    name: str
    args: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OutgoingReply:
    """A message to post in a channel: an attachment or plain text."""
    channel_id: int
    content: str | None = None
    attachment: ImageEntry | None = None

    @property
    def has_attachment(self) -> bool:
        return self.attachment is not None


@runtime_checkable
class ReplySender(Protocol):
    """Outbound side of the platform client."""

    async def send(self, reply: OutgoingReply) -> None: ...

    async def trigger_typing(self, channel_id: int) -> None: ...
