"""Shared fixtures for bot tests."""

from pathlib import Path
from typing import List

import pytest

from core.types import MessageEvent, OutgoingReply

PREFIX = "%"
CHANNEL_ID = 100
BOT_USER_ID = 999
USER_ID = 1234


class FakeSender:
    """ReplySender that records instead of talking to Discord."""

    def __init__(self, fail_send: Exception = None, fail_typing: Exception = None):
        self.sent: List[OutgoingReply] = []
        self.typing: List[int] = []
        self._fail_send = fail_send
        self._fail_typing = fail_typing

    async def send(self, reply: OutgoingReply) -> None:
        if self._fail_send is not None:
            raise self._fail_send
        self.sent.append(reply)

    async def trigger_typing(self, channel_id: int) -> None:
        if self._fail_typing is not None:
            raise self._fail_typing
        self.typing.append(channel_id)


def make_message(content: str, *, author_id: int = USER_ID, channel_id: int = CHANNEL_ID,
                 message_id: int = 1, is_bot: bool = False) -> MessageEvent:
    return MessageEvent(
        message_id=message_id,
        channel_id=channel_id,
        author_id=author_id,
        author_is_bot=is_bot,
        content=content,
    )


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Directory holding two images and one non-image file."""
    images = tmp_path / "images"
    images.mkdir()
    (images / "a.png").write_bytes(b"\x89PNG-a")
    (images / "b.jpg").write_bytes(b"\xff\xd8-b")
    (images / "c.txt").write_text("not an image")
    return images
