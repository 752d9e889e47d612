"""
Core utilities and infrastructure for the bot.

This package contains:
- config: Configuration loading, validation and bootstrap
- constants: Config keys, command names and defaults
- images: The in-memory image pool
- io_utils: File I/O helpers
- paths: Path resolution
- rwlock: Reader-writer lock for asyncio
- types: Dataclasses and type definitions
- utils: General utilities
"""
from .constants import Command, ConfigKey, ImageMode, K
from .types import (
    ImageEntry,
    InboundEvent,
    MessageEvent,
    OutgoingReply,
    ParsedCommand,
    ReadyEvent,
    ReplySender,
)

__all__ = [
    # Constants
    "Command",
    "ConfigKey",
    "ImageMode",
    "K",
    # Types
    "ImageEntry",
    "InboundEvent",
    "MessageEvent",
    "OutgoingReply",
    "ParsedCommand",
    "ReadyEvent",
    "ReplySender",
]
