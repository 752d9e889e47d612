"""Services layer - command handling separated from the Discord API."""
from .commands import CommandRouter
from .dispatcher import EventDispatcher

__all__ = [
    "CommandRouter",
    "EventDispatcher",
]
