"""Bot package - Discord client and reply delivery."""
from .client import EventStream, PittieBot
from .delivery import DiscordReplySender

__all__ = ["DiscordReplySender", "EventStream", "PittieBot"]
