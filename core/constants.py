"""
Shared constants.

Using constants instead of string literals provides:
- Typo protection (caught at import time)
- Single source of truth for names the operator sees
"""
from __future__ import annotations


class ConfigKey:
    """All keys of the JSON config file."""

    TOKEN = "token"
    PREFIX = "prefix"
    ADMINS = "admins"


class Command:
    """Command names recognized after the prefix."""

    PITTIE = "pittie"
    ADD_PITTIE = "addpittie"


class ImageMode:
    """How image payloads are held by the store."""

    BUFFERED = "buffered"
    LAZY = "lazy"

    ALL = (BUFFERED, LAZY)


class Env:
    """Environment variables read at startup."""

    BOT_TOKEN = "DISCORD_BOT_TOKEN"
    CONFIG_PATH = "PITTIE_CONFIG_PATH"
    IMAGES_PATH = "PITTIE_IMAGES_PATH"
    IMAGE_MODE = "PITTIE_IMAGE_MODE"
    LOG_LEVEL = "LOG_LEVEL"


DEFAULT_CONFIG_PATH = "./pittie_config.json"
DEFAULT_IMAGES_PATH = "./images"

PLACEHOLDER_TOKEN = "Insert your token here"
DEFAULT_PREFIX = "%"

# Case-sensitive suffix match
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")

NO_IMAGES_TEXT = "No images provided ):"

EXIT_OK = 0
EXIT_FAILURE = 1


# Shorthand alias for cleaner imports
K = ConfigKey
