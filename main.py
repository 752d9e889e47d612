"""
Main entry point for the bot.

Loads configuration and the image pool, then starts the Discord client.
Nothing connects to Discord until both have loaded cleanly.
"""
from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path.cwd() / ".env"
load_dotenv(env_path)

# Import the client after .env is loaded so modules can read env vars at import time.
import discord
from discord.errors import LoginFailure, PrivilegedIntentsRequired

from bot import PittieBot
from core.config import ConfigError, bootstrap_config
from core.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_IMAGES_PATH,
    EXIT_FAILURE,
    EXIT_OK,
    Env,
    ImageMode,
)
from core.images import ImageStore, ImageStoreError
from core.paths import resolve_runtime_path

LOG_LEVEL = os.getenv(Env.LOG_LEVEL, "INFO")

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("pittie")
logging.getLogger("discord").setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))


async def main() -> int:
    config_path = resolve_runtime_path(os.getenv(Env.CONFIG_PATH) or DEFAULT_CONFIG_PATH)
    images_path = resolve_runtime_path(os.getenv(Env.IMAGES_PATH) or DEFAULT_IMAGES_PATH)
    image_mode = (os.getenv(Env.IMAGE_MODE) or ImageMode.BUFFERED).strip().lower()

    try:
        if image_mode not in ImageMode.ALL:
            raise ConfigError(
                f"{Env.IMAGE_MODE} must be one of {', '.join(ImageMode.ALL)}, got {image_mode!r}"
            )
        config = await bootstrap_config(config_path, token_override=os.getenv(Env.BOT_TOKEN))
    except ConfigError as e:
        logger.error("Error while initializing: %s", e)
        return EXIT_FAILURE

    if config is None:
        logger.info("Fill in the token in %s and start the bot again.", config_path)
        return EXIT_FAILURE

    try:
        store = await ImageStore.load(images_path, mode=image_mode)
    except ImageStoreError as e:
        logger.error("Error while initializing: %s", e)
        return EXIT_FAILURE

    if store.is_empty:
        logger.warning("No images found in: %s", images_path)

    bot = PittieBot(config, store)
    try:
        await bot.start(config.token)
    except PrivilegedIntentsRequired:
        logger.error(
            "Privileged intents required. Enable the MESSAGE CONTENT intent "
            "in the Discord developer portal."
        )
        return EXIT_FAILURE
    except LoginFailure as e:
        logger.error("Failed to log in: %s", e)
        logger.error(
            "Token is invalid. Reset it at https://discord.com/developers/applications "
            "and update %s or %s.",
            config_path,
            Env.BOT_TOKEN,
        )
        return EXIT_FAILURE
    except discord.DiscordException as e:
        logger.error("Client error: %s", e)
        return EXIT_FAILURE
    finally:
        if not bot.is_closed():
            await bot.close()
    return EXIT_OK


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
