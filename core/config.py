"""
Bot configuration loading and validation.

Handles loading, validating and bootstrapping the JSON config file. On first
run a default file is written and startup stops so the operator can fill in
the bot token.
"""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from .constants import DEFAULT_PREFIX, PLACEHOLDER_TOKEN, K
from .io_utils import read_json, write_json_atomic
from .utils import is_valid_id, safe_int

logger = logging.getLogger("pittie.config")

DEFAULT_CONFIG: Dict[str, Any] = {
    K.TOKEN: PLACEHOLDER_TOKEN,
    K.PREFIX: DEFAULT_PREFIX,
    K.ADMINS: [],
}

CONFIG_SCHEMA: Dict[str, Tuple[str, bool]] = {
    K.TOKEN: ("str", True),
    K.PREFIX: ("nonempty_str", True),
    K.ADMINS: ("list_id", False),
}


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class BotConfig:
    token: str
    prefix: str
    admins: FrozenSet[int] = field(default_factory=frozenset)

    def is_admin(self, user_id: int) -> bool:
        # Reserved for a future permission check; no command consults it yet.
        return user_id in self.admins


def validate_and_normalize_config(data: Dict[str, Any]) -> Dict[str, Any]:
    errors: List[str] = []
    normalized: Dict[str, Any] = {}

    for key, (type_name, required) in CONFIG_SCHEMA.items():
        if key not in data:
            if required:
                errors.append(f"Missing required config key: {key}")
            else:
                normalized[key] = DEFAULT_CONFIG.get(key)
            continue
        value = data[key]
        if type_name == "str":
            if not isinstance(value, str):
                errors.append(f"{key} must be a string")
            else:
                normalized[key] = value
        elif type_name == "nonempty_str":
            if not isinstance(value, str) or not value:
                errors.append(f"{key} must be a non-empty string")
            else:
                normalized[key] = value
        elif type_name == "list_id":
            if not isinstance(value, list):
                errors.append(f"{key} must be a list of user IDs")
                continue
            items: List[int] = []
            for item in value:
                item_id = safe_int(item)
                if item_id is None or not is_valid_id(item_id):
                    errors.append(f"{key} must be a list of user IDs")
                    items = []
                    break
                items.append(item_id)
            normalized[key] = items
        else:
            errors.append(f"Unknown config type for {key}")

    if errors:
        raise ConfigError("; ".join(errors))

    return normalized


def build_config(data: Dict[str, Any], token_override: Optional[str] = None) -> BotConfig:
    normalized = validate_and_normalize_config(data)
    token = token_override or normalized[K.TOKEN]
    if not token.strip() or token == PLACEHOLDER_TOKEN:
        raise ConfigError(f"{K.TOKEN} is not set; edit the config file or set the token in the environment")
    return BotConfig(
        token=token,
        prefix=normalized[K.PREFIX],
        admins=frozenset(normalized[K.ADMINS]),
    )


async def load_config(path: Path, token_override: Optional[str] = None) -> BotConfig:
    try:
        data = await read_json(path, default=None)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Parsing config failed: {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config {path}: {exc}") from exc
    if data is None:
        raise ConfigError(f"Missing config: {path}")
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")
    return build_config(data, token_override=token_override)


async def write_default_config(path: Path) -> None:
    try:
        await write_json_atomic(path, dict(DEFAULT_CONFIG))
    except OSError as exc:
        raise ConfigError(f"Failed to write default configuration to {path}: {exc}") from exc


async def bootstrap_config(path: Path, token_override: Optional[str] = None) -> Optional[BotConfig]:
    """
    Load the config, or seed a default file if none exists.

    Returns None when the default was just written; the caller must not
    connect in that case.
    """
    exists = await asyncio.to_thread(path.exists)
    if not exists:
        await write_default_config(path)
        logger.info("Created default config at %s", path)
        return None
    return await load_config(path, token_override=token_override)
