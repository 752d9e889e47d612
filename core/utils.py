"""
General utility functions.

Provides file-name checks, command parsing and text sanitization.
"""
from __future__ import annotations

import re
from typing import Any, Optional

from .constants import IMAGE_EXTENSIONS
from .types import ParsedCommand

CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def is_image_name(name: str) -> bool:
    return name.endswith(IMAGE_EXTENSIONS)


def has_prefix(content: str, prefix: str) -> bool:
    return bool(prefix) and content.startswith(prefix)


def parse_command(content: str, prefix: str) -> Optional[ParsedCommand]:
    """
    Parse ``content`` into a command if its first token carries the prefix.

    Tokens are separated by single spaces, so ``"% pittie"`` yields an empty
    command name rather than ``pittie``. Returns None when the message is
    not a command at all.
    """
    tokens = content.split(" ")
    if not has_prefix(tokens[0], prefix):
        return None
    name = tokens[0][len(prefix):]
    return ParsedCommand(name=name, args=tuple(tokens[1:]))


def sanitize_text(text: Any, max_len: int = 100) -> str:
    if text is None:
        return ""
    text = str(text)
    text = CONTROL_RE.sub("", text)
    if len(text) > max_len:
        text = text[: max_len - 3] + "..."
    return text


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_id(value: Any) -> bool:
    return is_int(value) and 1 <= value <= 2**63 - 1


def safe_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
    return default
