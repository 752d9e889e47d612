"""
Path resolution utilities.

Runtime files (config, image pool) live relative to the working directory
the bot is started from, not relative to the installed package.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


def resolve_runtime_path(path: Union[str, Path], base: Optional[Path] = None) -> Path:
    candidate = Path(path)
    if candidate.is_absolute() or candidate.drive:
        return candidate
    return (base or Path.cwd()) / candidate
