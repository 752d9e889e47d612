from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any, List


async def read_json(path: Path, default: Any = None) -> Any:
    def _read() -> Any:
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            return default

    return await asyncio.to_thread(_read)


async def write_json_atomic(path: Path, data: Any) -> None:
    def _write() -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=True, indent=2)
        os.replace(tmp_path, path)

    await asyncio.to_thread(_write)


async def read_bytes(path: Path) -> bytes:
    return await asyncio.to_thread(path.read_bytes)


async def list_files(directory: Path) -> List[Path]:
    """
    List regular files directly inside ``directory``, sorted by name.

    Raises FileNotFoundError if the directory does not exist.
    """
    def _list() -> List[Path]:
        with os.scandir(directory) as entries:
            files = [Path(entry.path) for entry in entries if entry.is_file()]
        files.sort(key=lambda p: p.name)
        return files

    return await asyncio.to_thread(_list)


async def ensure_dir(directory: Path) -> None:
    await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
