"""
In-memory image pool.

The pool is filled once at startup from a flat directory and then served to
concurrent handler-tasks. Reads go through a reader-writer lock so a runtime
writer (image upload) can be added without changing the readers.
"""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional

from .constants import ImageMode
from .io_utils import ensure_dir, list_files, read_bytes
from .rwlock import ReadWriteLock
from .types import ImageEntry
from .utils import is_image_name

logger = logging.getLogger("pittie.images")


class ImageStoreError(RuntimeError):
    pass


class ImageStore:
    def __init__(
        self,
        entries: Iterable[ImageEntry] = (),
        rng: Optional[random.Random] = None,
    ) -> None:
        self._entries: List[ImageEntry] = list(entries)
        self._lock = ReadWriteLock()
        # Seeded from OS entropy once per process; not for anything secret.
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    @classmethod
    async def load(
        cls,
        directory: Path,
        mode: str = ImageMode.BUFFERED,
        rng: Optional[random.Random] = None,
    ) -> "ImageStore":
        """
        Scan ``directory`` (non-recursively) for recognized image files.

        A missing directory is created and yields an empty store. Any other
        filesystem error is raised as ImageStoreError.
        """
        if mode not in ImageMode.ALL:
            raise ImageStoreError(f"Unknown image mode: {mode!r}")

        try:
            files = await list_files(directory)
        except FileNotFoundError:
            try:
                await ensure_dir(directory)
            except OSError as exc:
                raise ImageStoreError(f"Could not create image directory {directory}: {exc}") from exc
            logger.info("Created image directory %s", directory)
            return cls(rng=rng)
        except OSError as exc:
            raise ImageStoreError(f"Could not read image directory {directory}: {exc}") from exc

        entries: List[ImageEntry] = []
        for path in files:
            if not is_image_name(path.name):
                continue
            if mode == ImageMode.LAZY:
                entries.append(ImageEntry(name=path.name, path=path))
                continue
            try:
                data = await read_bytes(path)
            except OSError as exc:
                raise ImageStoreError(f"Could not read image {path}: {exc}") from exc
            entries.append(ImageEntry(name=path.name, data=data, path=path))

        logger.info("Loaded %d image(s) from %s (%s)", len(entries), directory, mode)
        return cls(entries, rng=rng)

    async def pick_random(self) -> Optional[ImageEntry]:
        """Return a uniformly random entry, or None if the pool is empty."""
        async with self._lock.reader():
            if not self._entries:
                return None
            return self._entries[self._rng.randrange(len(self._entries))]

    async def add(self, entry: ImageEntry) -> None:
        async with self._lock.writer():
            self._entries.append(entry)
        logger.info("Added image %s", entry.name)
