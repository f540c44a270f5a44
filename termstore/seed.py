"""Random seed carried over between runs.

The store only moves bytes; generating and mixing entropy is the caller's
business. Reading streams the file to a consumer in chunks. Writing is
best-effort and never raises for I/O problems: losing a seed update is not
worth failing the caller over.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .paths import FILE_MODE, StoreLayout

logger = logging.getLogger(__name__)

SEED_CHUNK_SIZE = 512

NoiseConsumer = Callable[[bytes], None]


@dataclass
class SeedStore:
    layout: StoreLayout = field(default_factory=StoreLayout.at)
    chunk_size: int = SEED_CHUNK_SIZE

    @property
    def path(self) -> Path:
        return self.layout.seed_file

    def read(self, consumer: NoiseConsumer) -> None:
        try:
            fp = open(self.path, "rb")
        except FileNotFoundError:
            return
        except OSError as e:
            logger.debug("Random seed %s unreadable: %s", self.path, e)
            return
        with fp:
            while True:
                chunk = fp.read(self.chunk_size)
                if not chunk:
                    break
                consumer(chunk)

    def _open_for_write(self) -> int:
        # No O_TRUNC: if something goes wrong half way through writing, the
        # old seed is better than an empty file.
        flags = os.O_CREAT | os.O_WRONLY
        try:
            return os.open(self.path, flags, FILE_MODE)
        except FileNotFoundError:
            self.layout.ensure_root()
            return os.open(self.path, flags, FILE_MODE)

    def _write_some(self, fd: int, data: memoryview) -> int:
        return os.write(fd, data)

    def write(self, data: bytes) -> None:
        try:
            fd = self._open_for_write()
        except OSError as e:
            logger.warning("Cannot save random seed to %s: %s", self.path, e)
            return

        view = memoryview(data)
        try:
            while view:
                try:
                    n = self._write_some(fd, view)
                except OSError as e:
                    logger.warning("Random seed write to %s failed: %s", self.path, e)
                    break
                if n <= 0:
                    break
                view = view[n:]
        finally:
            os.close(fd)
