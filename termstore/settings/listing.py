"""Lazy listing of stored profile names."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional, Union

from ..codec import decode_name


def is_regular_file(entry: os.DirEntry) -> bool:
    # Follows symlinks, so a link to a regular file counts and a dangling
    # link or a link to a directory does not.
    try:
        return entry.is_file()
    except OSError:
        return False


class ProfileEnumerator:
    """Directory cursor yielding decoded profile names.

    Order is whatever the directory scan produces. The cursor is single-use;
    a missing directory gives an empty (inert) cursor.
    """

    def __init__(self, scan: Optional[Iterator[os.DirEntry]]):
        self._scan = scan

    @classmethod
    def start(cls, directory: Union[str, Path]) -> "ProfileEnumerator":
        try:
            scan = os.scandir(directory)
        except OSError:
            scan = None
        return cls(scan)

    def next(self) -> Optional[str]:
        """Return the next profile name, or ``None`` at the end."""

        if self._scan is None:
            return None
        for entry in self._scan:
            if is_regular_file(entry):
                return decode_name(entry.name)
        return None

    def finish(self) -> None:
        scan, self._scan = self._scan, None
        if scan is not None:
            scan.close()

    def __iter__(self) -> Iterator[str]:
        while True:
            name = self.next()
            if name is None:
                return
            yield name

    def __enter__(self) -> "ProfileEnumerator":
        return self

    def __exit__(self, *exc) -> None:
        self.finish()
