"""Known host keys.

Lines in the host keys file are of the form::

    type@port:hostname keydata

e.g.::

    rsa@22:foovax.example.org 0x23,0x293487364395345345....2343

The file is append-only. A lookup stops at the *first* line whose
``type@port:hostname`` matches, so if a key is stored again for the same
host the older line still wins. Callers that replace a key must be aware of
that; this module does not rewrite the file.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator, Optional

from ..errors import StoreIOError
from ..paths import FILE_MODE, StoreLayout

logger = logging.getLogger(__name__)


class HostKeyStatus(enum.Enum):
    ABSENT = "absent"  # never seen this host/port/keytype
    MATCH = "match"
    MISMATCH = "mismatch"  # stored key differs: possible MITM


@dataclass(frozen=True)
class HostKeyEntry:
    keytype: str
    port: int
    hostname: str
    keydata: str

    @property
    def identity(self) -> str:
        return f"{self.keytype}@{self.port}:{self.hostname}"

    def to_line(self) -> str:
        return f"{self.identity} {self.keydata}\n"

    @staticmethod
    def from_line(line: str) -> Optional["HostKeyEntry"]:
        """Parse one trust line; ``None`` if it is not well formed."""

        line = line.rstrip("\n")
        keytype, at, rest = line.partition("@")
        porttext, colon, rest = rest.partition(":")
        hostname, space, keydata = rest.partition(" ")
        if not (at and colon and space and keytype and hostname):
            return None
        if not porttext.isascii() or not porttext.isdigit():
            return None
        return HostKeyEntry(keytype=keytype, port=int(porttext), hostname=hostname, keydata=keydata)


def check_host_key(
    lines: Iterable[str], hostname: str, port: int, keytype: str, keydata: str
) -> HostKeyStatus:
    """Scan trust lines; the first line with a matching identity decides."""

    prefix = f"{keytype}@{port:d}:{hostname} "
    for line in lines:
        line = line.rstrip("\n")
        if not line.startswith(prefix):
            continue
        if line[len(prefix):] == keydata:
            return HostKeyStatus.MATCH
        return HostKeyStatus.MISMATCH
    return HostKeyStatus.ABSENT


class HostKeyStore:
    def __init__(self, layout: Optional[StoreLayout] = None):
        self.layout = layout or StoreLayout.at()

    @property
    def path(self) -> Path:
        return self.layout.host_keys_file

    def _open_lines(self) -> Optional[IO[str]]:
        try:
            return open(self.path, "r", encoding="utf-8", errors="surrogateescape", newline="\n")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read host key file %s: %s", self.path, e)
            return None

    def verify(self, hostname: str, port: int, keytype: str, keydata: str) -> HostKeyStatus:
        fp = self._open_lines()
        if fp is None:
            return HostKeyStatus.ABSENT
        with fp:
            status = check_host_key(fp, hostname, port, keytype, keydata)
        if status is HostKeyStatus.MISMATCH:
            logger.warning("Host key for %s@%d:%s does not match the stored key", keytype, port, hostname)
        return status

    def _open_append(self) -> int:
        flags = os.O_CREAT | os.O_APPEND | os.O_WRONLY
        try:
            return os.open(self.path, flags, FILE_MODE)
        except FileNotFoundError:
            # first write on a fresh install: create the store directory
            self.layout.ensure_root()
            return os.open(self.path, flags, FILE_MODE)

    def store(self, hostname: str, port: int, keytype: str, keydata: str) -> None:
        entry = HostKeyEntry(keytype=keytype, port=int(port), hostname=hostname, keydata=keydata)
        try:
            fd = self._open_append()
            try:
                fp = os.fdopen(fd, "a", encoding="utf-8", errors="surrogateescape", newline="\n")
            except BaseException:
                os.close(fd)
                raise
            with fp:
                fp.write(entry.to_line())
        except OSError as e:
            raise StoreIOError(f"cannot record host key in {self.path}: {e}", self.path) from e
        logger.info("Stored %s host key for %s:%d", keytype, hostname, port)

    def entries(self) -> Iterator[HostKeyEntry]:
        fp = self._open_lines()
        if fp is None:
            return
        with fp:
            for line in fp:
                entry = HostKeyEntry.from_line(line)
                if entry is not None:
                    yield entry
