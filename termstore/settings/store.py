from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, TextIO, Union

from ..errors import StoreIOError
from ..linestore import format_line, parse_lines
from ..paths import StoreLayout
from ..resources import ResourceTable
from .listing import ProfileEnumerator

logger = logging.getLogger(__name__)

Name = Optional[Union[str, bytes]]

# Session files are "UTF-8-ish": anything that is not valid UTF-8 survives a
# read/write cycle as surrogate escapes instead of failing the whole load.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int_prefix(text: str) -> int:
    """Permissive integer parse: leading decimal digits, else 0."""

    m = _LEADING_INT_RE.match(text)
    return int(m.group(1)) if m else 0


@dataclass(frozen=True)
class FontSpec:
    name: str


@dataclass(frozen=True)
class Filename:
    path: str


class SessionWriter:
    """Write handle for one profile.

    Every call appends a line straight away; nothing is collected in memory
    and writing the same key twice writes two lines.
    """

    def __init__(self, name: Name, path: Path, fp: TextIO):
        self.name = name
        self.path = path
        self._fp: Optional[TextIO] = fp

    @property
    def closed(self) -> bool:
        return self._fp is None

    def _stream(self) -> TextIO:
        if self._fp is None:
            raise ValueError(f"session writer for {self.path} is closed")
        return self._fp

    def write_string(self, key: str, value: str) -> None:
        self._stream().write(format_line(key, value))

    def write_int(self, key: str, value: int) -> None:
        self.write_string(key, "%d" % value)

    def write_fontspec(self, key: str, font: FontSpec) -> None:
        self.write_string(key, font.name)

    def write_filename(self, key: str, filename: Filename) -> None:
        self.write_string(key, filename.path)

    def close(self) -> None:
        if self._fp is None:
            return
        fp, self._fp = self._fp, None
        fp.close()

    def __enter__(self) -> "SessionWriter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class SessionRecord:
    """Read handle: a profile's settings fully loaded into memory."""

    def __init__(self, name: Name, values: Dict[str, str]):
        self.name = name
        self.values = values

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def close(self) -> None:
        self.values = {}

    def __enter__(self) -> "SessionRecord":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


@dataclass
class SessionStore:
    """Per-profile settings files with a fallback to global resources.

    Reads consult the open :class:`SessionRecord` first and then
    ``resources``; a record of ``None`` (no profile open, or the profile does
    not exist) goes straight to ``resources``.
    """

    layout: StoreLayout = field(default_factory=StoreLayout.at)
    resources: ResourceTable = field(default_factory=ResourceTable)

    def path(self, name: Name) -> Path:
        return self.layout.session_file(name)

    # Writing -------------------------------------------------------------
    def open_for_write(self, name: Name) -> SessionWriter:
        path = self.path(name)
        try:
            self.layout.ensure_sessions_dir()
            fp = open(path, "w", encoding=_ENCODING, errors=_ERRORS, newline="\n")
        except OSError as e:
            raise StoreIOError(f"cannot create session file {path}: {e}", path) from e
        logger.debug("Writing session %r to %s", name, path)
        return SessionWriter(name, path, fp)

    def close_for_write(self, handle: SessionWriter) -> None:
        handle.close()

    # Reading -------------------------------------------------------------
    def open_for_read(self, name: Name) -> Optional[SessionRecord]:
        """Load a profile. Returns ``None`` if there is nothing to load."""

        path = self.path(name)
        try:
            with open(path, "r", encoding=_ENCODING, errors=_ERRORS, newline="\n") as fp:
                values = parse_lines(fp)
        except FileNotFoundError:
            logger.debug("No stored session %r at %s", name, path)
            return None
        except OSError as e:
            logger.warning("Cannot read session file %s: %s", path, e)
            return None
        return SessionRecord(name, values)

    def close_for_read(self, handle: Optional[SessionRecord]) -> None:
        if handle is not None:
            handle.close()

    def read_string(self, handle: Optional[SessionRecord], key: str) -> Optional[str]:
        if handle is not None:
            value = handle.get(key)
            if value is not None:
                return value
        return self.resources.lookup(key)

    def read_int(self, handle: Optional[SessionRecord], key: str, default: int) -> int:
        value = self.read_string(handle, key)
        if value is None:
            return default
        return parse_int_prefix(value)

    def read_fontspec(self, handle: Optional[SessionRecord], key: str) -> Optional[FontSpec]:
        value = self.read_string(handle, key)
        return FontSpec(value) if value is not None else None

    def read_filename(self, handle: Optional[SessionRecord], key: str) -> Optional[Filename]:
        value = self.read_string(handle, key)
        return Filename(value) if value is not None else None

    # Housekeeping --------------------------------------------------------
    def delete(self, name: Name) -> None:
        path = self.path(name)
        try:
            path.unlink()
        except (FileNotFoundError, IsADirectoryError):
            # no profile file at this path (the empty name maps to the directory)
            return
        except OSError as e:
            raise StoreIOError(f"cannot delete session file {path}: {e}", path) from e
        logger.debug("Deleted session %r (%s)", name, path)

    def list_sessions(self) -> ProfileEnumerator:
        return ProfileEnumerator.start(self.layout.sessions_dir)
