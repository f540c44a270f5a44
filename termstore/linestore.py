"""Line-oriented ``key=value`` text records.

This layer only splits structure. It never escapes or unescapes content:
whatever a caller wrote between ``=`` and the newline comes back verbatim.
"""

from __future__ import annotations

import io
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

Entries = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """Split one record at its first ``=``.

    Returns ``None`` for lines without a separator. Trailing CR/LF is trimmed
    from the value only.
    """

    key, sep, value = line.partition("=")
    if not sep:
        return None
    return key, value.rstrip("\r\n")


def parse_lines(lines: Iterable[str]) -> Dict[str, str]:
    """Parse records into a dict; a later duplicate key overwrites an earlier one."""

    out: Dict[str, str] = {}
    for line in lines:
        kv = parse_line(line)
        if kv is None:
            continue
        out[kv[0]] = kv[1]
    return out


def parse(text: str) -> Dict[str, str]:
    # StringIO iterates newline-terminated records of any length
    return parse_lines(io.StringIO(text, newline="\n"))


def format_line(key: str, value: str) -> str:
    return f"{key}={value}\n"


def format_entries(entries: Entries) -> str:
    """Serialise entries in the order supplied, one ``key=value`` line each."""

    items = entries.items() if isinstance(entries, Mapping) else entries
    return "".join(format_line(k, v) for k, v in items)
