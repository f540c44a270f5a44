"""Global fallback values for session settings.

When a key is not in the open session (or no session is open at all) the
session store asks a :class:`ResourceTable`. The table is built once, from
X-resource style strings such as ``"myterm.Hostname: example.org"`` or
``"*PortNumber: 2222"``, and is read-only afterwards so it can be shared by
any number of open sessions.

An optional ``default_lookup`` callable is consulted after the explicit
strings; it stands in for whatever environment the client runs in (GUI
defaults, an X resource database, ...).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DefaultLookup = Callable[[str], Optional[str]]


def parse_resource_string(text: str) -> Optional[Tuple[str, str]]:
    """Parse ``"[prog.]Key: value"`` into ``(key, value)``.

    The key is whatever sits between the last ``.`` or ``*`` before the first
    colon and that colon. Leading whitespace is stripped from the value.
    Returns ``None`` when there is no colon.
    """

    colon = text.find(":")
    if colon < 0:
        return None
    start = colon
    while start > 0 and text[start - 1] not in ".*":
        start -= 1
    return text[start:colon], text[colon + 1:].lstrip()


@dataclass(frozen=True)
class ResourceTable:
    """Immutable key -> value fallback table."""

    values: Mapping[str, str] = field(default_factory=dict)
    default_lookup: Optional[DefaultLookup] = None

    def __post_init__(self) -> None:
        # copy, so a caller holding the source dict cannot change the table
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @classmethod
    def from_strings(
        cls,
        strings: Iterable[str] = (),
        default_lookup: Optional[DefaultLookup] = None,
    ) -> "ResourceTable":
        table: Dict[str, str] = {}
        for s in strings:
            kv = parse_resource_string(s)
            if kv is None:
                logger.warning("Expected a colon in resource string %r; ignored", s)
                continue
            # last write wins
            table[kv[0]] = kv[1]
        return cls(values=table, default_lookup=default_lookup)

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, str],
        default_lookup: Optional[DefaultLookup] = None,
    ) -> "ResourceTable":
        return cls(values=values, default_lookup=default_lookup)

    def lookup(self, key: str) -> Optional[str]:
        value = self.values.get(key)
        if value is not None:
            return value
        if self.default_lookup is not None:
            return self.default_lookup(key)
        return None

