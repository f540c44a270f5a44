"""Reversible filename-safe encoding of profile names.

Profile names are chosen by the user and may contain anything (spaces,
slashes, non-ASCII text). On disk each profile is a single file, so the name
has to become a legal path component that we can turn back into the exact
original name when listing the sessions directory.

We use opt-in for safe characters rather than opt-out for specific unsafe
ones: ``0-9 A-Z a-z + - . @ _`` pass through, every other *byte* of the UTF-8
encoding becomes ``%XX`` (uppercase hex). ``%`` itself is not safe, so the
mapping is injective.
"""

from __future__ import annotations

from typing import Optional, Union

DEFAULT_PROFILE_NAME = "Default Settings"

# Names decoded from the file system may carry undecodable bytes; keep them
# round-trippable the same way os.fsdecode()/os.fsencode() do.
_ERRORS = "surrogateescape"

_HEX = "0123456789ABCDEF"
_SAFE_BYTES = frozenset(
    b"0123456789"
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    b"abcdefghijklmnopqrstuvwxyz"
    b"+-.@_"
)
_HEX_VALUES = {c: i for i, c in enumerate("0123456789abcdef")}
_HEX_VALUES.update({c: i for i, c in enumerate("0123456789ABCDEF")})


def encode_name(name: Optional[Union[str, bytes]]) -> str:
    """Encode a profile name into a single path-safe component.

    ``None`` stands for the default profile and is encoded as
    :data:`DEFAULT_PROFILE_NAME`.
    """

    if name is None:
        name = DEFAULT_PROFILE_NAME
    raw = name if isinstance(name, bytes) else name.encode("utf-8", _ERRORS)

    out: list[str] = []
    for b in raw:
        if b in _SAFE_BYTES:
            out.append(chr(b))
        else:
            out.append("%" + _HEX[b >> 4] + _HEX[b & 15])
    return "".join(out)


def decode_name_bytes(stored: str) -> bytes:
    """Inverse of :func:`encode_name`, returning the raw name bytes.

    ``%`` followed by two hex digits (either case) becomes the byte they spell.
    Anything else, including a ``%`` too close to the end of the input or
    followed by non-hex characters, is copied through unchanged.
    """

    out = bytearray()
    i = 0
    n = len(stored)
    while i < n:
        ch = stored[i]
        if ch == "%" and i + 2 < n and stored[i + 1] in _HEX_VALUES and stored[i + 2] in _HEX_VALUES:
            out.append((_HEX_VALUES[stored[i + 1]] << 4) | _HEX_VALUES[stored[i + 2]])
            i += 3
            continue
        out += ch.encode("utf-8", _ERRORS)
        i += 1
    return bytes(out)


def decode_name(stored: str) -> str:
    """Inverse of :func:`encode_name` for text names."""
    return decode_name_bytes(stored).decode("utf-8", _ERRORS)
