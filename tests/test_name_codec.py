from __future__ import annotations

import re

import pytest

from termstore.codec import DEFAULT_PROFILE_NAME, decode_name, decode_name_bytes, encode_name

_SAFE_RE = re.compile(r"^(?:[0-9A-Za-z+\-.@_]|%[0-9A-F]{2})*$")

NAMES = [
    "",
    "A",
    "My Session",
    "user@host.example.org",
    "a+b-c.d@e_f",
    "%",
    "%41",
    "100%",
    "!\"#$%&'()*,/:;<=>?[\\]^`{|}~",
    "tab\there\nnewline",
    "café 日本",
    "\U0001f600",
    "../../etc/passwd",
]


@pytest.mark.parametrize("name", NAMES)
def test_roundtrip_and_safe_charset(name: str) -> None:
    enc = encode_name(name)
    assert _SAFE_RE.match(enc), enc
    assert decode_name(enc) == name


def test_safe_characters_pass_through() -> None:
    assert encode_name("Host-1.example_org+x@y") == "Host-1.example_org+x@y"


def test_unsafe_bytes_are_escaped_uppercase() -> None:
    assert encode_name("My Session") == "My%20Session"
    assert encode_name("a/b") == "a%2Fb"
    assert encode_name("%") == "%25"
    # one escape per UTF-8 byte
    assert encode_name("é") == "%C3%A9"


def test_none_is_default_profile() -> None:
    assert encode_name(None) == encode_name(DEFAULT_PROFILE_NAME) == "Default%20Settings"


def test_bytes_names_roundtrip() -> None:
    raw = bytes(range(256))
    enc = encode_name(raw)
    assert _SAFE_RE.match(enc)
    assert decode_name_bytes(enc) == raw


def test_undecodable_bytes_survive_as_text() -> None:
    enc = encode_name(b"\xff\xfe name")
    name = decode_name(enc)
    assert encode_name(name) == enc


def test_encoding_is_injective_for_lookalikes() -> None:
    names = ["a b", "a%20b", "a%2520b", "a_b", "A b"]
    encoded = {encode_name(n) for n in names}
    assert len(encoded) == len(names)


def test_decode_accepts_lowercase_hex() -> None:
    assert decode_name("My%20session%2f1") == "My session/1"


@pytest.mark.parametrize("stored", ["%", "abc%", "abc%4", "%4"])
def test_decode_trailing_percent_is_literal(stored: str) -> None:
    assert decode_name(stored) == stored


def test_decode_non_hex_escape_is_literal() -> None:
    assert decode_name("%zz%41") == "%zzA"
