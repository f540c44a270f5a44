from __future__ import annotations

import logging

from termstore.log_utils import sanitize_field, setup_logging


def test_sanitize_field_removes_ansi_and_controls() -> None:
    raw = "evil\x1b[2J\x1b[0;31mhost\r\nFAKE LOG LINE\x07"
    cleaned = sanitize_field(raw)

    assert "\x1b" not in cleaned
    assert "\r" not in cleaned and "\n" not in cleaned
    assert cleaned == "evilhost\\x0d\\x0aFAKE LOG LINE\\x07"


def test_sanitize_field_keeps_printable_text() -> None:
    assert sanitize_field("café 日本 a=b") == "café 日本 a=b"
    assert sanitize_field("") == ""


def test_setup_logging_keeps_existing_configuration() -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        setup_logging("debug")
        assert root.handlers == before + [handler]
    finally:
        root.removeHandler(handler)
