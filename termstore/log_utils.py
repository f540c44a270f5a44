"""Logging-related utilities.

Values read back from store files (profile names, hostnames, key blobs,
resource strings) are user- or network-supplied text. Before echoing them to a
terminal or a log we neutralise anything that could move the cursor or fake
extra log lines.
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# A reasonably complete ANSI escape sequence matcher (CSI + single-character).
_ANSI_ESCAPE_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_field(text: str) -> str:
    """Make a single stored value safe to print on one line.

    - Strip ANSI escape sequences (colors, cursor movement, etc.).
    - Render remaining control characters, including CR and LF, as ``\\xNN``.

    Printable text, non-ASCII included, is left alone.
    """

    if not text:
        return ""
    text = _ANSI_ESCAPE_RE.sub("", text)
    return _CONTROL_RE.sub(lambda m: "\\x%02x" % ord(m.group(0)), text)


def setup_logging(level: Union[int, str] = logging.WARNING, log_file: Optional[Union[str, Path]] = None) -> None:
    """Configure root logging for command line use.

    Does not clobber an existing logging configuration (e.g. when embedded in
    a larger client).
    """

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        return

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(path), mode="a", encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
