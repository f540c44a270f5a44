"""Exception types raised by the store.

Absent data (no profile, no trust file, no seed) is never an exception; it is
reported through return values. Only failures to create or write a file that
an operation genuinely needs end up here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class StoreError(Exception):
    """Base class for store errors."""


class StoreIOError(StoreError):
    """A file needed by the operation could not be opened, created or written."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None
