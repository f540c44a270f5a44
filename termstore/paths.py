from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .codec import encode_name

# Allow power-users (and test rigs) to relocate the store without code changes.
# Example:
#   export TERMSTORE_HOME=~/work/termstore-sandbox
ENV_HOME = "TERMSTORE_HOME"

SESSIONS_DIRNAME = "sessions"
HOST_KEYS_FILENAME = "sshhostkeys"
SEED_FILENAME = "randomseed"

DIR_MODE = 0o700
FILE_MODE = 0o600


def default_root() -> Path:
    """Resolve the storage root: ``$TERMSTORE_HOME`` first, then ``~/.termstore``."""

    env = (os.environ.get(ENV_HOME) or "").strip()
    if env:
        return Path(env).expanduser()
    return Path.home() / ".termstore"


@dataclass(frozen=True)
class StoreLayout:
    """Every on-disk location used by the store.

    Layout (under root):
      sessions/<encoded profile name>
      sshhostkeys
      randomseed
    """

    root: Path

    @classmethod
    def at(cls, root: Optional[Union[str, Path]] = None) -> "StoreLayout":
        return cls(root=Path(root).expanduser() if root is not None else default_root())

    @property
    def sessions_dir(self) -> Path:
        return self.root / SESSIONS_DIRNAME

    @property
    def host_keys_file(self) -> Path:
        return self.root / HOST_KEYS_FILENAME

    @property
    def seed_file(self) -> Path:
        return self.root / SEED_FILENAME

    def session_file(self, name: Optional[Union[str, bytes]]) -> Path:
        return self.sessions_dir / encode_name(name)

    def ensure_root(self) -> Path:
        self.root.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        return self.root

    def ensure_sessions_dir(self) -> Path:
        self.ensure_root()
        self.sessions_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        return self.sessions_dir
