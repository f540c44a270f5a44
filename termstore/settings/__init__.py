"""Saved session profiles.

Each profile is one plain-text file under ``<root>/sessions/`` named by the
filename-safe encoding of the profile name, holding ``key=value`` lines.

Design goals:
  * Streaming writes (a profile is written once, top to bottom)
  * Reads load the whole file and answer lookups from memory
  * A missing profile is not an error; lookups fall back to global resources
"""

from .listing import ProfileEnumerator
from .store import FontSpec, Filename, SessionRecord, SessionStore, SessionWriter

__all__ = [
    "FontSpec",
    "Filename",
    "ProfileEnumerator",
    "SessionRecord",
    "SessionStore",
    "SessionWriter",
]
