"""Persistent storage for a remote-access client.

Three kinds of state live under one storage root:

  * saved session profiles (``settings``)
  * the known host key trust store (``remote.hostkeys``)
  * a random seed carried across runs (``seed``)
"""

from .codec import decode_name, encode_name
from .errors import StoreError, StoreIOError
from .paths import StoreLayout
from .remote import HostKeyEntry, HostKeyStatus, HostKeyStore
from .resources import ResourceTable
from .seed import SeedStore
from .settings import SessionStore

__version__ = "0.1.0"

__all__ = [
    "HostKeyEntry",
    "HostKeyStatus",
    "HostKeyStore",
    "ResourceTable",
    "SeedStore",
    "SessionStore",
    "StoreError",
    "StoreIOError",
    "StoreLayout",
    "decode_name",
    "encode_name",
]
