"""Remote host trust.

Keys are compared as opaque strings; deciding what the key string is (and
whether to trust an unknown one) is up to the caller.
"""

from .hostkeys import HostKeyEntry, HostKeyStatus, HostKeyStore, check_host_key

__all__ = ["HostKeyEntry", "HostKeyStatus", "HostKeyStore", "check_host_key"]
