# persistence/services/exceptions.py

"""
PERSISTENCE ERRORS

Raised by key-value store implementations. The adapters in this package
catch them at their boundary and report failure as a return value.
"""


class PersistenceError(Exception):
    """Base exception for key-value store failures."""


class StorageQuotaExceeded(PersistenceError):
    """Raised when a write would push a store past its quota."""
