"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Files on disk are the default backend; the in-memory variants serve tests.
"""

from finance_tracker.services.storage.interface import (
    AuditSinkInterface,
    InvalidKeyError,
    KeyValueStorageInterface,
    StorageError,
)
from finance_tracker.services.storage.file_storage import FileKeyValueStorage
from finance_tracker.services.storage.memory import (
    InMemoryAuditSink,
    InMemoryKeyValueStorage,
)

__all__ = [
    # Interfaces
    "AuditSinkInterface",
    "KeyValueStorageInterface",
    # Exceptions
    "InvalidKeyError",
    "StorageError",
    # Implementations
    "FileKeyValueStorage",
    "InMemoryAuditSink",
    "InMemoryKeyValueStorage",
]
