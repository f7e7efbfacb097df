"""Services package."""

from finance_tracker.services.storage import (
    AuditSinkInterface,
    FileKeyValueStorage,
    InMemoryAuditSink,
    InMemoryKeyValueStorage,
    InvalidKeyError,
    KeyValueStorageInterface,
    StorageError,
)

__all__ = [
    "AuditSinkInterface",
    "FileKeyValueStorage",
    "InMemoryAuditSink",
    "InMemoryKeyValueStorage",
    "InvalidKeyError",
    "KeyValueStorageInterface",
    "StorageError",
]
