"""
Abstract Storage Interface

DESIGN DECISION: The store only needs a string-valued key-value medium.
Keeping the interface this small allows us to:
1. Use a directory of files for the desktop user
2. Use in-memory storage for testing
3. Swap in any other durable medium without touching the store

Values are opaque strings; serialization is the caller's concern.
"""

from abc import ABC, abstractmethod
from typing import Optional

from finance_tracker.models.audit import AuditEvent


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for durable key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key was never written

        Raises:
            StorageError: If the medium cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized value

        Returns:
            True if saved successfully

        Raises:
            StorageError: If the write fails
        """
        pass


class AuditSinkInterface(ABC):
    """
    Abstract interface for an audit event sink.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the sink.

        Returns:
            True if recorded successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class InvalidKeyError(StorageError):
    """Key cannot be used with this storage backend."""
    pass
