"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the stores decoupled from where their JSON ends up
2. Use in-memory storage for testing
3. Swap the local JSON files for another key-value backend later

The interface is intentionally simple: each store reads and writes one
JSON document under its own key.
"""

from abc import ABC, abstractmethod
from typing import Optional

from walletbook.models.audit import AuditEvent


class StateStorageInterface(ABC):
    """
    Abstract key-value storage for store state.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[dict]:
        """
        Load the last document written under a key.

        Args:
            key: Store-specific storage key

        Returns:
            The decoded document, or None if nothing was written yet

        Raises:
            CorruptStateError: If stored data cannot be decoded
        """
        pass

    @abstractmethod
    def save(self, key: str, payload: dict) -> None:
        """
        Replace the document stored under a key.

        Args:
            key: Store-specific storage key
            payload: JSON-serializable document

        Raises:
            StorageError: If the write fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStateError(StorageError):
    """Stored data exists but cannot be decoded."""
    pass
