"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Local JSON files are the default backend; in-memory storage backs tests.
"""

from walletbook.services.storage.interface import (
    AuditStorageInterface,
    CorruptStateError,
    StateStorageInterface,
    StorageError,
)
from walletbook.services.storage.json_file import (
    JsonFileClient,
    JsonFileStateStorage,
    JsonLinesAuditStorage,
)
from walletbook.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryStateStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "StateStorageInterface",
    # Exceptions
    "CorruptStateError",
    "StorageError",
    # JSON file implementation
    "JsonFileClient",
    "JsonFileStateStorage",
    "JsonLinesAuditStorage",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryStateStorage",
]
