"""Services package."""

from walletbook.services.storage import (
    AuditStorageInterface,
    CorruptStateError,
    InMemoryAuditStorage,
    InMemoryStateStorage,
    JsonFileClient,
    JsonFileStateStorage,
    JsonLinesAuditStorage,
    StateStorageInterface,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "CorruptStateError",
    "InMemoryAuditStorage",
    "InMemoryStateStorage",
    "JsonFileClient",
    "JsonFileStateStorage",
    "JsonLinesAuditStorage",
    "StateStorageInterface",
    "StorageError",
]
