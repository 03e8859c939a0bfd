"""
In-Memory Storage Implementation

Used by tests and by callers that do not want anything written to disk.
Documents are deep-copied through JSON on the way in and out, so a store
can never share mutable state with what was "persisted".
"""

import json
from typing import Optional

from walletbook.models.audit import AuditEvent
from walletbook.services.storage.interface import (
    AuditStorageInterface,
    StateStorageInterface,
    StorageError,
)


class InMemoryStateStorage(StateStorageInterface):
    """Key-value state storage held in a dict."""

    def __init__(self, initial: Optional[dict[str, dict]] = None):
        self._documents: dict[str, str] = {}
        self.save_count = 0
        for key, payload in (initial or {}).items():
            self._documents[key] = json.dumps(payload)

    def load(self, key: str) -> Optional[dict]:
        text = self._documents.get(key)
        if text is None:
            return None
        return json.loads(text)

    def save(self, key: str, payload: dict) -> None:
        try:
            self._documents[key] = json.dumps(payload)
        except (TypeError, ValueError) as e:
            raise StorageError(f"State for {key} is not JSON-serializable: {e}")
        self.save_count += 1

    def keys(self) -> list[str]:
        return list(self._documents)


class InMemoryAuditStorage(AuditStorageInterface):
    """Audit log held in a list."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self.events))[:limit]
