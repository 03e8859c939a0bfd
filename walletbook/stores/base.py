"""
Persisted Store Base

Each store keeps its collection in memory and writes it back to state
storage after every mutation. The persisted document is wrapped in a
versioned envelope:

    {"state": {...}, "version": 0}

Loading is forgiving: missing or unreadable state means "start from
defaults". Saving is best-effort: a failed write is logged and audited,
and the in-memory state stays authoritative.
"""

from typing import Optional, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from walletbook.audit import AuditLogger
from walletbook.models.audit import AuditEventBuilder
from walletbook.services.storage import StateStorageInterface, StorageError


ModelT = TypeVar("ModelT", bound=BaseModel)


class PersistedStore:
    """Load/save plumbing shared by all stores."""

    STATE_VERSION = 0

    def __init__(
        self,
        storage: StateStorageInterface,
        key: str,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._key = key
        self._audit = audit_logger or AuditLogger()
        self._logger = structlog.get_logger(type(self).__module__)

    def _dump_state(self) -> dict:
        raise NotImplementedError

    def _load_state(self) -> Optional[dict]:
        """The stored state, or None to fall back to defaults."""
        try:
            payload = self._storage.load(self._key)
        except StorageError as e:
            self._report_load_failure(str(e))
            return None

        if payload is None:
            return None

        state = payload.get("state")
        if not isinstance(state, dict):
            self._report_load_failure("envelope has no state object")
            return None

        version = payload.get("version", self.STATE_VERSION)
        if version != self.STATE_VERSION:
            self._logger.warning(
                "state_version_mismatch",
                key=self._key,
                stored=version,
                expected=self.STATE_VERSION,
            )
        return state

    def _load_records(self, field: str, model: type[ModelT]) -> Optional[list[ModelT]]:
        """Validate a list of records from the stored state."""
        state = self._load_state()
        if state is None or field not in state:
            return None
        try:
            return [model.model_validate(item) for item in state[field]]
        except (TypeError, ValidationError) as e:
            self._report_load_failure(str(e))
            return None

    def _report_load_failure(self, error: str) -> None:
        self._logger.error("state_load_failed", key=self._key, error=error)
        self._audit.log(AuditEventBuilder.state_load_failed(self._key, error))

    def _persist(self) -> bool:
        """Write the current state. Never raises on storage failure."""
        payload = {"state": self._dump_state(), "version": self.STATE_VERSION}
        try:
            self._storage.save(self._key, payload)
        except StorageError as e:
            self._logger.error("state_save_failed", key=self._key, error=str(e))
            self._audit.log(AuditEventBuilder.save_failed(self._key, str(e)))
            return False
        return True
