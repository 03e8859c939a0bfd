"""
Local JSON File Storage Implementation

DESIGN DECISION: Each store is written as one JSON file under the data
directory, named after its storage key. This is what a single-user device
needs:
1. The user can open and back up the files directly
2. No database setup required
3. Easy to export/migrate later

TRADEOFFS:
- Every save rewrites the whole document (fine at personal scale)
- No cross-file transactions (a crash between two store saves can leave
  balances out of step with the ledger)

Writes go to a temporary file first and are then renamed over the target,
so a reader never sees a half-written document.
"""

import json
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from walletbook.config import StorageSettings, get_settings
from walletbook.models.audit import AuditEvent
from walletbook.services.storage.interface import (
    AuditStorageInterface,
    CorruptStateError,
    StateStorageInterface,
    StorageError,
)


class JsonFileClient:
    """
    Low-level file access for the JSON storage backends.

    Handles the data directory and provides retry logic for writes.
    """

    def __init__(self, settings: Optional[StorageSettings] = None):
        self._settings = settings or get_settings().storage
        self._data_dir = Path(self._settings.data_dir)

    @property
    def settings(self) -> StorageSettings:
        return self._settings

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise StorageError(f"Invalid storage name: {name!r}")
        return self._data_dir / name

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._settings.write_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    def read_text(self, name: str) -> Optional[str]:
        path = self.path_for(name)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"{path} is not valid UTF-8: {e}")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}")

    def write_text(self, name: str, text: str) -> None:
        """Atomically replace a file, retrying transient OS errors."""
        path = self.path_for(name)
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            for attempt in self._retrying():
                with attempt:
                    self._data_dir.mkdir(parents=True, exist_ok=True)
                    tmp_path.write_text(text, encoding="utf-8")
                    tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}")

    def append_line(self, name: str, line: str) -> None:
        path = self.path_for(name)
        try:
            for attempt in self._retrying():
                with attempt:
                    self._data_dir.mkdir(parents=True, exist_ok=True)
                    with path.open("a", encoding="utf-8") as fh:
                        fh.write(line + "\n")
        except OSError as e:
            raise StorageError(f"Failed to append to {path}: {e}")


class JsonFileStateStorage(StateStorageInterface):
    """
    JSON file implementation of state storage.

    One file per key: <data_dir>/<key>.json
    """

    def __init__(self, client: Optional[JsonFileClient] = None):
        self._client = client or JsonFileClient()

    def load(self, key: str) -> Optional[dict]:
        text = self._client.read_text(f"{key}.json")
        if text is None:
            return None
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"Stored state for {key} is not valid JSON: {e}")
        if not isinstance(payload, dict):
            raise CorruptStateError(f"Stored state for {key} is not a JSON object")
        return payload

    def save(self, key: str, payload: dict) -> None:
        try:
            text = json.dumps(payload, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"State for {key} is not JSON-serializable: {e}")
        self._client.write_text(f"{key}.json", text)


class JsonLinesAuditStorage(AuditStorageInterface):
    """
    Append-only audit log, one JSON event per line.
    """

    def __init__(
        self,
        client: Optional[JsonFileClient] = None,
        log_name: Optional[str] = None,
    ):
        self._client = client or JsonFileClient()
        self._log_name = log_name or self._client.settings.audit_log_name
        self._logger = structlog.get_logger(__name__)

    def append_event(self, event: AuditEvent) -> bool:
        self._client.append_line(self._log_name, event.model_dump_json())
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        text = self._client.read_text(self._log_name)
        if not text:
            return []

        events = []
        for line in reversed(text.splitlines()):
            if not line.strip():
                continue
            try:
                events.append(AuditEvent.model_validate_json(line))
            except ValidationError as e:
                self._logger.warning(
                    "audit_line_skipped",
                    log_name=self._log_name,
                    error=str(e),
                )
                continue
            if len(events) >= limit:
                break
        return events
