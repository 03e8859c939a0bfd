"""Tests for the JSON file storage backends and best-effort saves."""

import json
from decimal import Decimal

import pytest

from walletbook.audit import AuditLogger
from walletbook.config import StorageSettings
from walletbook.models.audit import AuditEventBuilder, AuditEventType
from walletbook.services.storage import (
    CorruptStateError,
    InMemoryAuditStorage,
    JsonFileClient,
    JsonFileStateStorage,
    JsonLinesAuditStorage,
    StateStorageInterface,
    StorageError,
)
from walletbook.stores import LedgerStore, WalletStore

from tests.conftest import make_transaction


@pytest.fixture
def client(tmp_path):
    return JsonFileClient(StorageSettings(data_dir=tmp_path / "data", write_attempts=1))


class FailingStateStorage(StateStorageInterface):
    """Reads nothing, refuses every write."""

    def load(self, key):
        return None

    def save(self, key, payload):
        raise StorageError("disk full")


class TestJsonFileStateStorage:

    def test_missing_key_loads_none(self, client):
        assert JsonFileStateStorage(client).load("wallet-storage") is None

    def test_save_then_load(self, client):
        storage = JsonFileStateStorage(client)
        storage.save("wallet-storage", {"state": {"wallets": []}, "version": 0})
        assert storage.load("wallet-storage") == {"state": {"wallets": []}, "version": 0}
        assert (client.data_dir / "wallet-storage.json").exists()
        assert not (client.data_dir / ".wallet-storage.json.tmp").exists()

    def test_invalid_json_is_corrupt(self, client):
        client.data_dir.mkdir(parents=True)
        (client.data_dir / "wallet-storage.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptStateError):
            JsonFileStateStorage(client).load("wallet-storage")

    def test_non_object_is_corrupt(self, client):
        client.data_dir.mkdir(parents=True)
        (client.data_dir / "wallet-storage.json").write_text("[]", encoding="utf-8")
        with pytest.raises(CorruptStateError):
            JsonFileStateStorage(client).load("wallet-storage")

    @pytest.mark.parametrize("name", ["", "../escape", ".hidden", "a/b"])
    def test_invalid_names_rejected(self, client, name):
        with pytest.raises(StorageError):
            client.path_for(name)


class TestJsonLinesAuditStorage:

    def test_events_are_appended_and_read_newest_first(self, client):
        storage = JsonLinesAuditStorage(client)
        storage.append_event(AuditEventBuilder.settings_updated("theme", "dark"))
        storage.append_event(AuditEventBuilder.settings_updated("language", "vi"))

        lines = (client.data_dir / "audit-log.jsonl").read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["event_type"] == "settings_updated"

        events = storage.get_recent_events(limit=1)
        assert len(events) == 1
        assert events[0].details == {"language": "vi"}

    def test_empty_log(self, client):
        assert JsonLinesAuditStorage(client).get_recent_events() == []

    def test_malformed_lines_are_skipped(self, client):
        storage = JsonLinesAuditStorage(client)
        storage.append_event(AuditEventBuilder.settings_updated("theme", "dark"))
        client.append_line("audit-log.jsonl", "{truncated")
        client.append_line("audit-log.jsonl", json.dumps({"event_type": "unknown"}))
        storage.append_event(AuditEventBuilder.settings_updated("language", "vi"))

        events = storage.get_recent_events()
        assert [e.details for e in events] == [{"language": "vi"}, {"theme": "dark"}]


class TestStoresOnDisk:

    def test_state_survives_restart(self, client):
        storage = JsonFileStateStorage(client)
        wallets = WalletStore(storage)
        ledger = LedgerStore(storage, wallets)
        ledger.add_transaction(make_transaction(30, "income"))

        storage = JsonFileStateStorage(client)
        wallets = WalletStore(storage)
        ledger = LedgerStore(storage, wallets)
        assert wallets.get_wallet("cash").balance == Decimal("30")
        assert len(ledger.transactions) == 1

    def test_corrupt_file_falls_back_to_defaults(self, client):
        client.data_dir.mkdir(parents=True)
        (client.data_dir / "wallet-storage.json").write_text("garbage", encoding="utf-8")
        audit = InMemoryAuditStorage()

        wallets = WalletStore(JsonFileStateStorage(client), audit_logger=AuditLogger(audit))
        assert [w.id for w in wallets.wallets] == ["cash"]
        assert audit.events[0].event_type == AuditEventType.STATE_LOAD_FAILED

    def test_non_utf8_file_falls_back_to_defaults(self, client):
        client.data_dir.mkdir(parents=True)
        (client.data_dir / "wallet-storage.json").write_bytes(b"\xff\xfe{garbage")
        audit = InMemoryAuditStorage()

        wallets = WalletStore(JsonFileStateStorage(client), audit_logger=AuditLogger(audit))
        assert [w.id for w in wallets.wallets] == ["cash"]
        assert audit.events[0].event_type == AuditEventType.STATE_LOAD_FAILED

    def test_non_utf8_file_is_corrupt(self, client):
        client.data_dir.mkdir(parents=True)
        (client.data_dir / "wallet-storage.json").write_bytes(b"\xff\xfe{garbage")
        with pytest.raises(CorruptStateError):
            JsonFileStateStorage(client).load("wallet-storage")


class TestBestEffortSave:

    def test_failed_save_keeps_memory_state(self):
        audit = InMemoryAuditStorage()
        wallets = WalletStore(FailingStateStorage(), audit_logger=AuditLogger(audit))
        ledger = LedgerStore(FailingStateStorage(), wallets, audit_logger=AuditLogger(audit))

        transaction = ledger.add_transaction(make_transaction(12, "income"))

        assert ledger.get_transaction(transaction.id) is not None
        assert wallets.get_wallet("cash").balance == Decimal("12")
        assert AuditEventType.SAVE_FAILED in [e.event_type for e in audit.events]


class TestAuditLogger:

    def test_storage_failure_is_swallowed(self):
        class BrokenAuditStorage(InMemoryAuditStorage):
            def append_event(self, event):
                raise StorageError("nope")

        logger = AuditLogger(BrokenAuditStorage())
        assert logger.log(AuditEventBuilder.settings_updated("theme", "dark")) is False

    def test_without_storage(self):
        logger = AuditLogger()
        assert logger.log(AuditEventBuilder.settings_updated("theme", "dark")) is True
        assert logger.recent_events() == []
