"""Tests for the wallet store."""

from decimal import Decimal

import pytest

from walletbook.models.audit import AuditEventType
from walletbook.models.ledger import WalletUpdate
from walletbook.models.results import OperationFailure
from walletbook.services.storage import InMemoryStateStorage
from walletbook.stores import WalletStore
from walletbook.stores.wallets import DEFAULT_WALLETS


class TestWalletDefaults:

    def test_starts_with_cash_wallet(self, wallet_store):
        assert [w.id for w in wallet_store.wallets] == ["cash"]
        assert wallet_store.get_wallet("cash").balance == Decimal("0")

    def test_defaults_are_not_shared_between_stores(self, state_storage):
        first = WalletStore(state_storage)
        first.update_balance("cash", Decimal("10"))
        assert DEFAULT_WALLETS[0].balance == Decimal("0")


class TestWalletCrud:

    def test_add_wallet_assigns_id_and_seed_balance(self, make_wallet, wallet_store):
        wallet = make_wallet("Bank", "250")
        assert wallet.id
        assert wallet_store.get_wallet(wallet.id).balance == Decimal("250")
        assert wallet_store.total_balance() == Decimal("250")

    def test_update_wallet_merges_fields(self, make_wallet, wallet_store):
        wallet = make_wallet("Bank", "10")
        updated = wallet_store.update_wallet(wallet.id, WalletUpdate(name="Checking"))
        assert updated.name == "Checking"
        assert updated.balance == Decimal("10")

    def test_update_wallet_balance_is_manual_correction(self, make_wallet, wallet_store):
        wallet = make_wallet("Bank", "10")
        wallet_store.update_wallet(wallet.id, WalletUpdate(balance=Decimal("99")))
        assert wallet_store.get_wallet(wallet.id).balance == Decimal("99")

    def test_update_unknown_wallet_is_noop(self, wallet_store, state_storage):
        saves = state_storage.save_count
        assert wallet_store.update_wallet("ghost", WalletUpdate(name="X")) is None
        assert state_storage.save_count == saves


class TestWalletDeletion:

    def test_last_wallet_cannot_be_deleted(self, wallet_store):
        assert wallet_store.can_delete_wallet("cash") is False
        result = wallet_store.delete_wallet("cash")
        assert not result
        assert result.reason == OperationFailure.LAST_WALLET
        assert result.message == "You must have at least one wallet."
        assert len(wallet_store.wallets) == 1

    def test_delete_with_another_wallet_remaining(self, make_wallet, wallet_store):
        wallet = make_wallet("Bank")
        assert wallet_store.can_delete_wallet(wallet.id) is True
        assert wallet_store.delete_wallet(wallet.id)
        assert wallet_store.get_wallet(wallet.id) is None

    def test_delete_unknown_wallet(self, make_wallet, wallet_store):
        make_wallet("Bank")
        result = wallet_store.delete_wallet("ghost")
        assert result.reason == OperationFailure.NOT_FOUND
        assert len(wallet_store.wallets) == 2

    def test_refused_delete_is_audited(self, wallet_store, audit_storage):
        wallet_store.delete_wallet("cash")
        assert audit_storage.events[-1].event_type == AuditEventType.WALLET_DELETE_REFUSED


class TestBalanceUpdates:

    @pytest.mark.parametrize("delta,expected", [
        ("30", "30"),
        ("-45.50", "-45.50"),
        ("0", "0"),
    ])
    def test_update_balance_adds_delta(self, wallet_store, delta, expected):
        assert wallet_store.update_balance("cash", Decimal(delta)) is True
        assert wallet_store.get_wallet("cash").balance == Decimal(expected)

    def test_update_balance_unknown_wallet(self, wallet_store, state_storage, audit_storage):
        saves = state_storage.save_count
        assert wallet_store.update_balance("ghost", Decimal("5")) is False
        assert state_storage.save_count == saves
        assert audit_storage.events[-1].event_type == AuditEventType.BALANCE_ADJUSTMENT_SKIPPED

    def test_adjust_balance_delegates(self, wallet_store):
        wallet_store.adjust_balance("cash", Decimal("7"))
        assert wallet_store.get_wallet("cash").balance == Decimal("7")


class TestWalletPersistence:

    def test_reload_restores_wallets(self, state_storage, make_wallet):
        wallet = make_wallet("Bank", "42")
        reloaded = WalletStore(state_storage)
        assert reloaded.get_wallet(wallet.id).balance == Decimal("42")
        assert [w.id for w in reloaded.wallets] == ["cash", wallet.id]

    def test_persisted_envelope(self, state_storage, make_wallet):
        make_wallet("Bank")
        payload = state_storage.load("wallet-storage")
        assert payload["version"] == 0
        assert len(payload["state"]["wallets"]) == 2

    def test_empty_wallet_list_falls_back_to_defaults(self, audit_logger, audit_storage):
        storage = InMemoryStateStorage({
            "wallet-storage": {"state": {"wallets": []}, "version": 0},
        })
        wallets = WalletStore(storage, audit_logger=audit_logger)
        assert [w.id for w in wallets.wallets] == ["cash"]
        assert audit_storage.events[-1].event_type == AuditEventType.STATE_LOAD_FAILED
