"""Shared fixtures: in-memory storage, a fixed clock and wired stores."""

from datetime import date
from decimal import Decimal

import pytest

from walletbook.audit import AuditLogger
from walletbook.config import LedgerSettings
from walletbook.models.ledger import (
    TransactionCreate,
    TransactionType,
    WalletCreate,
)
from walletbook.services.storage import InMemoryAuditStorage, InMemoryStateStorage
from walletbook.stores import CategoryStore, LedgerStore, WalletStore
from walletbook.validation import TransactionValidator


# Saturday; with weeks starting on Sunday the current week began 2024-06-09
TODAY = date(2024, 6, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def state_storage():
    return InMemoryStateStorage()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(audit_storage)


@pytest.fixture
def wallet_store(state_storage, audit_logger):
    return WalletStore(state_storage, audit_logger=audit_logger)


@pytest.fixture
def ledger(state_storage, wallet_store, audit_logger):
    return LedgerStore(
        state_storage,
        wallet_store,
        audit_logger=audit_logger,
        clock=lambda: TODAY,
    )


@pytest.fixture
def category_store(state_storage, audit_logger):
    return CategoryStore(state_storage, audit_logger=audit_logger)


@pytest.fixture
def validator(wallet_store, category_store):
    return TransactionValidator(
        wallet_store,
        category_store,
        settings=LedgerSettings(),
        clock=lambda: TODAY,
    )


@pytest.fixture
def make_wallet(wallet_store):
    def _make(name="Bank", balance="0"):
        return wallet_store.add_wallet(WalletCreate(name=name, balance=Decimal(balance)))
    return _make


def make_transaction(
    amount,
    transaction_type="expense",
    wallet_id="cash",
    category_id="expense-food",
    on=TODAY,
    description=None,
) -> TransactionCreate:
    return TransactionCreate(
        amount=Decimal(str(amount)),
        type=TransactionType(transaction_type),
        wallet_id=wallet_id,
        category_id=category_id,
        date=on,
        description=description,
    )


@pytest.fixture
def new_transaction():
    return make_transaction
