"""State stores: one per collection, each persisted under its own key."""

from walletbook.stores.base import PersistedStore
from walletbook.stores.categories import DEFAULT_CATEGORIES, CategoryStore
from walletbook.stores.ledger import LedgerStore
from walletbook.stores.preferences import SettingsStore
from walletbook.stores.wallets import DEFAULT_WALLETS, WalletStore

__all__ = [
    "CategoryStore",
    "DEFAULT_CATEGORIES",
    "DEFAULT_WALLETS",
    "LedgerStore",
    "PersistedStore",
    "SettingsStore",
    "WalletStore",
]
