"""
Wallet Store

Owns the wallet collection and is the only place a balance changes.

Rules:
- A wallet can only be deleted while at least one other wallet remains.
- Balances move through update_balance (reconciliation) or through an
  explicit balance in update_wallet (manual correction).
- Whether a wallet still has transactions is checked by the caller
  against the ledger; this store does not know about transactions.
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from walletbook.audit import AuditLogger
from walletbook.models.audit import AuditEventBuilder, AuditEventType
from walletbook.models.ledger import Wallet, WalletCreate, WalletUpdate
from walletbook.models.results import OperationFailure, OperationResult
from walletbook.reconciliation import WalletBalancePort
from walletbook.services.storage import StateStorageInterface
from walletbook.stores.base import PersistedStore


DEFAULT_WALLETS = [
    Wallet(
        id="cash",
        name="Cash",
        balance=Decimal("0"),
        icon="Wallet",
        color="#00B894",
    ),
]


class WalletStore(PersistedStore, WalletBalancePort):
    """CRUD over wallets plus the balance-adjustment primitive."""

    def __init__(
        self,
        storage: StateStorageInterface,
        key: str = "wallet-storage",
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(storage, key, audit_logger)
        loaded = self._load_records("wallets", Wallet)
        if loaded == []:
            self._report_load_failure("stored wallet list is empty")
            loaded = None
        if loaded is None:
            loaded = [wallet.model_copy() for wallet in DEFAULT_WALLETS]
        self._wallets: list[Wallet] = loaded

    def _dump_state(self) -> dict:
        return {"wallets": [wallet.model_dump(mode="json") for wallet in self._wallets]}

    def _index_of(self, wallet_id: str) -> Optional[int]:
        for i, wallet in enumerate(self._wallets):
            if wallet.id == wallet_id:
                return i
        return None

    @property
    def wallets(self) -> list[Wallet]:
        return list(self._wallets)

    def get_wallet(self, wallet_id: str) -> Optional[Wallet]:
        i = self._index_of(wallet_id)
        return self._wallets[i] if i is not None else None

    def total_balance(self) -> Decimal:
        return sum((wallet.balance for wallet in self._wallets), Decimal("0"))

    def add_wallet(self, data: WalletCreate) -> Wallet:
        wallet = Wallet(**data.model_dump())
        self._wallets.append(wallet)
        self._persist()
        self._audit.log(AuditEventBuilder.wallet_changed(
            AuditEventType.WALLET_ADDED, wallet.id, wallet.name
        ))
        return wallet

    def update_wallet(self, wallet_id: str, update: WalletUpdate) -> Optional[Wallet]:
        """Merge supplied fields; unknown ids are ignored."""
        i = self._index_of(wallet_id)
        if i is None:
            return None

        updated = self._wallets[i].model_copy(update=update.changes())
        self._wallets[i] = updated
        self._persist()
        self._audit.log(AuditEventBuilder.wallet_changed(
            AuditEventType.WALLET_UPDATED, updated.id, updated.name
        ))
        return updated

    def can_delete_wallet(self, wallet_id: str) -> bool:
        """At least one wallet must always remain."""
        return len(self._wallets) > 1

    def delete_wallet(self, wallet_id: str) -> OperationResult:
        i = self._index_of(wallet_id)
        if i is None:
            return OperationResult.refused(
                OperationFailure.NOT_FOUND,
                f"Wallet {wallet_id} does not exist.",
            )

        if not self.can_delete_wallet(wallet_id):
            self._audit.log(AuditEventBuilder.wallet_delete_refused(
                wallet_id, OperationFailure.LAST_WALLET.value
            ))
            return OperationResult.refused(
                OperationFailure.LAST_WALLET,
                "You must have at least one wallet.",
            )

        wallet = self._wallets.pop(i)
        self._persist()
        self._audit.log(AuditEventBuilder.wallet_changed(
            AuditEventType.WALLET_DELETED, wallet.id, wallet.name
        ))
        return OperationResult.ok(f"Wallet {wallet.name} deleted.")

    def update_balance(
        self,
        wallet_id: str,
        delta: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Add a signed delta to a wallet's balance. Unknown ids are a no-op."""
        delta = Decimal(delta)
        i = self._index_of(wallet_id)
        if i is None:
            self._audit.log(AuditEventBuilder.balance_adjustment_skipped(
                wallet_id, str(delta), correlation_id
            ))
            return False

        wallet = self._wallets[i]
        updated = wallet.model_copy(update={"balance": wallet.balance + delta})
        self._wallets[i] = updated
        self._persist()
        self._audit.log(AuditEventBuilder.balance_adjusted(
            wallet_id, str(delta), str(updated.balance), correlation_id
        ))
        return True

    def adjust_balance(
        self,
        wallet_id: str,
        delta: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return self.update_balance(wallet_id, delta, correlation_id=correlation_id)
