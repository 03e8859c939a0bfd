"""
Ledger Store

Owns the transaction collection (newest first) and keeps wallet balances
consistent with it.

For every mutation the store updates its own collection and asks the
BalanceReconciler to move the affected wallet balances:
- add:    apply the new transaction's effect
- update: reverse the stored effect, then apply the merged one
          (always both steps, even if wallet/amount/type did not change)
- delete: reverse the stored effect

IMPORTANT: wallet_id and category_id are not checked here. A transaction
for a wallet that does not exist is stored, and its balance adjustment is
skipped with a warning.
"""

from datetime import date
from typing import Callable, Optional

from walletbook.audit import AuditLogger, create_correlation_id
from walletbook.models.audit import AuditEventBuilder
from walletbook.models.ledger import (
    SearchMode,
    Transaction,
    TransactionCreate,
    TransactionFilter,
    TransactionUpdate,
)
from walletbook.queries.filters import filter_transactions
from walletbook.reconciliation import BalanceReconciler, WalletBalancePort
from walletbook.services.storage import StateStorageInterface
from walletbook.stores.base import PersistedStore


class LedgerStore(PersistedStore):
    """CRUD over transactions with balance reconciliation."""

    def __init__(
        self,
        storage: StateStorageInterface,
        wallets: WalletBalancePort,
        key: str = "transaction-storage",
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], date]] = None,
        week_start_day: int = 6,
        search_mode: SearchMode = SearchMode.INTERSECT,
    ):
        super().__init__(storage, key, audit_logger)
        self._reconciler = BalanceReconciler(wallets)
        self._clock = clock or date.today
        self._week_start_day = week_start_day
        self._search_mode = SearchMode(search_mode)

        loaded = self._load_records("transactions", Transaction)
        self._transactions: list[Transaction] = loaded if loaded is not None else []

    def _dump_state(self) -> dict:
        return {
            "transactions": [t.model_dump(mode="json") for t in self._transactions]
        }

    def _index_of(self, transaction_id: str) -> Optional[int]:
        for i, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                return i
        return None

    @property
    def transactions(self) -> list[Transaction]:
        """All transactions, newest first."""
        return list(self._transactions)

    @property
    def search_mode(self) -> SearchMode:
        return self._search_mode

    def today(self) -> date:
        return self._clock()

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        i = self._index_of(transaction_id)
        return self._transactions[i] if i is not None else None

    def add_transaction(self, data: TransactionCreate) -> Transaction:
        correlation_id = create_correlation_id()
        transaction = Transaction(**data.model_dump())
        self._transactions.insert(0, transaction)

        applied = self._reconciler.apply(
            transaction.wallet_id,
            transaction.type,
            transaction.amount,
            correlation_id=correlation_id,
        )
        if not applied:
            self._logger.warning(
                "wallet_not_found",
                transaction_id=transaction.id,
                wallet_id=transaction.wallet_id,
            )

        self._persist()
        self._audit.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction.id,
            wallet_id=transaction.wallet_id,
            transaction_type=transaction.type.value,
            amount=str(transaction.amount),
            correlation_id=correlation_id,
        ))
        return transaction

    def update_transaction(
        self,
        transaction_id: str,
        update: TransactionUpdate,
    ) -> Optional[Transaction]:
        """
        Merge the supplied fields into a transaction.

        Returns the updated transaction, or None if the id is unknown
        (nothing is changed in that case).
        """
        i = self._index_of(transaction_id)
        if i is None:
            return None

        correlation_id = create_correlation_id()
        current = self._transactions[i]
        changes = update.changes()
        merged = current.model_copy(update=changes)

        self._reconciler.reverse(
            current.wallet_id,
            current.type,
            current.amount,
            correlation_id=correlation_id,
        )
        applied = self._reconciler.apply(
            merged.wallet_id,
            merged.type,
            merged.amount,
            correlation_id=correlation_id,
        )
        if not applied:
            self._logger.warning(
                "wallet_not_found",
                transaction_id=merged.id,
                wallet_id=merged.wallet_id,
            )

        self._transactions[i] = merged
        self._persist()
        self._audit.log(AuditEventBuilder.transaction_updated(
            transaction_id=merged.id,
            changed_fields=list(changes),
            correlation_id=correlation_id,
        ))
        return merged

    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction; False if the id is unknown."""
        i = self._index_of(transaction_id)
        if i is None:
            return False

        correlation_id = create_correlation_id()
        transaction = self._transactions[i]
        self._reconciler.reverse(
            transaction.wallet_id,
            transaction.type,
            transaction.amount,
            correlation_id=correlation_id,
        )
        del self._transactions[i]

        self._persist()
        self._audit.log(AuditEventBuilder.transaction_deleted(
            transaction_id=transaction.id,
            wallet_id=transaction.wallet_id,
            correlation_id=correlation_id,
        ))
        return True

    def get_filtered_transactions(
        self,
        criteria: Optional[TransactionFilter] = None,
        today: Optional[date] = None,
    ) -> list[Transaction]:
        """Transactions matching the criteria, newest first."""
        return filter_transactions(
            self._transactions,
            criteria,
            today=today or self._clock(),
            week_start_day=self._week_start_day,
            search_mode=self._search_mode,
        )

    def has_transactions_for_wallet(self, wallet_id: str) -> bool:
        return bool(self.get_filtered_transactions(TransactionFilter(wallet_id=wallet_id)))
