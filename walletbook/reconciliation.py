"""
Balance Reconciliation

Keeps wallet balances in step with the ledger. A transaction's effect on
its wallet is +amount for income and -amount for expense; creating a
transaction applies that effect, deleting it reverses it, and editing it
reverses the old effect before applying the new one.

The ledger only ever reaches wallets through WalletBalancePort, so tests
can substitute a recording double for the real wallet store.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
from uuid import UUID

from walletbook.models.ledger import TransactionType


class WalletBalancePort(ABC):
    """The one wallet operation the ledger depends on."""

    @abstractmethod
    def adjust_balance(
        self,
        wallet_id: str,
        delta: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Add a signed delta to a wallet's balance.

        Returns:
            False if the wallet does not exist (nothing was changed)
        """
        pass


def transaction_effect(transaction_type: TransactionType, amount: Decimal) -> Decimal:
    """Signed contribution of a transaction to its wallet balance."""
    if TransactionType(transaction_type) == TransactionType.INCOME:
        return Decimal(amount)
    return -Decimal(amount)


class BalanceReconciler:
    """Applies and reverses transaction effects against a WalletBalancePort."""

    def __init__(self, wallets: WalletBalancePort):
        self._wallets = wallets

    def apply(
        self,
        wallet_id: str,
        transaction_type: TransactionType,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return self._wallets.adjust_balance(
            wallet_id,
            transaction_effect(transaction_type, amount),
            correlation_id=correlation_id,
        )

    def reverse(
        self,
        wallet_id: str,
        transaction_type: TransactionType,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        return self._wallets.adjust_balance(
            wallet_id,
            -transaction_effect(transaction_type, amount),
            correlation_id=correlation_id,
        )
