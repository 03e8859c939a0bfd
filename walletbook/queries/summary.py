"""
Summary Engine

Pure reductions over a list of transactions.

DESIGN DECISION: Two kinds of numbers are never mixed:
- the effect of the summarized transactions (income, expenses, spent,
  earned, net_effect), computed here from the list alone
- a wallet's live balance (current_balance), copied from the wallet
  store as-is, which already reflects every transaction in the ledger

Adding a window's effect on top of a live balance would count those
transactions twice, so nothing here does that.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from walletbook.models.ledger import (
    Category,
    TimeFilter,
    Transaction,
    TransactionType,
    Wallet,
)
from walletbook.models.results import (
    CategoryTotal,
    FinancialSummary,
    Report,
    WalletSummary,
)
from walletbook.reconciliation import transaction_effect


UNCATEGORIZED_LABEL = "Uncategorized"


def calculate_financial_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    """income = sum of income amounts, expenses = sum of expense amounts."""
    income = Decimal("0")
    expenses = Decimal("0")

    for transaction in transactions:
        if transaction.type == TransactionType.INCOME:
            income += transaction.amount
        else:
            expenses += transaction.amount

    return FinancialSummary(
        income=income,
        expenses=expenses,
        balance=income - expenses,
    )


def calculate_wallet_summaries(
    transactions: Iterable[Transaction],
    wallets: Iterable[Wallet],
) -> list[WalletSummary]:
    """
    Per-wallet totals for the given transactions, in wallet order.

    Transactions pointing at unknown wallets are skipped here; they still
    count in calculate_financial_summary.
    """
    summaries: dict[str, WalletSummary] = {
        wallet.id: WalletSummary(
            wallet_id=wallet.id,
            wallet_name=wallet.name,
            current_balance=wallet.balance,
        )
        for wallet in wallets
    }

    for transaction in transactions:
        summary = summaries.get(transaction.wallet_id)
        if summary is None:
            continue
        if transaction.type == TransactionType.INCOME:
            summary.earned += transaction.amount
        else:
            summary.spent += transaction.amount
        summary.net_effect += transaction_effect(transaction.type, transaction.amount)

    return list(summaries.values())


def calculate_category_totals(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
) -> tuple[list[CategoryTotal], list[CategoryTotal]]:
    """
    Sum amounts per category, largest first.

    Returns (income_categories, expense_categories). A category is placed
    by its own type; a dangling category id is labelled Uncategorized and
    placed by the type of its first transaction.
    """
    by_id = {category.id: category for category in categories}
    totals: dict[str, CategoryTotal] = {}

    for transaction in transactions:
        total = totals.get(transaction.category_id)
        if total is None:
            category = by_id.get(transaction.category_id)
            total = CategoryTotal(
                category_id=transaction.category_id,
                name=category.name if category else UNCATEGORIZED_LABEL,
                type=category.type if category else transaction.type,
                amount=Decimal("0"),
                color=category.color if category else None,
            )
            totals[transaction.category_id] = total
        total.amount += transaction.amount

    ordered = sorted(totals.values(), key=lambda t: t.amount, reverse=True)
    income = [t for t in ordered if t.type == TransactionType.INCOME]
    expense = [t for t in ordered if t.type == TransactionType.EXPENSE]
    return income, expense


def build_report(
    transactions: list[Transaction],
    wallets: Iterable[Wallet],
    categories: Iterable[Category],
    as_of: date,
    time_filter: Optional[TimeFilter] = None,
    recent_limit: int = 5,
) -> Report:
    """
    Dashboard report over an already-filtered, newest-first transaction list.
    """
    income_categories, expense_categories = calculate_category_totals(
        transactions, categories
    )
    return Report(
        time_filter=time_filter,
        as_of=as_of,
        transaction_count=len(transactions),
        summary=calculate_financial_summary(transactions),
        wallet_summaries=calculate_wallet_summaries(transactions, wallets),
        income_categories=income_categories,
        expense_categories=expense_categories,
        recent_transactions=transactions[:recent_limit],
    )
