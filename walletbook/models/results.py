"""
Result Models for walletbook

Everything the core hands back to its callers that is not a stored record:
operation outcomes, validation results, summaries and reports.

DESIGN DECISION: Refused operations return an OperationResult instead of
raising. The UI shows the message; state is left untouched.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from walletbook.models.ledger import TimeFilter, Transaction, TransactionType


# =============================================================================
# OPERATION OUTCOMES
# =============================================================================

class OperationFailure(str, Enum):
    """Why an operation was refused."""
    NOT_FOUND = "not_found"
    LAST_WALLET = "last_wallet"
    WALLET_HAS_TRANSACTIONS = "wallet_has_transactions"
    VALIDATION_FAILED = "validation_failed"


class OperationResult(BaseModel):
    """Outcome of an operation that can be refused."""

    success: bool
    reason: Optional[OperationFailure] = None
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> 'OperationResult':
        return cls(success=True, message=message)

    @classmethod
    def refused(cls, reason: OperationFailure, message: str) -> 'OperationResult':
        return cls(success=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.success


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'dangling_reference', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of checking a transaction before it reaches the ledger.

    Errors block the write; warnings are shown but do not.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")


# =============================================================================
# SUMMARIES
# =============================================================================

class FinancialSummary(BaseModel):
    """Totals over a list of transactions."""

    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    balance: Decimal = Field(
        default=Decimal("0"),
        description="income - expenses over the summarized transactions"
    )


class WalletSummary(BaseModel):
    """
    Per-wallet view of a transaction subset.

    spent, earned and net_effect describe only the summarized transactions.
    current_balance is the wallet's live balance from the wallet store and
    already includes every transaction, inside the subset or not.
    """

    wallet_id: str
    wallet_name: str
    spent: Decimal = Decimal("0")
    earned: Decimal = Decimal("0")
    net_effect: Decimal = Field(
        default=Decimal("0"),
        description="Signed effect of the summarized transactions"
    )
    current_balance: Decimal = Field(
        ...,
        description="As-of-now wallet balance"
    )

    @property
    def remaining(self) -> Decimal:
        """Money left in the wallet right now."""
        return self.current_balance


class CategoryTotal(BaseModel):
    """Sum of transaction amounts filed under one category."""

    category_id: str
    name: str
    type: TransactionType
    amount: Decimal
    color: Optional[str] = None


class Report(BaseModel):
    """Dashboard view over one time window."""

    time_filter: Optional[TimeFilter] = None
    as_of: dt.date
    transaction_count: int = Field(ge=0)
    summary: FinancialSummary
    wallet_summaries: list[WalletSummary] = Field(default_factory=list)
    income_categories: list[CategoryTotal] = Field(default_factory=list)
    expense_categories: list[CategoryTotal] = Field(default_factory=list)
    recent_transactions: list[Transaction] = Field(default_factory=list)
