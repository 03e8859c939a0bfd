"""
Transaction Validation

DESIGN DECISION: The ledger store accepts any well-formed transaction.
Reference checks live here, in the calling layer, so that the store's
own behaviour (dangling ids tolerated) stays exactly as documented.

ERRORS (block the write):
- The wallet does not exist (its balance could not be reconciled)

WARNINGS (shown, do not block):
- The category does not exist (it will display as Uncategorized)
- The category's type differs from the transaction's type
- The amount is zero, or unusually large
- The date is further in the future than the configured tolerance

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for human review.
"""

from datetime import date, timedelta
from typing import Callable, Optional

from walletbook.config import LedgerSettings, get_settings
from walletbook.models.ledger import TransactionCreate
from walletbook.models.results import ValidationIssue, ValidationResult
from walletbook.stores.categories import CategoryStore
from walletbook.stores.wallets import WalletStore


class TransactionValidator:
    """Checks a transaction against the wallet and category stores."""

    def __init__(
        self,
        wallet_store: WalletStore,
        category_store: Optional[CategoryStore] = None,
        settings: Optional[LedgerSettings] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize validator.

        Args:
            wallet_store: Used to check the wallet reference.
            category_store: Used for category checks.
                           If None, category checks are skipped.
        """
        self._wallets = wallet_store
        self._categories = category_store
        self._settings = settings or get_settings().ledger
        self._clock = clock or date.today

    def validate(self, transaction: TransactionCreate) -> ValidationResult:
        issues: list[ValidationIssue] = []

        if self._wallets.get_wallet(transaction.wallet_id) is None:
            issues.append(ValidationIssue(
                field="wallet_id",
                issue_type="dangling_reference",
                message=f"Wallet {transaction.wallet_id} does not exist",
                severity="error",
                suggested_fix="Pick one of your wallets",
            ))

        if self._categories is not None:
            category = self._categories.get_category(transaction.category_id)
            if category is None:
                issues.append(ValidationIssue(
                    field="category_id",
                    issue_type="dangling_reference",
                    message="Category not found; this transaction will show as Uncategorized",
                    severity="warning",
                ))
            elif category.type != transaction.type:
                issues.append(ValidationIssue(
                    field="category_id",
                    issue_type="type_mismatch",
                    message=(
                        f"Category {category.name} is for {category.type.value}, "
                        f"but this transaction is {transaction.type.value}"
                    ),
                    severity="warning",
                    suggested_fix="Choose a category of the same type",
                ))

        if transaction.amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="Amount is zero; the wallet balance will not change",
                severity="warning",
            ))
        elif transaction.amount > self._settings.max_transaction_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({transaction.amount:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        max_future_date = self._clock() + timedelta(
            days=self._settings.future_date_tolerance_days
        )
        if transaction.date > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({transaction.date}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
            warnings=[issue.message for issue in issues if issue.severity == "warning"],
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """What we show to the user next to the form."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []

        if result.has_errors:
            lines.append("This transaction cannot be saved:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
