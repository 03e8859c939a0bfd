"""
Tests for walletbook models

Test strategy:
1. Unit tests for individual components (models, stores, filters)
2. Flow tests with in-memory storage and a fixed clock
3. No real disk access except through pytest's tmp_path
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from walletbook.models.ledger import (
    Category,
    TimeFilter,
    TimeFilterType,
    Transaction,
    TransactionType,
    TransactionUpdate,
    Wallet,
    WalletUpdate,
)
from walletbook.models.results import (
    OperationFailure,
    OperationResult,
    ValidationIssue,
    ValidationResult,
)
from walletbook.models.preferences import UserSettings
from walletbook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestLedgerModels:
    """Tests for transaction, wallet and category models."""

    def test_transaction_creation(self):
        """Test Transaction model creation with a generated id."""
        txn = Transaction(
            amount=Decimal("12.50"),
            date=date(2024, 6, 1),
            category_id="expense-food",
            wallet_id="cash",
            type=TransactionType.EXPENSE,
        )
        assert txn.amount == Decimal("12.50")
        assert txn.description is None
        assert len(txn.id) == 32

    def test_transaction_ids_are_unique(self):
        kwargs = dict(
            amount=Decimal("1"),
            date=date(2024, 6, 1),
            category_id="c",
            wallet_id="w",
            type="income",
        )
        assert Transaction(**kwargs).id != Transaction(**kwargs).id

    def test_transaction_rejects_negative_amount(self):
        """Sign is carried by type, never by amount."""
        with pytest.raises(ValueError):
            Transaction(
                amount=Decimal("-5"),
                date=date(2024, 6, 1),
                category_id="c",
                wallet_id="w",
                type=TransactionType.EXPENSE,
            )

    def test_wallet_balance_can_be_negative(self):
        wallet = Wallet(name="Card", balance=Decimal("-40"))
        assert wallet.balance == Decimal("-40")

    def test_wallet_name_strips_whitespace(self):
        wallet = Wallet(name="  Savings  ")
        assert wallet.name == "Savings"

    def test_category_defaults(self):
        category = Category(name="Pets", type=TransactionType.EXPENSE)
        assert category.is_frequent is False


class TestUpdateModels:
    """Tests for partial update semantics."""

    def test_only_supplied_fields_are_changes(self):
        update = TransactionUpdate(wallet_id="bank")
        assert update.changes() == {"wallet_id": "bank"}

    def test_zero_amount_is_a_real_change(self):
        update = TransactionUpdate(amount=Decimal("0"))
        assert update.changes() == {"amount": Decimal("0")}

    def test_empty_description_is_a_real_change(self):
        update = TransactionUpdate(description="")
        assert update.changes() == {"description": ""}

    def test_description_can_be_cleared(self):
        update = TransactionUpdate(description=None)
        assert update.changes() == {"description": None}

    def test_required_fields_cannot_be_cleared(self):
        with pytest.raises(ValueError, match="amount cannot be cleared"):
            TransactionUpdate(amount=None)
        with pytest.raises(ValueError, match="wallet_id cannot be cleared"):
            TransactionUpdate(wallet_id=None)

    def test_wallet_update_ignores_explicit_none(self):
        update = WalletUpdate(name=None, color="#000000")
        assert update.changes() == {"color": "#000000"}


class TestTimeFilter:
    """Tests for TimeFilter validation."""

    def test_custom_bounds_may_be_open(self):
        tf = TimeFilter(type=TimeFilterType.CUSTOM, start_date=date(2024, 1, 1))
        assert tf.end_date is None

    def test_custom_end_before_start_rejected(self):
        with pytest.raises(ValueError, match="end date cannot be before start date"):
            TimeFilter(
                type=TimeFilterType.CUSTOM,
                start_date=date(2024, 2, 1),
                end_date=date(2024, 1, 1),
            )


class TestResultModels:
    """Tests for OperationResult and ValidationResult."""

    def test_operation_result_truthiness(self):
        assert OperationResult.ok()
        refused = OperationResult.refused(OperationFailure.LAST_WALLET, "nope")
        assert not refused
        assert refused.reason == OperationFailure.LAST_WALLET

    def test_validation_result_has_errors(self):
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="wallet_id",
                    issue_type="dangling_reference",
                    message="Wallet missing",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="date",
                    issue_type="future_date",
                    message="Date in future",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_issue_severity_is_restricted(self):
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")

    def test_user_settings_defaults(self):
        settings = UserSettings()
        assert settings.currency.code == "USD"
        assert settings.language == "en"
        assert settings.theme == "light"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.WALLET_ADDED,
            description="Wallet added",
        )
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        correlation_id = uuid4()
        event = AuditEventBuilder.transaction_added(
            transaction_id="t1",
            wallet_id="cash",
            transaction_type="income",
            amount="30",
            correlation_id=correlation_id,
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "transaction_added"
        assert log_dict["entity_id"] == "t1"
        assert log_dict["correlation_id"] == str(correlation_id)
        assert log_dict["details"]["wallet_id"] == "cash"

    def test_wallet_changed_description(self):
        event = AuditEventBuilder.wallet_changed(
            AuditEventType.WALLET_DELETED, "w1", "Bank"
        )
        assert event.description == "Wallet deleted: Bank"
        assert event.entity_type == "wallet"

    def test_balance_adjustment_skipped_is_warning(self):
        event = AuditEventBuilder.balance_adjustment_skipped("ghost", "-5")
        assert event.severity == AuditSeverity.WARNING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
