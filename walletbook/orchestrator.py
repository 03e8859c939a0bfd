"""
Main Orchestrator for walletbook

This module ties together all the components and defines the flows the
UI calls into:
1. Transaction entry (validate → record → reconcile)
2. Wallet management (reference check → delete)
3. Reports (filter → summarize)

DESIGN DECISION: Stores are plain service objects built once here and
handed to the flows (no module-level singletons). The ledger reaches the
wallet store only through the WalletBalancePort it is given.

The rules the stores leave to their caller live here:
- A wallet with transactions cannot be deleted
- A transaction must name an existing wallet
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

import structlog

from walletbook.audit import AuditLogger
from walletbook.config import Settings, get_settings
from walletbook.models.audit import AuditEventBuilder
from walletbook.models.ledger import (
    TimeFilter,
    TimeFilterType,
    Transaction,
    TransactionCreate,
    TransactionFilter,
    TransactionUpdate,
)
from walletbook.models.results import (
    OperationFailure,
    OperationResult,
    Report,
    ValidationResult,
)
from walletbook.queries.summary import build_report
from walletbook.services.storage import (
    AuditStorageInterface,
    JsonFileClient,
    JsonFileStateStorage,
    JsonLinesAuditStorage,
    StateStorageInterface,
)
from walletbook.stores import CategoryStore, LedgerStore, SettingsStore, WalletStore
from walletbook.validation import TransactionValidator


class TransactionEntryFlow:
    """
    Orchestrates adding and editing transactions.

    Flow:
    1. Validate → wallet must exist, other oddities become warnings
    2. Record → ledger store adds/updates and reconciles balances

    Validation errors refuse the write; nothing is changed.
    """

    def __init__(
        self,
        ledger: LedgerStore,
        validator: TransactionValidator,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._ledger = ledger
        self._validator = validator
        self._audit_logger = audit_logger

    def record_transaction(
        self,
        data: TransactionCreate,
    ) -> tuple[OperationResult, ValidationResult, Optional[Transaction]]:
        """
        Validate and add a transaction.

        Returns:
            (outcome, validation_result, transaction or None if refused)
        """
        validation = self._validator.validate(data)
        if not validation.is_valid:
            self._log_rejection(validation)
            return (
                OperationResult.refused(
                    OperationFailure.VALIDATION_FAILED,
                    self._validator.get_user_friendly_summary(validation),
                ),
                validation,
                None,
            )

        transaction = self._ledger.add_transaction(data)
        return OperationResult.ok(), validation, transaction

    def edit_transaction(
        self,
        transaction_id: str,
        update: TransactionUpdate,
    ) -> tuple[OperationResult, Optional[ValidationResult], Optional[Transaction]]:
        """
        Validate the merged result of an update, then apply it.

        Returns:
            (outcome, validation_result or None if not found, transaction)
        """
        current = self._ledger.get_transaction(transaction_id)
        if current is None:
            return (
                OperationResult.refused(
                    OperationFailure.NOT_FOUND,
                    f"Transaction {transaction_id} does not exist.",
                ),
                None,
                None,
            )

        merged = current.model_copy(update=update.changes())
        validation = self._validator.validate(
            TransactionCreate(**merged.model_dump(exclude={"id"}))
        )
        if not validation.is_valid:
            self._log_rejection(validation, transaction_id)
            return (
                OperationResult.refused(
                    OperationFailure.VALIDATION_FAILED,
                    self._validator.get_user_friendly_summary(validation),
                ),
                validation,
                current,
            )

        updated = self._ledger.update_transaction(transaction_id, update)
        return OperationResult.ok(), validation, updated

    def _log_rejection(
        self,
        validation: ValidationResult,
        transaction_id: Optional[str] = None,
    ) -> None:
        if not self._audit_logger:
            return
        issues = [
            {"field": i.field, "type": i.issue_type, "message": i.message}
            for i in validation.issues
        ]
        self._audit_logger.log(AuditEventBuilder.transaction_rejected(
            issues=issues,
            transaction_id=transaction_id,
        ))


class WalletManagementFlow:
    """
    Orchestrates wallet deletion.

    The wallet store only knows the last-wallet rule; the ledger check for
    referencing transactions happens here, before the store is asked.
    """

    def __init__(
        self,
        wallets: WalletStore,
        ledger: LedgerStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._wallets = wallets
        self._ledger = ledger
        self._audit_logger = audit_logger

    def delete_wallet(self, wallet_id: str) -> OperationResult:
        if self._wallets.get_wallet(wallet_id) is None:
            return OperationResult.refused(
                OperationFailure.NOT_FOUND,
                f"Wallet {wallet_id} does not exist.",
            )

        if self._ledger.has_transactions_for_wallet(wallet_id):
            if self._audit_logger:
                self._audit_logger.log(AuditEventBuilder.wallet_delete_refused(
                    wallet_id, OperationFailure.WALLET_HAS_TRANSACTIONS.value
                ))
            return OperationResult.refused(
                OperationFailure.WALLET_HAS_TRANSACTIONS,
                "This wallet has transactions. Please delete or move all "
                "transactions before deleting the wallet.",
            )

        return self._wallets.delete_wallet(wallet_id)


class ReportFlow:
    """Builds dashboard reports over a time window."""

    def __init__(
        self,
        ledger: LedgerStore,
        wallets: WalletStore,
        categories: CategoryStore,
        recent_limit: int = 5,
    ):
        self._ledger = ledger
        self._wallets = wallets
        self._categories = categories
        self._recent_limit = recent_limit

    def dashboard(self, time_filter: Optional[TimeFilter] = None) -> Report:
        """Report for a time window; the current month by default."""
        time_filter = time_filter or TimeFilter(type=TimeFilterType.MONTHLY)
        today = self._ledger.today()
        transactions = self._ledger.get_filtered_transactions(
            TransactionFilter(time_filter=time_filter),
            today=today,
        )
        return build_report(
            transactions,
            wallets=self._wallets.wallets,
            categories=self._categories.categories,
            as_of=today,
            time_filter=time_filter,
            recent_limit=self._recent_limit,
        )


@dataclass
class AppComponents:
    """Everything the UI needs, wired together."""

    wallets: WalletStore
    ledger: LedgerStore
    categories: CategoryStore
    settings: SettingsStore
    audit_logger: AuditLogger
    transaction_entry: TransactionEntryFlow
    wallet_management: WalletManagementFlow
    reports: ReportFlow


def create_app_components(
    settings: Optional[Settings] = None,
    state_storage: Optional[StateStorageInterface] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
    clock: Optional[Callable[[], date]] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        settings: Configuration; loaded from the environment if None.
        state_storage: Where stores persist. JSON files under the
                       configured data directory if None.
        audit_storage: Where audit events go. A JSON-lines file next to
                       the state if None and auditing is enabled.
        clock: Source of "today" for time windows and validation.
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    ledger_settings = settings.ledger
    app_settings = settings.app

    if state_storage is None or (audit_storage is None and app_settings.audit_enabled):
        client = JsonFileClient(storage_settings)
        if state_storage is None:
            state_storage = JsonFileStateStorage(client)
        if audit_storage is None and app_settings.audit_enabled:
            audit_storage = JsonLinesAuditStorage(client)

    audit_logger = AuditLogger(audit_storage)
    structlog.get_logger(__name__).info(
        "app_components_created",
        environment=app_settings.app_environment,
        debug=app_settings.debug_mode,
        data_dir=str(storage_settings.data_dir),
        search_mode=ledger_settings.search_mode.value,
    )

    wallets = WalletStore(
        state_storage,
        key=storage_settings.wallets_key,
        audit_logger=audit_logger,
    )
    ledger = LedgerStore(
        state_storage,
        wallets,
        key=storage_settings.transactions_key,
        audit_logger=audit_logger,
        clock=clock,
        week_start_day=ledger_settings.week_start_day,
        search_mode=ledger_settings.search_mode,
    )
    categories = CategoryStore(
        state_storage,
        key=storage_settings.categories_key,
        audit_logger=audit_logger,
    )
    user_settings = SettingsStore(
        state_storage,
        key=storage_settings.settings_key,
        audit_logger=audit_logger,
    )

    validator = TransactionValidator(
        wallets,
        categories,
        settings=ledger_settings,
        clock=clock,
    )

    return AppComponents(
        wallets=wallets,
        ledger=ledger,
        categories=categories,
        settings=user_settings,
        audit_logger=audit_logger,
        transaction_entry=TransactionEntryFlow(ledger, validator, audit_logger),
        wallet_management=WalletManagementFlow(wallets, ledger, audit_logger),
        reports=ReportFlow(
            ledger,
            wallets,
            categories,
            recent_limit=ledger_settings.recent_transactions_limit,
        ),
    )
