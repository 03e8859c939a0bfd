"""
Data Models Package

This package contains all Pydantic models used in walletbook.
All data flowing through the system must conform to these schemas.
"""

from walletbook.models.ledger import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    SearchMode,
    TimeFilter,
    TimeFilterType,
    Transaction,
    TransactionCreate,
    TransactionFilter,
    TransactionType,
    TransactionUpdate,
    Wallet,
    WalletCreate,
    WalletUpdate,
    generate_id,
)
from walletbook.models.results import (
    CategoryTotal,
    FinancialSummary,
    OperationFailure,
    OperationResult,
    Report,
    ValidationIssue,
    ValidationResult,
    WalletSummary,
)
from walletbook.models.preferences import (
    AVAILABLE_CURRENCIES,
    Currency,
    UserSettings,
)
from walletbook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "SearchMode",
    "TimeFilter",
    "TimeFilterType",
    "Transaction",
    "TransactionCreate",
    "TransactionFilter",
    "TransactionType",
    "TransactionUpdate",
    "Wallet",
    "WalletCreate",
    "WalletUpdate",
    "generate_id",
    # Results
    "CategoryTotal",
    "FinancialSummary",
    "OperationFailure",
    "OperationResult",
    "Report",
    "ValidationIssue",
    "ValidationResult",
    "WalletSummary",
    # Preferences
    "AVAILABLE_CURRENCIES",
    "Currency",
    "UserSettings",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
