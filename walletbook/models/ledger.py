"""
Core Data Models for walletbook

These models define the strict schemas for the ledger:
1. Transactions, wallets and categories
2. Partial updates with explicit "field supplied" semantics
3. Filter criteria for the transaction list

DESIGN DECISION: Amounts are Decimal and never negative.
The sign of a transaction's effect on a wallet is carried by its type.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


def generate_id() -> str:
    """Opaque unique identifier for stored records."""
    return uuid4().hex


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class TimeFilterType(str, Enum):
    """Selectable time windows for the transaction list."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class SearchMode(str, Enum):
    """
    How a search query combines with the other filter criteria.

    INTERSECT: the description match is one more AND-ed predicate.
    OVERRIDE: a non-empty query is the only predicate applied.
    """
    INTERSECT = "intersect"
    OVERRIDE = "override"


# =============================================================================
# TRANSACTIONS
# =============================================================================

class Transaction(BaseModel):
    """
    A single ledger entry.

    The effect on its wallet is +amount for income and -amount for expense.
    category_id and wallet_id are references only; nothing here checks
    that they exist.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        default_factory=generate_id,
        description="Unique transaction ID"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Magnitude of the transaction"
    )
    description: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Free text note"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    category_id: str = Field(
        ...,
        description="Category this transaction is filed under"
    )
    wallet_id: str = Field(
        ...,
        description="Wallet whose balance this transaction affects"
    )
    type: TransactionType


class TransactionCreate(BaseModel):
    """Input for a new transaction; the store assigns the id."""
    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Decimal = Field(..., ge=0)
    description: Optional[str] = Field(default=None, max_length=500)
    date: dt.date = Field(default_factory=dt.date.today)
    category_id: str
    wallet_id: str
    type: TransactionType


# Fields that may be omitted from an update but never cleared
_REQUIRED_TRANSACTION_FIELDS = ("amount", "date", "category_id", "wallet_id", "type")


class TransactionUpdate(BaseModel):
    """
    Partial update of a transaction.

    Only fields explicitly supplied are applied, so amount=0 or
    description="" are real updates rather than "not provided".
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Optional[Decimal] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, max_length=500)
    date: Optional[dt.date] = None
    category_id: Optional[str] = None
    wallet_id: Optional[str] = None
    type: Optional[TransactionType] = None

    @model_validator(mode='after')
    def reject_cleared_required_fields(self) -> 'TransactionUpdate':
        """Required transaction fields cannot be set to None."""
        for name in _REQUIRED_TRANSACTION_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def changes(self) -> dict:
        """The explicitly supplied fields and their values."""
        return {name: getattr(self, name) for name in self.model_fields_set}


# =============================================================================
# WALLETS
# =============================================================================

class Wallet(BaseModel):
    """
    A named pot of money.

    balance is signed and may go negative. It equals the seed balance plus
    the effect of every transaction currently referencing the wallet.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=generate_id)
    name: str = Field(..., min_length=1, max_length=100)
    balance: Decimal = Field(default=Decimal("0"))
    icon: str = "Wallet"
    color: str = "#00B894"


class WalletCreate(BaseModel):
    """Input for a new wallet; balance is the seed balance."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    balance: Decimal = Field(default=Decimal("0"))
    icon: str = "Wallet"
    color: str = "#00B894"


class WalletUpdate(BaseModel):
    """
    Partial update of a wallet.

    Supplying balance edits it directly, bypassing reconciliation.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    balance: Optional[Decimal] = None
    icon: Optional[str] = None
    color: Optional[str] = None

    def changes(self) -> dict:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


# =============================================================================
# CATEGORIES
# =============================================================================

class Category(BaseModel):
    """Classification of transactions; has no effect on balances."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=generate_id)
    name: str = Field(..., min_length=1, max_length=100)
    type: TransactionType
    icon: str = "MoreHorizontal"
    color: str = "#636E72"
    is_frequent: bool = False


class CategoryCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    type: TransactionType
    icon: str = "MoreHorizontal"
    color: str = "#636E72"
    is_frequent: bool = False


class CategoryUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[TransactionType] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    is_frequent: Optional[bool] = None

    def changes(self) -> dict:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


# =============================================================================
# FILTER CRITERIA
# =============================================================================

class TimeFilter(BaseModel):
    """
    A time window selection.

    For CUSTOM, either bound may be omitted to leave that side open.
    Bounds are ignored for the other types.
    """

    type: TimeFilterType
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @model_validator(mode='after')
    def validate_bounds(self) -> 'TimeFilter':
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("Time filter end date cannot be before start date")
        return self


class TransactionFilter(BaseModel):
    """
    Criteria for the transaction list.

    Every supplied criterion must match (AND). An empty search query is
    treated as absent.
    """

    wallet_id: Optional[str] = None
    category_id: Optional[str] = None
    type: Optional[TransactionType] = None
    time_filter: Optional[TimeFilter] = None
    search_query: Optional[str] = None
