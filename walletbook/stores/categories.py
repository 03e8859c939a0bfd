"""
Category Store

Categories classify transactions for display and reporting. Deleting a
category leaves transactions pointing at it; they show as Uncategorized.
"""

from typing import Optional

from walletbook.audit import AuditLogger
from walletbook.models.audit import AuditEventBuilder, AuditEventType
from walletbook.models.ledger import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    TransactionType,
)
from walletbook.queries.summary import UNCATEGORIZED_LABEL
from walletbook.services.storage import StateStorageInterface
from walletbook.stores.base import PersistedStore


def _category(category_id, name, kind, icon, color):
    return Category(id=category_id, name=name, type=TransactionType(kind), icon=icon, color=color)


DEFAULT_CATEGORIES = [
    # Income categories
    _category("income-salary", "Salary", "income", "Briefcase", "#00B894"),
    _category("income-freelance", "Freelance", "income", "Laptop", "#55EFC4"),
    _category("income-investments", "Investments", "income", "TrendingUp", "#00CEC9"),
    _category("income-gifts", "Gifts", "income", "Gift", "#74B9FF"),
    _category("income-other", "Other Income", "income", "Plus", "#6C5CE7"),
    # Expense categories
    _category("expense-food", "Food & Dining", "expense", "Utensils", "#FF7675"),
    _category("expense-shopping", "Shopping", "expense", "ShoppingBag", "#FD79A8"),
    _category("expense-transportation", "Transportation", "expense", "Car", "#FDCB6E"),
    _category("expense-utilities", "Utilities", "expense", "Zap", "#E17055"),
    _category("expense-housing", "Housing", "expense", "Home", "#D63031"),
    _category("expense-entertainment", "Entertainment", "expense", "Film", "#E84393"),
    _category("expense-health", "Health", "expense", "Activity", "#FF9FF3"),
    _category("expense-education", "Education", "expense", "Book", "#F368E0"),
    _category("expense-other", "Other Expenses", "expense", "MoreHorizontal", "#636E72"),
]


class CategoryStore(PersistedStore):
    """CRUD over categories, seeded with the default set."""

    def __init__(
        self,
        storage: StateStorageInterface,
        key: str = "category-storage",
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(storage, key, audit_logger)
        loaded = self._load_records("categories", Category)
        if loaded is None:
            loaded = [category.model_copy() for category in DEFAULT_CATEGORIES]
        self._categories: list[Category] = loaded

    def _dump_state(self) -> dict:
        return {"categories": [c.model_dump(mode="json") for c in self._categories]}

    def _index_of(self, category_id: str) -> Optional[int]:
        for i, category in enumerate(self._categories):
            if category.id == category_id:
                return i
        return None

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    def get_category(self, category_id: str) -> Optional[Category]:
        i = self._index_of(category_id)
        return self._categories[i] if i is not None else None

    def categories_for_type(self, transaction_type: TransactionType) -> list[Category]:
        """Choices offered when entering a transaction of this type."""
        return [c for c in self._categories if c.type == transaction_type]

    def frequent_categories(self, transaction_type: TransactionType) -> list[Category]:
        return [
            c for c in self._categories
            if c.is_frequent and c.type == transaction_type
        ]

    def display_name(self, category_id: str) -> str:
        category = self.get_category(category_id)
        return category.name if category else UNCATEGORIZED_LABEL

    def add_category(self, data: CategoryCreate) -> Category:
        category = Category(**data.model_dump())
        self._categories.append(category)
        self._persist()
        self._audit.log(AuditEventBuilder.category_changed(
            AuditEventType.CATEGORY_ADDED, category.id, category.name
        ))
        return category

    def update_category(self, category_id: str, update: CategoryUpdate) -> Optional[Category]:
        i = self._index_of(category_id)
        if i is None:
            return None

        updated = self._categories[i].model_copy(update=update.changes())
        self._categories[i] = updated
        self._persist()
        self._audit.log(AuditEventBuilder.category_changed(
            AuditEventType.CATEGORY_UPDATED, updated.id, updated.name
        ))
        return updated

    def delete_category(self, category_id: str) -> bool:
        i = self._index_of(category_id)
        if i is None:
            return False

        category = self._categories.pop(i)
        self._persist()
        self._audit.log(AuditEventBuilder.category_changed(
            AuditEventType.CATEGORY_DELETED, category.id, category.name
        ))
        return True
