"""Tests for the category and settings stores."""

from walletbook.models.audit import AuditEventType
from walletbook.models.ledger import CategoryCreate, CategoryUpdate, TransactionType
from walletbook.models.preferences import AVAILABLE_CURRENCIES
from walletbook.stores import CategoryStore, SettingsStore
from walletbook.stores.categories import DEFAULT_CATEGORIES

from tests.conftest import make_transaction


class TestCategoryStore:

    def test_seeded_with_defaults(self, category_store):
        assert len(category_store.categories) == len(DEFAULT_CATEGORIES) == 14
        assert category_store.get_category("expense-food").name == "Food & Dining"

    def test_categories_for_type(self, category_store):
        income = category_store.categories_for_type(TransactionType.INCOME)
        assert {c.id for c in income} == {
            "income-salary",
            "income-freelance",
            "income-investments",
            "income-gifts",
            "income-other",
        }

    def test_add_update_delete(self, category_store, audit_storage):
        category = category_store.add_category(
            CategoryCreate(name="Pets", type=TransactionType.EXPENSE, is_frequent=True)
        )
        assert category_store.frequent_categories(TransactionType.EXPENSE) == [category]

        updated = category_store.update_category(category.id, CategoryUpdate(name="Pet Care"))
        assert updated.name == "Pet Care"
        assert updated.is_frequent is True

        assert category_store.delete_category(category.id) is True
        assert category_store.get_category(category.id) is None
        assert audit_storage.events[-1].event_type == AuditEventType.CATEGORY_DELETED

    def test_unknown_ids(self, category_store):
        assert category_store.update_category("ghost", CategoryUpdate(name="X")) is None
        assert category_store.delete_category("ghost") is False

    def test_deleted_category_leaves_transactions_uncategorized(self, category_store, ledger):
        transaction = ledger.add_transaction(make_transaction(5, category_id="expense-health"))
        category_store.delete_category("expense-health")

        assert ledger.get_transaction(transaction.id).category_id == "expense-health"
        assert category_store.display_name("expense-health") == "Uncategorized"

    def test_reload(self, state_storage, category_store):
        category_store.delete_category("expense-other")
        reloaded = CategoryStore(state_storage)
        assert reloaded.get_category("expense-other") is None
        assert len(reloaded.categories) == 13


class TestSettingsStore:

    def test_defaults(self, state_storage):
        store = SettingsStore(state_storage)
        assert store.settings.currency == AVAILABLE_CURRENCIES[0]
        assert store.settings.theme == "light"

    def test_update_currency_by_code(self, state_storage):
        store = SettingsStore(state_storage)
        settings = store.update_currency("eur")
        assert settings.currency.symbol == "€"
        assert SettingsStore(state_storage).settings.currency.code == "EUR"

    def test_unknown_currency_is_ignored(self, state_storage):
        store = SettingsStore(state_storage)
        assert store.update_currency("XYZ") is None
        assert store.settings.currency.code == "USD"

    def test_update_theme_and_language(self, state_storage, audit_logger, audit_storage):
        store = SettingsStore(state_storage, audit_logger=audit_logger)
        store.update_theme("dark")
        store.update_language("vi")

        reloaded = SettingsStore(state_storage)
        assert reloaded.settings.theme == "dark"
        assert reloaded.settings.language == "vi"
        assert audit_storage.events[-1].event_type == AuditEventType.SETTINGS_UPDATED
