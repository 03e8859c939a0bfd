"""
Configuration Management for walletbook

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Each concern gets its own settings class and env prefix, so a partially
configured environment still loads whatever it can.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from walletbook.models.ledger import SearchMode


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WALLETBOOK_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding one JSON file per store"
    )

    # Storage keys, one per store
    transactions_key: str = Field(
        default="transaction-storage",
        description="Key for the transaction ledger"
    )
    wallets_key: str = Field(
        default="wallet-storage",
        description="Key for the wallet collection"
    )
    categories_key: str = Field(
        default="category-storage",
        description="Key for the category collection"
    )
    settings_key: str = Field(
        default="settings-storage",
        description="Key for user settings"
    )
    audit_log_name: str = Field(
        default="audit-log.jsonl",
        description="File name of the append-only audit log"
    )

    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed state write is retried"
    )


class LedgerSettings(BaseSettings):
    """Ledger filtering and validation behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="WALLETBOOK_LEDGER_",
        extra="ignore"
    )

    week_start_day: int = Field(
        default=6,
        ge=0,
        le=6,
        description="First day of the week (0=Monday ... 6=Sunday)"
    )
    search_mode: SearchMode = Field(
        default=SearchMode.INTERSECT,
        description="How a search query combines with other filters"
    )
    recent_transactions_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of recent transactions shown on the dashboard"
    )

    # Validation thresholds
    future_date_tolerance_days: int = Field(
        default=7,
        ge=0,
        description="How many days in the future a transaction date can be"
    )
    max_transaction_amount: Decimal = Field(
        default=Decimal("1000000000"),
        gt=0,
        description="Largest amount accepted without a warning"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    audit_enabled: bool = Field(
        default=True,
        description="Persist audit events next to the state files"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}
    settings = get_settings()

    for name in ("storage", "ledger", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
