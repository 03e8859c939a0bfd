"""Settings Store: display currency, language and theme."""

from typing import Optional, Union

from pydantic import ValidationError

from walletbook.audit import AuditLogger
from walletbook.models.audit import AuditEventBuilder
from walletbook.models.preferences import (
    AVAILABLE_CURRENCIES,
    Currency,
    Theme,
    UserSettings,
)
from walletbook.services.storage import StateStorageInterface
from walletbook.stores.base import PersistedStore


class SettingsStore(PersistedStore):

    def __init__(
        self,
        storage: StateStorageInterface,
        key: str = "settings-storage",
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(storage, key, audit_logger)
        self._settings = self._load_settings()

    def _load_settings(self) -> UserSettings:
        state = self._load_state()
        if state is None or "settings" not in state:
            return UserSettings()
        try:
            return UserSettings.model_validate(state["settings"])
        except ValidationError as e:
            self._report_load_failure(str(e))
            return UserSettings()

    def _dump_state(self) -> dict:
        return {"settings": self._settings.model_dump(mode="json")}

    @property
    def settings(self) -> UserSettings:
        return self._settings

    def update_currency(self, currency: Union[str, Currency]) -> Optional[UserSettings]:
        """Switch currency by code or by value. Unknown codes are ignored."""
        if isinstance(currency, str):
            code = currency.upper()
            currency = next((c for c in AVAILABLE_CURRENCIES if c.code == code), None)
            if currency is None:
                self._logger.warning("unknown_currency", code=code)
                return None
        return self._update("currency", currency, currency.code)

    def update_language(self, language: str) -> UserSettings:
        return self._update("language", language, language)

    def update_theme(self, theme: Theme) -> UserSettings:
        return self._update("theme", theme, theme)

    def _update(self, field: str, value, display: str) -> UserSettings:
        self._settings = UserSettings.model_validate(
            {**self._settings.model_dump(), field: value}
        )
        self._persist()
        self._audit.log(AuditEventBuilder.settings_updated(field, display))
        return self._settings
