"""User preference models."""

from typing import Literal

from pydantic import BaseModel, Field


class Currency(BaseModel):
    code: str = Field(..., min_length=3, max_length=3)
    symbol: str
    name: str


AVAILABLE_CURRENCIES: list[Currency] = [
    Currency(code="USD", symbol="$", name="US Dollar"),
    Currency(code="VND", symbol="₫", name="Vietnamese Dong"),
    Currency(code="EUR", symbol="€", name="Euro"),
    Currency(code="GBP", symbol="£", name="British Pound"),
    Currency(code="JPY", symbol="¥", name="Japanese Yen"),
    Currency(code="CNY", symbol="¥", name="Chinese Yuan"),
    Currency(code="INR", symbol="₹", name="Indian Rupee"),
    Currency(code="CAD", symbol="C$", name="Canadian Dollar"),
    Currency(code="AUD", symbol="A$", name="Australian Dollar"),
    Currency(code="BRL", symbol="R$", name="Brazilian Real"),
    Currency(code="RUB", symbol="₽", name="Russian Ruble"),
]


Theme = Literal["light", "dark"]


class UserSettings(BaseModel):
    """Display preferences. USD, English and the light theme by default."""

    currency: Currency = Field(default_factory=lambda: AVAILABLE_CURRENCIES[0].model_copy())
    language: str = Field(default="en", min_length=2, max_length=10)
    theme: Theme = "light"
