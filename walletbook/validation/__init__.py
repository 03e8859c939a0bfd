"""Validation package."""

from walletbook.validation.validator import TransactionValidator

__all__ = ["TransactionValidator"]
