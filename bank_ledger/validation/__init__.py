"""Validation package."""

from bank_ledger.validation.validator import LedgerValidator

__all__ = ["LedgerValidator"]
