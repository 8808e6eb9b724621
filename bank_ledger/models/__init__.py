"""
Data Models Package

Pydantic models for accounts, transactions, operation outcomes and
audit events.
"""

from bank_ledger.models.account import Account, AccountType
from bank_ledger.models.transaction import EXTERNAL_ACCOUNT_ID, Transaction
from bank_ledger.models.outcome import (
    LedgerErrorCode,
    OperationResult,
    ValidationIssue,
)
from bank_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Account",
    "AccountType",
    "EXTERNAL_ACCOUNT_ID",
    "Transaction",
    # Outcomes
    "LedgerErrorCode",
    "OperationResult",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
