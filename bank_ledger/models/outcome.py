"""
Operation Outcome Models

Ledger operations never raise for bad input. They return an
OperationResult that says whether the operation went through and, if
not, why. Validation problems are described by ValidationIssue objects
carrying the same error codes.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from bank_ledger.models.account import Account
from bank_ledger.models.transaction import Transaction


class LedgerErrorCode(str, Enum):
    """Reasons a ledger operation can be rejected."""
    INVALID_ACCOUNT_TYPE = "invalid_account_type"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    ACCOUNT_NOT_FOUND = "account_not_found"
    INVALID_HOLDER_NAME = "invalid_holder_name"


class ValidationIssue(BaseModel):
    """A single input problem found before an operation is applied."""

    field: str = Field(
        ...,
        description="Input the issue relates to (e.g. 'amount')"
    )
    error_code: LedgerErrorCode = Field(
        ...,
        description="Machine-readable reason"
    )
    message: str = Field(
        ...,
        description="Message suitable for showing to the operator"
    )


class OperationResult(BaseModel):
    """
    Outcome of a ledger operation.

    `persisted` is False when the in-memory change went through but
    writing it to storage failed. The ledger is then ahead of the files
    on disk until the next successful save.
    """

    success: bool
    message: str = ""
    error_code: Optional[LedgerErrorCode] = None

    account: Optional[Account] = None
    balance: Optional[float] = None
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Transactions appended by this operation"
    )

    persisted: bool = True
    withdrawal_committed: bool = Field(
        default=False,
        description="Transfer only: the withdrawal leg went through"
    )

    @classmethod
    def rejected(cls, issue: ValidationIssue) -> "OperationResult":
        return cls(
            success=False,
            error_code=issue.error_code,
            message=issue.message,
        )

    @property
    def failed(self) -> bool:
        return not self.success
