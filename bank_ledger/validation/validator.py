"""
Input Validation for Ledger Operations

Checks run before the ledger store touches any state. A check returns a
ValidationIssue describing the first problem it found, or None when the
input is acceptable. Nothing here mutates an account.

IMPORTANT: Validation never fixes input. A negative amount is rejected,
not made positive.
"""

import math
from typing import Optional

from bank_ledger.models.account import Account, AccountType
from bank_ledger.models.outcome import LedgerErrorCode, ValidationIssue


class LedgerValidator:
    """Validates operator input for the ledger store."""

    def check_account_type(self, account_type: str) -> Optional[ValidationIssue]:
        if not AccountType.is_valid(account_type):
            allowed = " or ".join(f"'{t.value}'" for t in AccountType)
            return ValidationIssue(
                field="account_type",
                error_code=LedgerErrorCode.INVALID_ACCOUNT_TYPE,
                message=f"Invalid account type. Account type must be {allowed}.",
            )
        return None

    def check_holder_name(self, holder_name: str) -> Optional[ValidationIssue]:
        if "\n" in holder_name or "\r" in holder_name:
            return ValidationIssue(
                field="holder_name",
                error_code=LedgerErrorCode.INVALID_HOLDER_NAME,
                message="Invalid holder name. The name must fit on a single line.",
            )
        try:
            holder_name.encode("utf-8")
        except UnicodeEncodeError:
            return ValidationIssue(
                field="holder_name",
                error_code=LedgerErrorCode.INVALID_HOLDER_NAME,
                message="Invalid holder name. The name contains characters that cannot be stored.",
            )
        return None

    def check_amount(
        self,
        amount: float,
        field: str = "amount",
    ) -> Optional[ValidationIssue]:
        """Amounts must be finite and strictly positive."""
        if not isinstance(amount, (int, float)) or isinstance(amount, bool):
            return ValidationIssue(
                field=field,
                error_code=LedgerErrorCode.INVALID_AMOUNT,
                message=f"Invalid {field.replace('_', ' ')}. A number is required.",
            )
        if not math.isfinite(amount) or amount <= 0:
            return ValidationIssue(
                field=field,
                error_code=LedgerErrorCode.INVALID_AMOUNT,
                message=f"Invalid {field.replace('_', ' ')}. It cannot be zero or negative.",
            )
        return None

    def check_sufficient_funds(
        self,
        account: Account,
        amount: float,
    ) -> Optional[ValidationIssue]:
        if amount > account.balance:
            return ValidationIssue(
                field="amount",
                error_code=LedgerErrorCode.INSUFFICIENT_FUNDS,
                message=(
                    f"Insufficient balance. Account {account.account_id} holds "
                    f"{account.balance}, requested {amount}."
                ),
            )
        return None

    def account_not_found(self, account_id: int) -> ValidationIssue:
        return ValidationIssue(
            field="account_id",
            error_code=LedgerErrorCode.ACCOUNT_NOT_FOUND,
            message=f"Account {account_id} not found.",
        )

    def validate_new_account(
        self,
        holder_name: str,
        account_type: str,
        initial_deposit: float,
    ) -> Optional[ValidationIssue]:
        """Checks for account creation, in the order they are reported."""
        return (
            self.check_account_type(account_type)
            or self.check_amount(initial_deposit, field="initial_deposit")
            or self.check_holder_name(holder_name)
        )

    def validate_withdrawal(
        self,
        account: Account,
        amount: float,
    ) -> Optional[ValidationIssue]:
        return self.check_amount(amount) or self.check_sufficient_funds(account, amount)
