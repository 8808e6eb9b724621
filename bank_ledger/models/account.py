"""
Account Model

An account is identified by an integer number handed out by the ledger
store, belongs to one holder, and carries a single floating point balance.

Accounts are persisted as one comma-separated line each:

    account_id,holder_name,account_type,balance

There is no escaping. The holder name is the only free-text field, so a
record is parsed from both ends: the first field is the id, the last two
are the type and the balance, and everything in between is the name.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


RECORD_SEPARATOR = ","


class AccountType(str, Enum):
    """
    Supported account types.

    Input is matched case-insensitively; the stored value is always
    the lower-case form.
    """
    SAVING = "saving"
    CURRENT = "current"

    @classmethod
    def parse(cls, value: str) -> "AccountType":
        """Resolve user or file input to an AccountType (raises ValueError)."""
        return cls(value.strip().lower())

    @classmethod
    def is_valid(cls, value: str) -> bool:
        try:
            cls.parse(value)
        except (ValueError, AttributeError):
            return False
        return True


class Account(BaseModel):
    """
    A ledger account.

    The balance is mutated in place by the ledger store; nothing else
    should hold on to an Account it got from the store and change it.
    """

    account_id: int = Field(
        ...,
        ge=0,
        description="Unique account number assigned by the ledger store"
    )
    holder_name: str = Field(
        ...,
        description="Name of the account holder"
    )
    account_type: AccountType = Field(
        ...,
        description="Saving or current"
    )
    balance: float = Field(
        default=0.0,
        description="Current balance"
    )

    @field_validator("account_type", mode="before")
    @classmethod
    def normalize_account_type(cls, v):
        """Accept 'Saving', ' CURRENT ' and friends."""
        if isinstance(v, str):
            return AccountType.parse(v)
        return v

    @field_validator("holder_name")
    @classmethod
    def single_line_name(cls, v: str) -> str:
        if "\n" in v or "\r" in v:
            raise ValueError("Holder name must fit on a single line")
        return v

    def describe(self) -> str:
        """Human-readable one-line summary used by the account listing."""
        return (
            f"Account Number: {self.account_id}, "
            f"Holder Name: {self.holder_name}, "
            f"Type: {self.account_type.value}, "
            f"Balance: {self.balance}"
        )

    def to_record(self) -> str:
        """Serialize to a single storage line (without the newline)."""
        return RECORD_SEPARATOR.join([
            str(self.account_id),
            self.holder_name,
            self.account_type.value,
            str(float(self.balance)),
        ])

    @classmethod
    def from_record(cls, line: str) -> "Account":
        """
        Parse a storage line produced by to_record().

        Raises:
            ValueError: If the line does not hold a valid account
                (pydantic's ValidationError is a ValueError subclass).
        """
        account_id, sep, rest = line.partition(RECORD_SEPARATOR)
        if not sep:
            raise ValueError(f"Expected 4 comma-separated fields, got: {line!r}")

        parts = rest.rsplit(RECORD_SEPARATOR, 2)
        if len(parts) != 3:
            raise ValueError(f"Expected 4 comma-separated fields, got: {line!r}")
        holder_name, account_type, balance = parts

        return cls(
            account_id=int(account_id),
            holder_name=holder_name,
            account_type=account_type,
            balance=float(balance),
        )
