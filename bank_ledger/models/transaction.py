"""
Transaction Model

Transactions are append-only records of money entering or leaving an
account. A deposit comes from the external account (0) and a withdrawal
goes to it. A transfer between two ledger accounts is recorded as a
withdrawal followed by a deposit, never as a single record.

Storage format, one per line:

    timestamp,from_account_id,to_account_id,amount

The timestamp is a naive local ISO-8601 datetime.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


EXTERNAL_ACCOUNT_ID = 0
RECORD_FIELD_COUNT = 4


class Transaction(BaseModel):
    """A single movement of money, immutable once recorded."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the transaction was recorded (local time, no timezone)"
    )
    from_account_id: int = Field(
        ...,
        ge=0,
        description="Source account, 0 for money coming from outside the ledger"
    )
    to_account_id: int = Field(
        ...,
        ge=0,
        description="Destination account, 0 for money leaving the ledger"
    )
    amount: float = Field(
        ...,
        gt=0,
        description="Amount moved"
    )

    def describe(self) -> str:
        """Human-readable one-line summary used by the transaction listing."""
        return (
            f"Transaction Date/Time: {self.timestamp.isoformat()}, "
            f"From Account: {self.from_account_id}, "
            f"To Account: {self.to_account_id}, "
            f"Amount: {self.amount}"
        )

    def to_record(self) -> str:
        return ",".join([
            self.timestamp.isoformat(),
            str(self.from_account_id),
            str(self.to_account_id),
            str(float(self.amount)),
        ])

    @classmethod
    def from_record(cls, line: str) -> "Transaction":
        """
        Parse a storage line produced by to_record().

        Raises:
            ValueError: If the line does not hold a valid transaction.
        """
        parts = line.split(",")
        if len(parts) != RECORD_FIELD_COUNT:
            raise ValueError(
                f"Expected {RECORD_FIELD_COUNT} comma-separated fields, got: {line!r}"
            )
        timestamp, from_account_id, to_account_id, amount = parts

        return cls(
            timestamp=datetime.fromisoformat(timestamp),
            from_account_id=int(from_account_id),
            to_account_id=int(to_account_id),
            amount=float(amount),
        )
