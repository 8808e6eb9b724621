"""
Audit Models for the Bank Ledger

Every change to the ledger, every rejected request and every storage
problem produces an AuditEvent. Events are written to the structured
log by AuditLogger; they are append-only and never edited.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Accounts
    ACCOUNT_CREATED = "account_created"
    ACCOUNT_DELETED = "account_deleted"

    # Money movement
    DEPOSIT_RECORDED = "deposit_recorded"
    WITHDRAWAL_RECORDED = "withdrawal_recorded"
    TRANSFER_COMPLETED = "transfer_completed"
    TRANSFER_INCOMPLETE = "transfer_incomplete"

    # Rejected requests
    OPERATION_REJECTED = "operation_rejected"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    `entity_id` is an account number for account and money events and
    is left empty for ledger-wide events such as loads and saves.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g. 'account', 'ledger')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Account number this event relates to"
    )

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Shared by all events of one operator action (e.g. both legs of a transfer)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.account_created(1001, "Asha", "saving", 100.0)
        event = AuditEventBuilder.save_failed("accounts", "disk full")
    """

    @staticmethod
    def account_created(
        account_id: int,
        holder_name: str,
        account_type: str,
        initial_deposit: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_CREATED,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Account {account_id} created for {holder_name}",
            details={
                "holder_name": holder_name,
                "account_type": account_type,
                "initial_deposit": initial_deposit,
            },
        )

    @staticmethod
    def account_deleted(
        account_id: int,
        final_balance: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_DELETED,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Account {account_id} deleted",
            details={
                "final_balance": final_balance,
            },
        )

    @staticmethod
    def deposit_recorded(
        account_id: int,
        amount: float,
        balance: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEPOSIT_RECORDED,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Deposited {amount} into account {account_id}",
            details={
                "amount": amount,
                "balance": balance,
            },
        )

    @staticmethod
    def withdrawal_recorded(
        account_id: int,
        amount: float,
        balance: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WITHDRAWAL_RECORDED,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"Withdrew {amount} from account {account_id}",
            details={
                "amount": amount,
                "balance": balance,
            },
        )

    @staticmethod
    def transfer_completed(
        from_account_id: int,
        to_account_id: int,
        amount: float,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_COMPLETED,
            entity_type="account",
            entity_id=from_account_id,
            correlation_id=correlation_id,
            description=f"Transferred {amount} from {from_account_id} to {to_account_id}",
            details={
                "from_account_id": from_account_id,
                "to_account_id": to_account_id,
                "amount": amount,
            },
        )

    @staticmethod
    def transfer_incomplete(
        from_account_id: int,
        to_account_id: int,
        amount: float,
        error_code: str,
        reason: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        """The withdrawal leg went through and the deposit leg did not."""
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_INCOMPLETE,
            severity=AuditSeverity.ERROR,
            entity_type="account",
            entity_id=from_account_id,
            correlation_id=correlation_id,
            description=(
                f"Transfer of {amount} from {from_account_id} to {to_account_id} "
                "failed after the withdrawal; funds were not restored"
            ),
            details={
                "from_account_id": from_account_id,
                "to_account_id": to_account_id,
                "amount": amount,
            },
            error_code=error_code,
            error_message=reason,
        )

    @staticmethod
    def operation_rejected(
        operation: str,
        error_code: str,
        reason: str,
        account_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPERATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="account",
            entity_id=account_id,
            correlation_id=correlation_id,
            description=f"{operation} rejected: {error_code}",
            details={
                "operation": operation,
            },
            error_code=error_code,
            error_message=reason,
        )

    @staticmethod
    def ledger_loaded(
        account_count: int,
        transaction_count: int,
        next_account_id: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            description=(
                f"Loaded {account_count} accounts and {transaction_count} transactions"
            ),
            details={
                "account_count": account_count,
                "transaction_count": transaction_count,
                "next_account_id": next_account_id,
            },
        )

    @staticmethod
    def load_failed(
        collection: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description=f"Loading {collection} failed; starting with none",
            details={
                "collection": collection,
            },
            error_message=error_message,
        )

    @staticmethod
    def save_failed(
        collection: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            correlation_id=correlation_id,
            description=f"Saving {collection} failed; changes are only in memory",
            details={
                "collection": collection,
            },
            error_message=error_message,
        )
