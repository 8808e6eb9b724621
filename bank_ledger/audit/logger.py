"""
Audit Logger

Every change to the ledger is logged as a structured event, together
with rejected requests and storage failures. Logging never raises into
the ledger: a broken log handler must not stop a deposit.

Events related to one operator action (both legs of a transfer) share a
correlation id.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional, Union
from uuid import UUID, uuid4

import structlog

from bank_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def _processors(json_output: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging
structlog.configure(
    processors=_processors(json_output=True),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(
    level: str = "WARNING",
    log_file: Union[str, Path, None] = None,
    json_output: bool = True,
) -> None:
    """
    Route structured logs to stderr or a file.

    Called once by the CLI before the ledger is built. Loggers that were
    already used keep their previous configuration.
    """
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Writes each AuditEvent to the structured log at the level matching
    its severity.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize audit logger.

        Args:
            logger: structlog-style logger to write to. Defaults to the
                    "bank_ledger.audit" logger.
        """
        self._logger = logger or structlog.get_logger("bank_ledger.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the log handler failed; the failure is reported
        on stderr and otherwise ignored.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            print(f"WARNING: Failed to write audit event: {e}", file=sys.stderr)
            return False

        return True

    def log_account_created(
        self,
        account_id: int,
        holder_name: str,
        account_type: str,
        initial_deposit: float,
    ) -> None:
        """Log account creation."""
        self.log(AuditEventBuilder.account_created(
            account_id=account_id,
            holder_name=holder_name,
            account_type=account_type,
            initial_deposit=initial_deposit,
        ))

    def log_account_deleted(self, account_id: int, final_balance: float) -> None:
        """Log account deletion."""
        self.log(AuditEventBuilder.account_deleted(
            account_id=account_id,
            final_balance=final_balance,
        ))

    def log_deposit(
        self,
        account_id: int,
        amount: float,
        balance: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a recorded deposit."""
        self.log(AuditEventBuilder.deposit_recorded(
            account_id=account_id,
            amount=amount,
            balance=balance,
            correlation_id=correlation_id,
        ))

    def log_withdrawal(
        self,
        account_id: int,
        amount: float,
        balance: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a recorded withdrawal."""
        self.log(AuditEventBuilder.withdrawal_recorded(
            account_id=account_id,
            amount=amount,
            balance=balance,
            correlation_id=correlation_id,
        ))

    def log_transfer_completed(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: float,
        correlation_id: UUID,
    ) -> None:
        """Log a transfer whose both legs went through."""
        self.log(AuditEventBuilder.transfer_completed(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_transfer_incomplete(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: float,
        error_code: str,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        """Log a transfer that withdrew funds but failed to deposit them."""
        self.log(AuditEventBuilder.transfer_incomplete(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            error_code=error_code,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_rejected(
        self,
        operation: str,
        error_code: str,
        reason: str,
        account_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a request refused by validation."""
        self.log(AuditEventBuilder.operation_rejected(
            operation=operation,
            error_code=error_code,
            reason=reason,
            account_id=account_id,
            correlation_id=correlation_id,
        ))

    def log_ledger_loaded(
        self,
        account_count: int,
        transaction_count: int,
        next_account_id: int,
    ) -> None:
        """Log a startup load."""
        self.log(AuditEventBuilder.ledger_loaded(
            account_count=account_count,
            transaction_count=transaction_count,
            next_account_id=next_account_id,
        ))

    def log_load_failed(self, collection: str, error_message: str) -> None:
        """Log a collection that could not be loaded."""
        self.log(AuditEventBuilder.load_failed(
            collection=collection,
            error_message=error_message,
        ))

    def log_save_failed(
        self,
        collection: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a collection that could not be saved."""
        self.log(AuditEventBuilder.save_failed(
            collection=collection,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of an operator action that spans several
    ledger operations (a transfer) and pass it to each of them.
    """
    return uuid4()
