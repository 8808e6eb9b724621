"""
Ledger Store

Owns the accounts and the transaction log, applies every operation to
them, and writes the affected collections back to storage after each
successful change.

Rules the store keeps:
- Account numbers come from a counter owned by the store. The counter
  starts at the configured floor and is raised past every account number
  found in storage, so numbers are never handed out twice, even after
  the account holding one was deleted.
- Rejected operations change nothing and write nothing.
- Successful operations rewrite the whole affected collection at once.
  Account creation and deletion write the accounts; deposits and
  withdrawals write both collections.
- A save failure does not undo the change. The result comes back with
  persisted=False and has_unsaved_changes stays set until a later save
  of that collection succeeds.
- A transfer is a withdrawal followed by a deposit. If the deposit is
  rejected the withdrawal stays in place and the money has left the
  ledger. The result says so (withdrawal_committed=True) and an error
  is logged; nothing puts the money back.
"""

from pathlib import Path
from typing import Optional, Union
from uuid import UUID

from bank_ledger.audit import AuditLogger, create_correlation_id
from bank_ledger.config import get_settings
from bank_ledger.models.account import Account, AccountType
from bank_ledger.models.outcome import OperationResult, ValidationIssue
from bank_ledger.models.transaction import EXTERNAL_ACCOUNT_ID, Transaction
from bank_ledger.services.storage import (
    AccountStorageInterface,
    FlatFileAccountStorage,
    FlatFileTransactionStorage,
    LoadError,
    PersistenceWriteError,
    TransactionStorageInterface,
)
from bank_ledger.validation import LedgerValidator


ACCOUNTS = "accounts"
TRANSACTIONS = "transactions"

UNSAVED_WARNING = (
    "WARNING: the change could not be saved to storage and exists only in memory."
)


class LedgerStore:
    """
    In-memory ledger backed by account and transaction storage.

    Single-threaded. Callers that share one store between threads must
    serialize every call themselves, saves included.
    """

    def __init__(
        self,
        account_storage: AccountStorageInterface,
        transaction_storage: TransactionStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[LedgerValidator] = None,
        account_id_floor: Optional[int] = None,
    ):
        self._account_storage = account_storage
        self._transaction_storage = transaction_storage
        self._audit = audit_logger or AuditLogger()
        self._validator = validator or LedgerValidator()

        if account_id_floor is None:
            account_id_floor = get_settings().app.account_id_floor
        self._account_id_floor = account_id_floor
        self._last_account_id = account_id_floor

        self._accounts: list[Account] = []
        self._transactions: list[Transaction] = []
        self._unsaved: set[str] = set()
        self.load_errors: list[str] = []

    # ------------------------------------------------------------------ #
    # Loading and saving
    # ------------------------------------------------------------------ #
    def load(self) -> list[str]:
        """
        Replace in-memory state with what storage holds.

        A collection that fails to load comes up empty; its error is
        logged, kept in `load_errors` and returned. Nothing is raised.
        """
        errors = []

        try:
            accounts = self._account_storage.load_accounts()
        except LoadError as e:
            accounts = []
            errors.append(f"Error loading {ACCOUNTS}: {e}")
            self._audit.log_load_failed(ACCOUNTS, str(e))

        try:
            transactions = self._transaction_storage.load_transactions()
        except LoadError as e:
            transactions = []
            errors.append(f"Error loading {TRANSACTIONS}: {e}")
            self._audit.log_load_failed(TRANSACTIONS, str(e))

        self._accounts = accounts
        self._transactions = transactions
        self._last_account_id = max(
            [self._account_id_floor]
            + [account.account_id for account in accounts]
            + [txn.from_account_id for txn in transactions]
            + [txn.to_account_id for txn in transactions]
        )
        self._unsaved.clear()
        self.load_errors = errors

        self._audit.log_ledger_loaded(
            account_count=len(accounts),
            transaction_count=len(transactions),
            next_account_id=self.next_account_id,
        )
        return errors

    def save(self) -> bool:
        """Write both collections. Returns True if both writes succeeded."""
        accounts_saved = self._save_accounts()
        transactions_saved = self._save_transactions()
        return accounts_saved and transactions_saved

    def _save_accounts(self, correlation_id: Optional[UUID] = None) -> bool:
        try:
            self._account_storage.save_accounts(self._accounts)
        except PersistenceWriteError as e:
            self._unsaved.add(ACCOUNTS)
            self._audit.log_save_failed(ACCOUNTS, str(e), correlation_id)
            return False
        self._unsaved.discard(ACCOUNTS)
        return True

    def _save_transactions(self, correlation_id: Optional[UUID] = None) -> bool:
        try:
            self._transaction_storage.save_transactions(self._transactions)
        except PersistenceWriteError as e:
            self._unsaved.add(TRANSACTIONS)
            self._audit.log_save_failed(TRANSACTIONS, str(e), correlation_id)
            return False
        self._unsaved.discard(TRANSACTIONS)
        return True

    @property
    def has_unsaved_changes(self) -> bool:
        return bool(self._unsaved)

    @property
    def unsaved_collections(self) -> list[str]:
        return sorted(self._unsaved)

    @property
    def next_account_id(self) -> int:
        """The number the next created account will get."""
        return self._last_account_id + 1

    # ------------------------------------------------------------------ #
    # Accounts
    # ------------------------------------------------------------------ #
    def create_account(
        self,
        holder_name: str,
        account_type: str,
        initial_deposit: float,
    ) -> OperationResult:
        """Open an account with a positive initial deposit."""
        issue = self._validator.validate_new_account(
            holder_name, account_type, initial_deposit
        )
        if issue:
            return self._reject("create_account", issue)

        self._last_account_id += 1
        account = Account(
            account_id=self._last_account_id,
            holder_name=holder_name,
            account_type=AccountType.parse(account_type),
            balance=float(initial_deposit),
        )
        self._accounts.append(account)
        persisted = self._save_accounts()

        self._audit.log_account_created(
            account_id=account.account_id,
            holder_name=account.holder_name,
            account_type=account.account_type.value,
            initial_deposit=account.balance,
        )
        return OperationResult(
            success=True,
            message=_with_save_warning(
                f"Account created successfully. Account Number: {account.account_id}",
                persisted,
            ),
            account=account,
            balance=account.balance,
            persisted=persisted,
        )

    def find_account(self, account_id: int) -> Optional[Account]:
        index = self._find_index(account_id)
        return None if index is None else self._accounts[index]

    def _find_index(self, account_id: int) -> Optional[int]:
        for index, account in enumerate(self._accounts):
            if account.account_id == account_id:
                return index
        return None

    def delete_account(self, account_id: int) -> OperationResult:
        """Remove an account. Its transactions stay in the log."""
        index = self._find_index(account_id)
        if index is None:
            return self._reject(
                "delete_account",
                self._validator.account_not_found(account_id),
                account_id=account_id,
            )

        account = self._accounts.pop(index)
        persisted = self._save_accounts()

        self._audit.log_account_deleted(account.account_id, account.balance)
        return OperationResult(
            success=True,
            message=_with_save_warning("Account deleted successfully.", persisted),
            account=account,
            persisted=persisted,
        )

    def check_balance(self, account_id: int) -> Optional[float]:
        """Balance of the account, or None if there is no such account."""
        account = self.find_account(account_id)
        return None if account is None else account.balance

    def list_accounts(self) -> list[Account]:
        """Copies of all accounts in creation order."""
        return [account.model_copy() for account in self._accounts]

    def list_transactions(self) -> list[Transaction]:
        """All transactions in the order they were recorded."""
        return list(self._transactions)

    def total_balance(self) -> float:
        return sum(account.balance for account in self._accounts)

    # ------------------------------------------------------------------ #
    # Money movement
    # ------------------------------------------------------------------ #
    def deposit(
        self,
        account_id: int,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> OperationResult:
        """Add money from outside the ledger to an account."""
        account = self.find_account(account_id)
        if account is None:
            return self._reject(
                "deposit",
                self._validator.account_not_found(account_id),
                account_id=account_id,
                correlation_id=correlation_id,
            )

        issue = self._validator.check_amount(amount)
        if issue:
            return self._reject(
                "deposit", issue, account_id=account_id, correlation_id=correlation_id
            )

        amount = float(amount)
        account.balance += amount
        transaction = Transaction(
            from_account_id=EXTERNAL_ACCOUNT_ID,
            to_account_id=account_id,
            amount=amount,
        )
        self._transactions.append(transaction)
        persisted = self._persist_money_movement(correlation_id)

        self._audit.log_deposit(account_id, amount, account.balance, correlation_id)
        return OperationResult(
            success=True,
            message=_with_save_warning(f"{amount} deposited successfully.", persisted),
            account=account,
            balance=account.balance,
            transactions=[transaction],
            persisted=persisted,
        )

    def withdraw(
        self,
        account_id: int,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> OperationResult:
        """Take money out of an account and out of the ledger."""
        account = self.find_account(account_id)
        if account is None:
            return self._reject(
                "withdraw",
                self._validator.account_not_found(account_id),
                account_id=account_id,
                correlation_id=correlation_id,
            )

        issue = self._validator.validate_withdrawal(account, amount)
        if issue:
            return self._reject(
                "withdraw", issue, account_id=account_id, correlation_id=correlation_id
            )

        amount = float(amount)
        account.balance -= amount
        transaction = Transaction(
            from_account_id=account_id,
            to_account_id=EXTERNAL_ACCOUNT_ID,
            amount=amount,
        )
        self._transactions.append(transaction)
        persisted = self._persist_money_movement(correlation_id)

        self._audit.log_withdrawal(account_id, amount, account.balance, correlation_id)
        return OperationResult(
            success=True,
            message=_with_save_warning(f"{amount} withdrawn successfully.", persisted),
            account=account,
            balance=account.balance,
            transactions=[transaction],
            persisted=persisted,
        )

    def transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: float,
    ) -> OperationResult:
        """
        Move money between two accounts as a withdrawal then a deposit.

        Not atomic: when the deposit leg fails the withdrawal is kept.
        """
        correlation_id = create_correlation_id()

        withdrawal = self.withdraw(from_account_id, amount, correlation_id=correlation_id)
        if withdrawal.failed:
            return OperationResult(
                success=False,
                error_code=withdrawal.error_code,
                message=f"Transfer failed. {withdrawal.message}",
            )

        deposit = self.deposit(to_account_id, amount, correlation_id=correlation_id)
        if deposit.failed:
            self._audit.log_transfer_incomplete(
                from_account_id=from_account_id,
                to_account_id=to_account_id,
                amount=float(amount),
                error_code=deposit.error_code.value,
                reason=deposit.message,
                correlation_id=correlation_id,
            )
            return OperationResult(
                success=False,
                error_code=deposit.error_code,
                message=(
                    f"Transfer failed. {deposit.message} "
                    f"{float(amount)} was withdrawn from account {from_account_id} "
                    "and has not been restored."
                ),
                account=withdrawal.account,
                balance=withdrawal.balance,
                transactions=withdrawal.transactions,
                persisted=withdrawal.persisted,
                withdrawal_committed=True,
            )

        self._audit.log_transfer_completed(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=float(amount),
            correlation_id=correlation_id,
        )
        persisted = withdrawal.persisted and deposit.persisted
        return OperationResult(
            success=True,
            message=_with_save_warning("Transfer Successful.", persisted),
            account=withdrawal.account,
            balance=withdrawal.balance,
            transactions=withdrawal.transactions + deposit.transactions,
            persisted=persisted,
            withdrawal_committed=True,
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _persist_money_movement(self, correlation_id: Optional[UUID]) -> bool:
        accounts_saved = self._save_accounts(correlation_id)
        transactions_saved = self._save_transactions(correlation_id)
        return accounts_saved and transactions_saved

    def _reject(
        self,
        operation: str,
        issue: ValidationIssue,
        account_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> OperationResult:
        self._audit.log_rejected(
            operation=operation,
            error_code=issue.error_code.value,
            reason=issue.message,
            account_id=account_id,
            correlation_id=correlation_id,
        )
        return OperationResult.rejected(issue)


def _with_save_warning(message: str, persisted: bool) -> str:
    return message if persisted else f"{message} {UNSAVED_WARNING}"


def create_ledger_store(
    accounts_path: Union[str, Path, None] = None,
    transactions_path: Union[str, Path, None] = None,
    account_id_floor: Optional[int] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> LedgerStore:
    """
    Factory function to build a flat-file ledger store and load it.

    Paths and the account number floor default to the configured
    settings. Missing parent directories are created.

    Returns:
        A loaded LedgerStore; check `load_errors` for collections that
        could not be read.
    """
    settings = get_settings()
    storage_settings = settings.storage

    accounts_path = Path(accounts_path or storage_settings.accounts_path)
    transactions_path = Path(transactions_path or storage_settings.transactions_path)
    for path in (accounts_path, transactions_path):
        path.parent.mkdir(parents=True, exist_ok=True)

    if account_id_floor is None:
        account_id_floor = settings.app.account_id_floor

    store = LedgerStore(
        account_storage=FlatFileAccountStorage(accounts_path),
        transaction_storage=FlatFileTransactionStorage(transactions_path),
        audit_logger=audit_logger or AuditLogger(),
        account_id_floor=account_id_floor,
    )
    store.load()
    return store
