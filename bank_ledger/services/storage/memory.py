"""
In-Memory Storage Implementation

Keeps serialized records in lists instead of files. Records still go
through to_record()/from_record(), so a load after a save behaves the
same as with the flat file backend. Used by the tests and handy for
trying the ledger without touching the disk.
"""

from typing import Optional, Sequence

from bank_ledger.models.account import Account
from bank_ledger.models.transaction import Transaction
from bank_ledger.services.storage.interface import (
    AccountStorageInterface,
    LoadParseError,
    PersistenceWriteError,
    TransactionStorageInterface,
)


class InMemoryStorage(AccountStorageInterface, TransactionStorageInterface):
    """
    Both collections held in memory.

    Set `fail_writes` to simulate an unwritable disk.
    """

    def __init__(
        self,
        account_lines: Optional[list[str]] = None,
        transaction_lines: Optional[list[str]] = None,
    ):
        self.account_lines: list[str] = list(account_lines or [])
        self.transaction_lines: list[str] = list(transaction_lines or [])
        self.fail_writes = False
        self.account_saves = 0
        self.transaction_saves = 0

    def load_accounts(self) -> list[Account]:
        return self._parse(self.account_lines, Account.from_record, "accounts")

    def save_accounts(self, accounts: Sequence[Account]) -> None:
        if self.fail_writes:
            raise PersistenceWriteError("Simulated write failure (accounts)")
        self.account_lines = [account.to_record() for account in accounts]
        self.account_saves += 1

    def load_transactions(self) -> list[Transaction]:
        return self._parse(self.transaction_lines, Transaction.from_record, "transactions")

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        if self.fail_writes:
            raise PersistenceWriteError("Simulated write failure (transactions)")
        self.transaction_lines = [txn.to_record() for txn in transactions]
        self.transaction_saves += 1

    @staticmethod
    def _parse(lines, parse, source):
        records = []
        for line_number, line in enumerate(lines, start=1):
            try:
                records.append(parse(line))
            except ValueError as e:
                raise LoadParseError(str(e), source=source, line_number=line_number) from e
        return records
