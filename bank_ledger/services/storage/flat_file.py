"""
Flat File Storage Implementation

Each collection lives in its own newline-delimited UTF-8 text file with
one comma-separated record per line (see Account.to_record and
Transaction.to_record for the field layout).

TRADEOFFS:
- Every save rewrites the whole file in place. There is no temporary
  file and rename, so a crash mid-write can leave a truncated file.
- Every load reads the whole file. A single malformed line fails the
  load of that file; no line is ever skipped.
- A missing file is an empty collection, not an error.
"""

from pathlib import Path
from typing import Callable, Sequence, TypeVar, Union

import structlog

from bank_ledger.config import get_settings
from bank_ledger.models.account import Account
from bank_ledger.models.transaction import Transaction
from bank_ledger.services.storage.interface import (
    AccountStorageInterface,
    LoadError,
    LoadParseError,
    PersistenceWriteError,
    TransactionStorageInterface,
)


T = TypeVar("T")

logger = structlog.get_logger(__name__)


class FlatFile:
    """
    One collection stored as lines of text.

    Knows nothing about accounts or transactions; callers hand in the
    line parser and formatter.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read_records(self, parse: Callable[[str], T]) -> list[T]:
        """Parse every line of the file, or return [] if the file is missing."""
        if not self.path.exists():
            logger.info("ledger_file_missing", path=str(self.path))
            return []

        records = []
        try:
            with self.path.open("r", encoding="utf-8", newline="") as handle:
                for line_number, raw_line in enumerate(handle, start=1):
                    line = raw_line.rstrip("\r\n")
                    try:
                        records.append(parse(line))
                    except ValueError as e:
                        raise LoadParseError(
                            str(e),
                            source=str(self.path),
                            line_number=line_number,
                        ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Failed to read {self.path}: {e}") from e

        logger.debug("ledger_file_read", path=str(self.path), records=len(records))
        return records

    def write_records(self, lines: Sequence[str]) -> None:
        """
        Replace the file contents with the given lines.

        Lines are encoded before the file is opened, so an unencodable
        record leaves the previous contents in place.
        """
        try:
            data = "".join(f"{line}\n" for line in lines).encode("utf-8")
        except UnicodeEncodeError as e:
            raise PersistenceWriteError(f"Failed to encode records for {self.path}: {e}") from e

        try:
            with self.path.open("wb") as handle:
                handle.write(data)
        except OSError as e:
            raise PersistenceWriteError(f"Failed to write {self.path}: {e}") from e

        logger.debug("ledger_file_written", path=str(self.path), records=len(lines))


class FlatFileAccountStorage(AccountStorageInterface):
    """Account collection in a flat text file (accounts.txt by default)."""

    def __init__(self, path: Union[str, Path, None] = None):
        self._file = FlatFile(path or get_settings().storage.accounts_path)

    @property
    def path(self) -> Path:
        return self._file.path

    def load_accounts(self) -> list[Account]:
        return self._file.read_records(Account.from_record)

    def save_accounts(self, accounts: Sequence[Account]) -> None:
        self._file.write_records([account.to_record() for account in accounts])


class FlatFileTransactionStorage(TransactionStorageInterface):
    """Transaction log in a flat text file (transactions.txt by default)."""

    def __init__(self, path: Union[str, Path, None] = None):
        self._file = FlatFile(path or get_settings().storage.transactions_path)

    @property
    def path(self) -> Path:
        return self._file.path

    def load_transactions(self) -> list[Transaction]:
        return self._file.read_records(Transaction.from_record)

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        self._file.write_records([txn.to_record() for txn in transactions])
