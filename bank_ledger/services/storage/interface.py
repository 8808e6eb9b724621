"""
Abstract Storage Interface

The ledger store keeps two collections, accounts and transactions, and
persists each one independently. Every save replaces the whole stored
collection; every load reads the whole collection back. Backends only
need to support those two operations per collection.

Backends raise the exceptions defined at the bottom of this module. The
ledger store catches them; nothing here decides whether a failure is
fatal.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from bank_ledger.models.account import Account
from bank_ledger.models.transaction import Transaction


class AccountStorageInterface(ABC):
    """
    Abstract interface for the account collection.

    Order is significant: load_accounts() returns accounts in the order
    they were last saved.
    """

    @abstractmethod
    def load_accounts(self) -> list[Account]:
        """
        Load every stored account.

        Returns:
            The stored accounts, or an empty list if nothing has been
            stored yet

        Raises:
            LoadParseError: If any stored record is malformed
            LoadError: If the storage exists but cannot be read
        """
        pass

    @abstractmethod
    def save_accounts(self, accounts: Sequence[Account]) -> None:
        """
        Replace the stored account collection.

        Raises:
            PersistenceWriteError: If the storage cannot be written
        """
        pass


class TransactionStorageInterface(ABC):
    """
    Abstract interface for the transaction log.

    The log is append-only from the ledger's point of view, but it is
    still saved as a whole collection.
    """

    @abstractmethod
    def load_transactions(self) -> list[Transaction]:
        """
        Load the full transaction log in recorded order.

        Raises:
            LoadParseError: If any stored record is malformed
            LoadError: If the storage exists but cannot be read
        """
        pass

    @abstractmethod
    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        """
        Replace the stored transaction log.

        Raises:
            PersistenceWriteError: If the storage cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class LoadError(StorageError):
    """A stored collection could not be read."""
    pass


class LoadParseError(LoadError):
    """A stored record could not be parsed; the whole load is abandoned."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        line_number: Optional[int] = None,
    ):
        self.source = source
        self.line_number = line_number
        if source is not None and line_number is not None:
            message = f"{source}, line {line_number}: {message}"
        super().__init__(message)


class PersistenceWriteError(StorageError):
    """A collection could not be written; in-memory state is ahead of storage."""
    pass
