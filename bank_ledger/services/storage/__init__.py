"""
Storage Services Package

Provides abstract interfaces and concrete implementations for ledger
storage. Flat text files are the production backend; the in-memory
backend serves tests.
"""

from bank_ledger.services.storage.interface import (
    AccountStorageInterface,
    LoadError,
    LoadParseError,
    PersistenceWriteError,
    StorageError,
    TransactionStorageInterface,
)
from bank_ledger.services.storage.flat_file import (
    FlatFile,
    FlatFileAccountStorage,
    FlatFileTransactionStorage,
)
from bank_ledger.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "AccountStorageInterface",
    "TransactionStorageInterface",
    # Exceptions
    "LoadError",
    "LoadParseError",
    "PersistenceWriteError",
    "StorageError",
    # Flat file implementation
    "FlatFile",
    "FlatFileAccountStorage",
    "FlatFileTransactionStorage",
    # In-memory implementation
    "InMemoryStorage",
]
