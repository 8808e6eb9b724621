"""Services package."""

from bank_ledger.services.storage import (
    AccountStorageInterface,
    FlatFileAccountStorage,
    FlatFileTransactionStorage,
    InMemoryStorage,
    LoadError,
    LoadParseError,
    PersistenceWriteError,
    StorageError,
    TransactionStorageInterface,
)

__all__ = [
    # Storage services
    "AccountStorageInterface",
    "FlatFileAccountStorage",
    "FlatFileTransactionStorage",
    "InMemoryStorage",
    "LoadError",
    "LoadParseError",
    "PersistenceWriteError",
    "StorageError",
    "TransactionStorageInterface",
]
