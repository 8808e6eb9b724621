"""
Pytest configuration for test isolation.

Every test runs in its own temporary working directory with the ledger
settings pointed at it, so no test reads a developer's .env or writes
accounts.txt into the repository. The settings cache is cleared around
each test so environment changes made with monkeypatch take effect.
"""

from pathlib import Path

import pytest

from bank_ledger.audit import AuditLogger
from bank_ledger.config import get_settings
from bank_ledger.services.storage import (
    FlatFileAccountStorage,
    FlatFileTransactionStorage,
    InMemoryStorage,
)
from bank_ledger.store import LedgerStore


class RecordingLogger:
    """Stands in for a structlog logger and keeps every call."""

    def __init__(self):
        self.records: list[tuple[str, str, dict]] = []

    def debug(self, event, **kw):
        self.records.append(("debug", event, kw))

    def info(self, event, **kw):
        self.records.append(("info", event, kw))

    def warning(self, event, **kw):
        self.records.append(("warning", event, kw))

    def error(self, event, **kw):
        self.records.append(("error", event, kw))

    def events(self, event_type: str) -> list[dict]:
        return [kw for _, _, kw in self.records if kw.get("event_type") == event_type]

    def levels(self, event_type: str) -> list[str]:
        return [level for level, _, kw in self.records if kw.get("event_type") == event_type]


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each test from a clean directory with fresh settings."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "LEDGER_STORAGE_DATA_DIR",
        "LEDGER_STORAGE_ACCOUNTS_FILE",
        "LEDGER_STORAGE_TRANSACTIONS_FILE",
        "LEDGER_ACCOUNT_ID_FLOOR",
        "LEDGER_LOG_LEVEL",
        "LEDGER_LOG_FILE",
        "LEDGER_DEBUG_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def audit_records() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def audit_logger(audit_records: RecordingLogger) -> AuditLogger:
    return AuditLogger(logger=audit_records)


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(memory_storage: InMemoryStorage, audit_logger: AuditLogger) -> LedgerStore:
    """An empty ledger on in-memory storage with the default floor of 1000."""
    ledger = LedgerStore(
        account_storage=memory_storage,
        transaction_storage=memory_storage,
        audit_logger=audit_logger,
        account_id_floor=1000,
    )
    ledger.load()
    return ledger


@pytest.fixture
def accounts_path(tmp_path: Path) -> Path:
    return tmp_path / "accounts.txt"


@pytest.fixture
def transactions_path(tmp_path: Path) -> Path:
    return tmp_path / "transactions.txt"


@pytest.fixture
def open_file_store(accounts_path: Path, transactions_path: Path, audit_logger: AuditLogger):
    """Build (and load) a flat-file ledger over the test's files; call again to 'restart'."""

    def _open() -> LedgerStore:
        ledger = LedgerStore(
            account_storage=FlatFileAccountStorage(accounts_path),
            transaction_storage=FlatFileTransactionStorage(transactions_path),
            audit_logger=audit_logger,
            account_id_floor=1000,
        )
        ledger.load()
        return ledger

    return _open
