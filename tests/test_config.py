"""
Tests for ledger settings
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from bank_ledger.config import (
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_defaults(self):
        """Test that files default to the working directory."""
        settings = StorageSettings()
        assert settings.accounts_path == Path(".") / "accounts.txt"
        assert settings.transactions_path == Path(".") / "transactions.txt"

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LEDGER_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("LEDGER_STORAGE_TRANSACTIONS_FILE", "log.txt")
        settings = StorageSettings()
        assert settings.transactions_path == tmp_path / "log.txt"

    def test_dotenv_file_is_read(self, tmp_path):
        """Test that a .env in the working directory is picked up."""
        (tmp_path / ".env").write_text("LEDGER_STORAGE_ACCOUNTS_FILE=from-dotenv.txt\n", encoding="utf-8")
        assert StorageSettings().accounts_file == "from-dotenv.txt"


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self):
        settings = AppSettings()
        assert settings.account_id_floor == 1000
        assert settings.log_level == "ERROR"
        assert settings.log_file is None
        assert settings.log_json is True
        assert set(AppSettings.model_fields) == {
            "debug_mode", "account_id_floor", "log_level", "log_file", "log_json"
        }

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LEDGER_LOG_LEVEL", " info ")
        assert AppSettings().log_level == "INFO"

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_negative_floor_rejected(self, monkeypatch):
        monkeypatch.setenv("LEDGER_ACCOUNT_ID_FLOOR", "-1")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_debug_mode_forces_debug_level(self, monkeypatch):
        monkeypatch.setenv("LEDGER_DEBUG_MODE", "true")
        assert AppSettings().effective_log_level == "DEBUG"


class TestSettingsAccess:
    """Tests for get_settings and validate_all_settings."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_all_valid(self):
        assert validate_all_settings() == {"storage": True, "app": True}

    def test_invalid_app_settings_reported(self, monkeypatch):
        monkeypatch.setenv("LEDGER_LOG_LEVEL", "LOUD")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is False
        assert "log_level" in results["app_error"]

    def test_data_dir_that_is_a_file_reported(self, tmp_path, monkeypatch):
        not_a_dir = tmp_path / "plain-file"
        not_a_dir.write_text("", encoding="utf-8")
        monkeypatch.setenv("LEDGER_STORAGE_DATA_DIR", str(not_a_dir))
        results = validate_all_settings()
        assert results["storage"] is False
        assert "not a directory" in results["storage_error"]
