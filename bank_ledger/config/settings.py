"""
Configuration Management for the Bank Ledger

Uses pydantic-settings for type-safe configuration from environment
variables and an optional .env file. Command-line options override these
values (see bank_ledger.cli).
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StorageSettings(BaseSettings):
    """Where the ledger files live."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("."),
        description="Directory holding the ledger files"
    )
    accounts_file: str = Field(
        default="accounts.txt",
        description="File name of the account collection"
    )
    transactions_file: str = Field(
        default="transactions.txt",
        description="File name of the transaction log"
    )

    @property
    def accounts_path(self) -> Path:
        return self.data_dir / self.accounts_file

    @property
    def transactions_path(self) -> Path:
        return self.data_dir / self.transactions_file


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG logging)"
    )

    # Ledger
    account_id_floor: int = Field(
        default=1000,
        ge=0,
        description="Account numbers are handed out above this value"
    )

    # Logging
    log_level: str = Field(
        default="ERROR",
        description="Minimum level written to the log"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Write logs to this file instead of stderr"
    )
    log_json: bool = Field(
        default=True,
        description="Render log lines as JSON (otherwise key=value console output)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<setting_name>_error" entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    try:
        storage = settings.storage
        if storage.data_dir.exists() and not storage.data_dir.is_dir():
            raise ValueError(f"data_dir is not a directory: {storage.data_dir}")
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
