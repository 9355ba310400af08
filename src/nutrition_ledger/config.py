"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path.home() / ".nutrition_ledger"
    snapshot_filename: str = "ledger.json"
    salt_bytes: int = 16
    autosave: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="NUTRITION_LEDGER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def snapshot_path(self) -> Path:
        """Full path of the snapshot file."""
        return self.data_dir.expanduser() / self.snapshot_filename
