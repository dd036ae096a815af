from __future__ import annotations

from decimal import Decimal
from functools import cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ARTIFACTS_DIR = PROJECT_ROOT / "artifacts"


class AppSettings(BaseSettings):
    db_file: Path = ARTIFACTS_DIR / "expense_splitter.db"
    settlement_epsilon: Decimal = Decimal("0.01")
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_SPLITTER_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@cache
def config() -> AppSettings:
    return AppSettings()
