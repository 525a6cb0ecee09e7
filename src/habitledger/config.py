"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitLedger"
    DB_FILENAME = "habitledger.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(
        self,
        *,
        data_dir: str | Path | None = None,
        database_url: str | None = None,
    ) -> None:
        self.DATA_DIR = self._resolve_data_dir(data_dir)
        self.DEV_MODE = _env_bool("HABITLEDGER_DEV_MODE", default=True)
        self.LOG_LEVEL = os.getenv("HABITLEDGER_LOG_LEVEL", "INFO").upper()
        self.DATABASE_URL = (
            database_url
            or os.getenv("HABITLEDGER_DATABASE_URL")
            or self._build_sqlite_url()
        )

    def _resolve_data_dir(self, override: str | Path | None) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = override or os.getenv("HABITLEDGER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.is_sqlite:
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class TestConfig(BaseConfig):
    """In-memory database shared across sessions, for tests."""

    # Keep pytest from collecting this class.
    __test__ = False

    SQLITE_PRAGMAS = {"foreign_keys": "on"}

    def __init__(self, *, data_dir: str | Path | None = None) -> None:
        super().__init__(data_dir=data_dir, database_url="sqlite://")

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        options = super().sqlalchemy_engine_options()
        options["poolclass"] = StaticPool
        return options
