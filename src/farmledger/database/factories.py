"""Factories for the ledger store."""

import os
from pathlib import Path
from typing import Optional

from farmledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "FARMLEDGER_DB_PATH"


def default_database_path() -> Path:
    """Ledger file used when no path is configured: ~/.farmledger/farmledger.db"""
    return Path.home() / ".farmledger" / "farmledger.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open a file-backed ledger.

    Args:
        database_path: SQLite file. Falls back to $FARMLEDGER_DB_PATH, then
            to ``default_database_path()``, whose directory is created.

    Returns:
        SQLAlchemyDatabase for the file
    """
    database_path = database_path or os.environ.get(DB_PATH_ENV)
    if not database_path:
        path = default_database_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        database_path = str(path)

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_memory_database() -> SQLAlchemyDatabase:
    """Create an in-memory ledger that lives as long as the instance."""
    return SQLAlchemyDatabase("sqlite://")
