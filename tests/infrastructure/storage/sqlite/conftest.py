"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest

from src.infrastructure.storage.sqlite.migrations.migrator import MIGRATIONS_DIR

SCHEMA_SQL = (MIGRATIONS_DIR / "v001_initial.sql").read_text(encoding="utf-8")


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Create and initialize a temporary database with the lot schema."""
    async with aiosqlite.connect(temp_db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        await conn.executescript(SCHEMA_SQL)
        await conn.commit()
    yield temp_db_path


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def lot_store(initialized_db: Path, mock_settings):
    """SQLiteLotStore bound to a fresh global pool over the temp database."""
    import src.infrastructure.storage.sqlite.connection as conn_module
    from src.infrastructure.storage.sqlite.lot_store import SQLiteLotStore

    conn_module._pool = None
    mock_settings.storage.db_path = initialized_db

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield SQLiteLotStore()
        finally:
            await conn_module.close_pool()
