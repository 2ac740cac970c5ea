"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest

from homehub.config.settings import reset_settings
from homehub.infrastructure.storage.sqlite import close_pool
from homehub.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Path of the database the settings point at."""
    return tmp_path / "homehub.db"


@pytest.fixture
async def migrated_db(tmp_path: Path, temp_db_path: Path, monkeypatch) -> AsyncGenerator[Path, None]:
    """Fully migrated temporary database wired into settings and the pool."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STORAGE_DB_NAME", temp_db_path.name)
    monkeypatch.setenv("STORAGE_POOL_SIZE", "2")
    reset_settings()
    await close_pool()

    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(r.success for r in results)

    yield temp_db_path

    await close_pool()
    reset_settings()


@pytest.fixture
async def raw_conn(migrated_db: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """Direct connection for inserting rows the stores would refuse to write."""
    async with aiosqlite.connect(migrated_db) as conn:
        conn.row_factory = aiosqlite.Row
        yield conn
