"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import reorder.infrastructure.storage.sqlite.connection as conn_module
from reorder.infrastructure.storage.sqlite.connection import close_pool
from reorder.infrastructure.storage.sqlite.migrations import run_migrations


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    """Temporary database with all migrations applied."""
    await run_migrations(temp_db_path, backup=False)
    return temp_db_path


@pytest.fixture
async def pooled_db(initialized_db: Path) -> AsyncGenerator[Path, None]:
    """Point the global connection pool at the temporary database."""
    conn_module._pool = None
    mock_settings = MagicMock()
    mock_settings.storage.db_path = initialized_db
    mock_settings.storage.pool_size = 1
    mock_settings.storage.busy_timeout = 5000
    mock_settings.storage.acquire_timeout = 5.0

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield initialized_db
        finally:
            await close_pool()
