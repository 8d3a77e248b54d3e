"""Unit tests for the schema migrator."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest

from reorder.infrastructure.storage.sqlite.migrations import migrator
from reorder.infrastructure.storage.sqlite.migrations.migrator import (
    MIGRATIONS_DIR,
    Migration,
    SchemaMigrator,
    check_schema,
    find_migrations,
    migration_status,
    run_migrations,
)


@pytest.fixture
def broken_migrations(tmp_path: Path) -> Path:
    """Migration directory whose second script fails."""
    directory = tmp_path / "migrations"
    directory.mkdir()
    (directory / "v001_spare_parts.sql").write_text(
        (MIGRATIONS_DIR / "v001_spare_parts.sql").read_text()
    )
    (directory / "v002_broken.sql").write_text("CREATE TABLE (;")
    (directory / "v003_never.sql").write_text("CREATE TABLE never (id INTEGER);")
    return directory


class TestMigration:
    """Tests for loading a migration script."""

    def test_load_parses_filename(self, tmp_path: Path):
        path = tmp_path / "v001_initial_schema.sql"
        path.write_text("-- Test migration\nSELECT 1;")

        migration = Migration.load(path)

        assert migration.version == "001"
        assert migration.name == "initial_schema"
        assert migration.path == path
        assert migration.read_sql().startswith("-- Test migration")

    def test_checksum_is_truncated_sha256(self, tmp_path: Path):
        path = tmp_path / "v001_test.sql"
        path.write_text("SELECT 1;")

        assert len(Migration.load(path).checksum) == 16

    def test_checksum_changes_with_content(self, tmp_path: Path):
        path = tmp_path / "v001_test.sql"
        path.write_text("SELECT 1;")
        before = Migration.load(path).checksum
        path.write_text("SELECT 2;")

        assert Migration.load(path).checksum != before

    def test_invalid_filename_raises(self, tmp_path: Path):
        path = tmp_path / "invalid_migration.sql"
        path.write_text("SELECT 1;")

        with pytest.raises(ValueError, match="Invalid migration filename"):
            Migration.load(path)


class TestFindMigrations:
    def test_bundled_migrations(self):
        migrations = find_migrations()
        assert migrations[0].version == "001"
        assert migrations[0].name == "spare_parts"

    def test_sorted_numerically_and_invalid_skipped(self, tmp_path: Path):
        (tmp_path / "v10_tenth.sql").write_text("SELECT 10;")
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "vbad.sql").write_text("SELECT 3;")

        assert [m.version for m in find_migrations(tmp_path)] == ["001", "002", "10"]


class TestMigrate:
    async def test_fresh_database(self, temp_db_path: Path):
        results = await run_migrations(temp_db_path, backup=False)

        assert results
        assert all(r.success for r in results)
        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE name = 'spare_parts'")
            assert await cursor.fetchone() is not None

    async def test_second_run_applies_nothing(self, initialized_db: Path):
        assert await run_migrations(initialized_db) == []

    async def test_backup_removed_after_success(self, initialized_db: Path):
        await run_migrations(initialized_db, backup=True)
        assert list(initialized_db.parent.glob("*.backup_*")) == []

    async def test_failed_migration_stops(self, temp_db_path: Path, broken_migrations: Path):
        results = await SchemaMigrator(temp_db_path, broken_migrations).migrate(backup=False)

        assert [r.success for r in results] == [True, False]
        assert results[1].error

    async def test_backup_kept_after_failure(self, initialized_db: Path, broken_migrations: Path):
        results = await SchemaMigrator(initialized_db, broken_migrations).migrate(backup=True)

        assert [r.version for r in results] == ["002"]
        assert len(list(initialized_db.parent.glob("*.backup_*"))) == 1

    async def test_pending_lists_unapplied(self, initialized_db: Path, broken_migrations: Path):
        pending = await SchemaMigrator(initialized_db, broken_migrations).pending()
        assert [m.version for m in pending] == ["002", "003"]

    async def test_uses_settings_path_by_default(self, temp_db_path: Path):
        mock_settings = MagicMock()
        mock_settings.storage.db_path = temp_db_path
        with patch.object(migrator, "get_settings", return_value=mock_settings):
            await run_migrations(backup=False)
        assert temp_db_path.exists()


class TestStatusAndIntegrity:
    async def test_applied_versions_missing_database(self, temp_db_path: Path):
        assert await SchemaMigrator(temp_db_path).applied_versions() == {}
        assert temp_db_path.exists() is False

    async def test_status_missing_database(self, temp_db_path: Path):
        status = await migration_status(temp_db_path)
        assert status["exists"] is False
        assert status["current_version"] is None
        assert "001" in status["pending_migrations"]

    async def test_status_initialized(self, initialized_db: Path):
        status = await migration_status(initialized_db)
        assert status["exists"] is True
        assert status["current_version"] == "001"
        assert status["applied_migrations"] == ["001"]
        assert status["pending_migrations"] == []

    async def test_check_schema(self, initialized_db: Path):
        checks = await check_schema(initialized_db)
        assert all(check["status"] == "PASS" for check in checks)

    async def test_check_reports_missing_tables(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute("CREATE TABLE other (id INTEGER)")
            await conn.commit()

        checks = {c["check"]: c for c in await check_schema(temp_db_path)}

        assert checks["integrity"]["status"] == "PASS"
        assert checks["required_tables"]["status"] == "FAIL"
        assert "spare_parts" in checks["required_tables"]["missing"]
