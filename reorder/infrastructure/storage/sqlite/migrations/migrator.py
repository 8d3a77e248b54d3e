"""
Versioned schema migrations for the parts database.

Scripts named v<NNN>_<name>.sql live next to this module and run in
version order. Each applied script is recorded in schema_migrations with
a checksum of its text; editing an applied script is reported, never
re-run. An existing database file is copied aside before migrating and
restored if the run fails part-way.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from reorder.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

FILENAME_PATTERN = re.compile(r"^v(\d+)_(\w+)\.sql$")

REQUIRED_TABLES = frozenset({"schema_migrations", "spare_parts"})

BOOKKEEPING_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT,
    applied_at TEXT DEFAULT (datetime('now')),
    execution_time_ms INTEGER
)
"""


@dataclass(frozen=True)
class Migration:
    """One migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def load(cls, path: Path) -> "Migration":
        match = FILENAME_PATTERN.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )

    def read_sql(self) -> str:
        return self.path.read_text(encoding="utf-8")


@dataclass
class MigrationResult:
    """Outcome of running one script."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def find_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Migration scripts in a directory, lowest version first."""
    found = []
    for path in directory.glob("v*.sql"):
        try:
            found.append(Migration.load(path))
        except ValueError as e:
            logger.warning("migration_file_ignored", path=str(path), reason=str(e))
    return sorted(found, key=lambda m: int(m.version))


async def _applied(conn: aiosqlite.Connection) -> dict[str, str]:
    cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    return {version: checksum for version, checksum in await cursor.fetchall()}


class SchemaMigrator:
    """Brings one database file up to the newest schema version."""

    def __init__(self, db_path: Path, directory: Path = MIGRATIONS_DIR):
        self.db_path = db_path
        self.directory = directory

    async def applied_versions(self) -> dict[str, str]:
        """Applied version -> recorded checksum; empty for a missing file."""
        if not self.db_path.exists():
            return {}
        async with aiosqlite.connect(self.db_path) as conn:
            await conn.execute(BOOKKEEPING_DDL)
            return await _applied(conn)

    async def pending(self) -> list[Migration]:
        applied = await self.applied_versions()
        return [m for m in find_migrations(self.directory) if m.version not in applied]

    async def migrate(self, backup: bool = True) -> list[MigrationResult]:
        """
        Apply every pending script, stopping at the first failure.

        Returns:
            One result per script that was attempted
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        backup_path = self._backup() if backup and self.db_path.exists() else None

        try:
            results = await self._run_pending()
        except aiosqlite.Error as e:
            logger.error("migration_run_failed", db_path=str(self.db_path), error=str(e))
            if backup_path is not None:
                self._restore(backup_path)
            raise

        if backup_path is not None:
            if all(r.success for r in results):
                backup_path.unlink()
            else:
                logger.warning("migration_backup_kept", backup_path=str(backup_path))
        return results

    async def _run_pending(self) -> list[MigrationResult]:
        results: list[MigrationResult] = []
        async with aiosqlite.connect(self.db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute(BOOKKEEPING_DDL)
            await conn.commit()
            applied = await _applied(conn)

            for migration in find_migrations(self.directory):
                recorded = applied.get(migration.version)
                if recorded is not None:
                    if recorded != migration.checksum:
                        logger.warning(
                            "migration_checksum_mismatch",
                            version=migration.version,
                            recorded=recorded,
                            current=migration.checksum,
                        )
                    continue

                result = await self._apply(conn, migration)
                results.append(result)
                if not result.success:
                    break

        if not results:
            logger.debug("schema_up_to_date", db_path=str(self.db_path))
        return results

    async def _apply(self, conn: aiosqlite.Connection, migration: Migration) -> MigrationResult:
        started = time.perf_counter()

        def elapsed_ms() -> int:
            return int((time.perf_counter() - started) * 1000)

        try:
            await conn.executescript(migration.read_sql())
            await conn.execute(
                "INSERT OR REPLACE INTO schema_migrations "
                "(version, name, checksum, execution_time_ms) VALUES (?, ?, ?, ?)",
                (migration.version, migration.name, migration.checksum, elapsed_ms()),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            logger.error("migration_failed", version=migration.version, error=str(e))
            return MigrationResult(
                migration.version, migration.name, False, elapsed_ms(), str(e)
            )

        logger.info(
            "migration_applied",
            version=migration.version,
            name=migration.name,
            execution_time_ms=elapsed_ms(),
        )
        return MigrationResult(migration.version, migration.name, True, elapsed_ms())

    async def status(self) -> dict[str, Any]:
        applied = await self.applied_versions()
        scripts = find_migrations(self.directory)
        return {
            "exists": self.db_path.exists(),
            "current_version": max(applied, key=int) if applied else None,
            "applied_migrations": sorted(applied, key=int),
            "pending_migrations": [m.version for m in scripts if m.version not in applied],
            "total_migrations": len(scripts),
        }

    async def check_schema(self) -> list[dict[str, Any]]:
        """SQLite integrity check plus presence of the required tables."""
        async with aiosqlite.connect(self.db_path) as conn:
            cursor = await conn.execute("PRAGMA integrity_check")
            (integrity,) = await cursor.fetchone()
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            tables = {name for (name,) in await cursor.fetchall()}

        missing = sorted(REQUIRED_TABLES - tables)
        return [
            {"check": "integrity", "status": "PASS" if integrity == "ok" else "FAIL", "result": integrity},
            {"check": "required_tables", "status": "FAIL" if missing else "PASS", "missing": missing},
        ]

    def _backup(self) -> Path:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = self.db_path.with_name(f"{self.db_path.stem}.backup_{stamp}.db")
        shutil.copy2(self.db_path, backup_path)
        logger.info("database_backup_created", backup_path=str(backup_path))
        return backup_path

    def _restore(self, backup_path: Path) -> None:
        shutil.copy2(backup_path, self.db_path)
        logger.warning("database_restored_from_backup", backup_path=str(backup_path))


def _migrator(db_path: Path | None) -> SchemaMigrator:
    return SchemaMigrator(db_path or get_settings().storage.db_path)


async def run_migrations(db_path: Path | None = None, backup: bool = True) -> list[MigrationResult]:
    """Migrate the configured database (or db_path) to the newest schema."""
    return await _migrator(db_path).migrate(backup=backup)


async def migration_status(db_path: Path | None = None) -> dict[str, Any]:
    return await _migrator(db_path).status()


async def check_schema(db_path: Path | None = None) -> list[dict[str, Any]]:
    return await _migrator(db_path).check_schema()


def main() -> None:
    """CLI entry point: python -m reorder.infrastructure.storage.sqlite.migrations.migrator"""
    import argparse

    parser = argparse.ArgumentParser(description="Parts database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--verify", action="store_true", help="Verify schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip backup before migrations")
    args = parser.parse_args()

    if args.status:
        for key, value in asyncio.run(migration_status(args.db_path)).items():
            print(f"{key}: {value}")
    elif args.verify:
        for check in asyncio.run(check_schema(args.db_path)):
            print(f"[{check['status']}] {check['check']}")
    else:
        for result in asyncio.run(run_migrations(args.db_path, backup=not args.no_backup)):
            outcome = "ok" if result.success else f"FAILED: {result.error}"
            print(f"v{result.version} {result.name}: {outcome} ({result.execution_time_ms}ms)")


if __name__ == "__main__":
    main()
