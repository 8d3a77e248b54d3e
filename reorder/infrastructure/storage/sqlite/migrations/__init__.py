"""Schema migrations for the parts database."""

from reorder.infrastructure.storage.sqlite.migrations.migrator import (
    Migration,
    MigrationResult,
    SchemaMigrator,
    check_schema,
    find_migrations,
    migration_status,
    run_migrations,
)

__all__ = [
    "Migration",
    "MigrationResult",
    "SchemaMigrator",
    "check_schema",
    "find_migrations",
    "migration_status",
    "run_migrations",
]
