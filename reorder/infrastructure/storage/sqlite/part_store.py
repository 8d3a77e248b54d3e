"""SQLite implementation of spare part storage."""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from reorder.config import get_logger
from reorder.core.entities.part import PartStatistics, SparePart
from reorder.core.exceptions import DatabaseError
from reorder.core.interfaces.part_store import IPartStore
from reorder.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

# Columns a partial update may touch
UPDATABLE_COLUMNS = (
    "name",
    "current_stock",
    "reorder_point",
    "supplier_lead_time",
    "cost",
)


def _generate_id() -> str:
    """Generate a unique part ID."""
    return str(uuid.uuid4())


@asynccontextmanager
async def _database_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise driver errors as DatabaseError."""
    try:
        yield
    except aiosqlite.Error as e:
        logger.error("part_store_operation_failed", operation=operation, error=str(e))
        raise DatabaseError(operation, str(e)) from e


class SQLitePartStore(IPartStore):
    """SQLite implementation of spare part storage."""

    async def create_part(self, part: SparePart) -> SparePart:
        """Insert a part with a freshly generated ID."""
        now = datetime.now(UTC)
        part.id = _generate_id()
        part.name = part.name.strip()
        part.created_at = now
        part.updated_at = now

        async with _database_errors("create_part"), get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO spare_parts (
                    id, name, current_stock, reorder_point,
                    supplier_lead_time, cost, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    part.id,
                    part.name,
                    part.current_stock,
                    part.reorder_point,
                    part.supplier_lead_time,
                    part.cost,
                    part.created_at.isoformat(),
                    part.updated_at.isoformat(),
                ),
            )
        logger.info("part_created", part_id=part.id, name=part.name)
        return part

    async def get_part(self, part_id: str) -> SparePart | None:
        """Get part by ID."""
        async with _database_errors("get_part"), get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM spare_parts WHERE id = ?", (part_id,)
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_part(row)

    async def list_parts(self) -> list[SparePart]:
        """List all parts, newest first."""
        async with _database_errors("list_parts"), get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM spare_parts ORDER BY created_at DESC, rowid DESC"
            )
            rows = await cursor.fetchall()
        return [self._row_to_part(row) for row in rows]

    async def search_parts(self, term: str) -> list[SparePart]:
        """Case-insensitive substring match on name, newest first."""
        # instr() avoids treating % and _ in the term as LIKE wildcards
        async with _database_errors("search_parts"), get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM spare_parts
                WHERE instr(lower(name), lower(?)) > 0
                ORDER BY created_at DESC, rowid DESC
                """,
                (term,),
            )
            rows = await cursor.fetchall()
        return [self._row_to_part(row) for row in rows]

    async def update_part(
        self, part_id: str, changes: dict[str, Any]
    ) -> SparePart | None:
        """Write only the provided columns; empty changes is a no-op."""
        unknown = set(changes) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")

        if not changes:
            return await self.get_part(part_id)

        values = dict(changes)
        if "name" in values:
            values["name"] = values["name"].strip()

        columns = [column for column in UPDATABLE_COLUMNS if column in values]
        assignments = ", ".join(f"{column} = ?" for column in columns)
        params = [values[column] for column in columns]
        params.extend([datetime.now(UTC).isoformat(), part_id])

        async with _database_errors("update_part"), get_transaction() as conn:
            cursor = await conn.execute(
                f"UPDATE spare_parts SET {assignments}, updated_at = ? WHERE id = ?",
                params,
            )
            updated = cursor.rowcount > 0

        if not updated:
            return None

        logger.info("part_updated", part_id=part_id, fields=columns)
        return await self.get_part(part_id)

    async def delete_part(self, part_id: str) -> bool:
        """Delete a part by ID."""
        async with _database_errors("delete_part"), get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM spare_parts WHERE id = ?", (part_id,)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("part_deleted", part_id=part_id)
        return deleted

    async def get_statistics(self) -> PartStatistics:
        """Aggregate counts and values over all parts."""
        async with _database_errors("get_statistics"), get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    COUNT(*) AS total_parts,
                    COALESCE(SUM(CASE WHEN current_stock < reorder_point THEN 1 ELSE 0 END), 0)
                        AS parts_needing_reorder,
                    COALESCE(SUM(CASE WHEN current_stock >= reorder_point THEN 1 ELSE 0 END), 0)
                        AS parts_with_adequate_stock,
                    COALESCE(SUM(cost * current_stock), 0) AS total_inventory_value,
                    COALESCE(AVG(supplier_lead_time), 0) AS average_lead_time
                FROM spare_parts
                """
            )
            row = await cursor.fetchone()

        return PartStatistics(
            total_parts=row["total_parts"],
            parts_needing_reorder=row["parts_needing_reorder"],
            parts_with_adequate_stock=row["parts_with_adequate_stock"],
            total_inventory_value=float(row["total_inventory_value"]),
            average_lead_time=float(row["average_lead_time"]),
        )

    @staticmethod
    def _row_to_part(row: aiosqlite.Row) -> SparePart:
        """Convert a database row to a SparePart entity."""
        created_at = datetime.now(UTC)
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        updated_at = created_at
        if row["updated_at"]:
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return SparePart(
            id=row["id"],
            name=row["name"],
            current_stock=int(row["current_stock"]),
            reorder_point=int(row["reorder_point"]),
            supplier_lead_time=int(row["supplier_lead_time"]),
            cost=float(row["cost"]),
            created_at=created_at,
            updated_at=updated_at,
        )
