"""SQLite implementation of lot storage."""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.dispatch import StockIntent
from src.core.entities.lot import Lot, LotStatus, utcnow
from src.core.entities.movement import Movement, MovementType
from src.core.exceptions import ConcurrentModificationError, LotNotFoundError
from src.core.interfaces.lot_store import ILotStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

# Columns a mutation may touch; id, product and timestamps are not among them
_MUTABLE_COLUMNS = frozenset(
    {
        "quantity",
        "location_id",
        "status",
        "lot_number",
        "expiration_date",
        "product_name",
        "category",
    }
)


def _to_db(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class SQLiteLotStore(ILotStore):
    """SQLite implementation of lot and movement storage."""

    async def create_lot(
        self, lot: Lot, movement: Movement | None = None
    ) -> tuple[Lot, Movement | None]:
        """Insert a lot and, if given, its reception movement in one transaction."""
        now = utcnow()
        lot = lot.model_copy(
            update={"id": lot.id or uuid.uuid4().hex, "created_at": now, "updated_at": now}
        )
        stored_movement = None

        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO lots (
                    id, product_id, product_name, category, quantity,
                    location_id, lot_number, received_date, expiration_date,
                    status, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    lot.id,
                    lot.product_id,
                    lot.product_name,
                    lot.category,
                    lot.quantity,
                    lot.location_id,
                    lot.lot_number,
                    lot.received_date.isoformat(),
                    lot.expiration_date.isoformat() if lot.expiration_date else None,
                    lot.status.value,
                    lot.created_at.isoformat(),
                    lot.updated_at.isoformat(),
                ),
            )
            if movement is not None:
                stored_movement = await self._insert_movement(
                    conn, movement.model_copy(update={"lot_id": lot.id})
                )

        logger.info(
            "lot_created",
            lot_id=lot.id,
            product_id=lot.product_id,
            qty=lot.quantity,
        )
        return lot, stored_movement

    async def get_lot(self, lot_id: str) -> Lot | None:
        """Get lot by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM lots WHERE id = ?", (lot_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_lot(row)

    async def fetch_lots_for_product(self, product_id: str) -> list[Lot]:
        """Get lots of a product with stock, in insertion order."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM lots
                WHERE product_id = ? AND quantity > 0
                ORDER BY rowid
                """,
                (product_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_lot(row) for row in rows]

    async def fetch_all_lots(
        self, limit: int | None = None, offset: int = 0
    ) -> list[Lot]:
        """Get every lot, including empty ones."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM lots ORDER BY rowid LIMIT ? OFFSET ?",
                (limit if limit is not None else -1, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_lot(row) for row in rows]

    async def persist_lot_mutation(
        self,
        lot_id: str,
        fields: dict[str, Any],
        expected_quantity: int | None = None,
    ) -> None:
        """Update lot fields, optionally conditioned on its current quantity."""
        async with get_transaction() as conn:
            await self._update_lot(conn, lot_id, fields, expected_quantity)
        logger.info("lot_mutation_persisted", lot_id=lot_id, fields=sorted(fields))

    async def append_movement(self, movement: Movement) -> Movement:
        """Record a movement."""
        async with get_transaction() as conn:
            return await self._insert_movement(conn, movement)

    async def apply_intents(self, intents: list[StockIntent]) -> list[Movement]:
        """
        Apply lot mutations and their movements in a single transaction.

        Each lot update is conditioned on the quantity the caller read; if any
        lot has moved on, everything is rolled back and
        ConcurrentModificationError is raised.
        """
        if not intents:
            return []

        stored: list[Movement] = []
        async with get_transaction(immediate=True) as conn:
            for intent in intents:
                await self._update_lot(
                    conn,
                    intent.lot_id,
                    intent.mutation.to_fields(),
                    intent.mutation.expected_quantity,
                )
                stored.append(await self._insert_movement(conn, intent.movement))

        logger.info(
            "stock_intents_applied",
            count=len(intents),
            lots=[intent.lot_id for intent in intents],
        )
        return stored

    async def get_movements(self, lot_id: str, limit: int = 100) -> list[Movement]:
        """Get movements for a lot, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM lot_movements
                WHERE lot_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (lot_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def _update_lot(
        self,
        conn: aiosqlite.Connection,
        lot_id: str,
        fields: dict[str, Any],
        expected_quantity: int | None,
    ) -> None:
        unknown = set(fields) - _MUTABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update lot columns: {sorted(unknown)}")

        assignments = [f"{column} = ?" for column in fields]
        params: list[Any] = [_to_db(value) for value in fields.values()]
        assignments.append("updated_at = ?")
        params.append(utcnow().isoformat())

        sql = f"UPDATE lots SET {', '.join(assignments)} WHERE id = ?"
        params.append(lot_id)
        if expected_quantity is not None:
            sql += " AND quantity = ?"
            params.append(expected_quantity)

        cursor = await conn.execute(sql, params)
        if cursor.rowcount:
            return

        cursor = await conn.execute("SELECT 1 FROM lots WHERE id = ?", (lot_id,))
        if await cursor.fetchone() is None:
            raise LotNotFoundError(lot_id)
        logger.warning(
            "lot_concurrent_modification",
            lot_id=lot_id,
            expected_quantity=expected_quantity,
        )
        raise ConcurrentModificationError(lot_id, expected_quantity)  # type: ignore[arg-type]

    async def _insert_movement(
        self, conn: aiosqlite.Connection, movement: Movement
    ) -> Movement:
        cursor = await conn.execute(
            """
            INSERT INTO lot_movements (
                lot_id, movement_type, from_location_id, to_location_id,
                quantity, performed_by, reference_code, notes, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                movement.lot_id,
                movement.movement_type.value,
                movement.from_location_id,
                movement.to_location_id,
                movement.quantity,
                movement.performed_by,
                movement.reference_code,
                movement.notes,
                movement.created_at.isoformat(),
            ),
        )
        logger.info(
            "lot_movement_recorded",
            movement_id=cursor.lastrowid,
            lot_id=movement.lot_id,
            type=movement.movement_type.value,
            qty=movement.quantity,
        )
        return movement.model_copy(update={"id": cursor.lastrowid})

    @staticmethod
    def _row_to_lot(row: aiosqlite.Row) -> Lot:
        """Convert a database row to a Lot entity."""
        expiration_date = None
        if row["expiration_date"]:
            try:
                expiration_date = date.fromisoformat(row["expiration_date"])
            except (ValueError, TypeError):
                # Lot falls back to undated: last in FIFO, absent from reports
                logger.warning(
                    "lot_bad_expiration_date",
                    lot_id=row["id"],
                    value=row["expiration_date"],
                )

        created_at = utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        updated_at = utcnow()
        if row["updated_at"]:
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return Lot(
            id=row["id"],
            product_id=row["product_id"],
            product_name=row["product_name"] or "",
            category=row["category"] or "",
            quantity=int(row["quantity"]),
            location_id=row["location_id"],
            lot_number=row["lot_number"],
            received_date=date.fromisoformat(row["received_date"]),
            expiration_date=expiration_date,
            status=LotStatus(row["status"]),
            created_at=created_at,
            updated_at=updated_at,
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> Movement:
        """Convert a database row to a Movement entity."""
        created_at = utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass

        return Movement(
            id=row["id"],
            lot_id=row["lot_id"],
            movement_type=MovementType(row["movement_type"]),
            from_location_id=row["from_location_id"],
            to_location_id=row["to_location_id"],
            quantity=int(row["quantity"]),
            performed_by=row["performed_by"],
            reference_code=row["reference_code"],
            notes=row["notes"],
            created_at=created_at,
        )
