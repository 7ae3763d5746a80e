"""PostgreSQL implementation of OwnerRecordStore.

One row per owner in `owner_relationships`; the entry list lives in a
JSONB column so the whole document is read and written together.
"""

import asyncio
import json
from typing import Any

import asyncpg
from pydantic import ValidationError as PydanticValidationError

from liaison.db.errors import ConflictError, ConnectionError, ValidationError
from liaison.db.pool import PostgresPool
from liaison.observability.logging import get_logger
from liaison.relationship.models import OwnerRecord
from liaison.relationship.store import Mutation, OwnerRecordStore

logger = get_logger(__name__)

# Driver errors that mean "lost against another writer, nothing applied"
_CONFLICT_ERRORS = (
    asyncpg.SerializationError,
    asyncpg.DeadlockDetectedError,
    asyncpg.LockNotAvailableError,
)


class PostgresOwnerRecordStore(OwnerRecordStore):
    """PostgreSQL implementation of OwnerRecordStore.

    atomic_update holds a row lock (SELECT ... FOR UPDATE) for the
    length of one transaction, so concurrent updates to the same owner
    queue behind each other while different owners proceed in parallel.
    """

    backend = "postgres"

    def __init__(self, pool: PostgresPool) -> None:
        """Initialize PostgreSQL owner store.

        Args:
            pool: Liaison connection pool
        """
        self._pool = pool

    def _row_to_record(self, row: asyncpg.Record) -> OwnerRecord:
        relationships: Any = row["relationships"]
        if isinstance(relationships, str):
            relationships = json.loads(relationships)
        try:
            return OwnerRecord.model_validate({
                "owner_id": row["owner_id"],
                "version": row["version"],
                "relationships": relationships,
            })
        except PydanticValidationError as e:
            raise ValidationError(
                f"Corrupt owner record {row['owner_id']}: {e}", cause=e
            ) from e

    @staticmethod
    def _dump_relationships(record: OwnerRecord) -> str:
        return json.dumps(
            [entry.model_dump(mode="json") for entry in record.relationships]
        )

    async def get(self, owner_id: str) -> OwnerRecord | None:
        """Get an owner record by key."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """
                    SELECT owner_id, version, relationships
                    FROM owner_relationships
                    WHERE owner_id = $1
                    """,
                    owner_id,
                )
        except (asyncpg.PostgresError, OSError, asyncio.TimeoutError) as e:
            logger.error("postgres_get_error", owner_id=owner_id, error=str(e))
            raise ConnectionError(f"Failed to get owner record: {e}", cause=e) from e

        if row is None:
            logger.debug("owner_record_not_found", owner_id=owner_id)
            return None
        return self._row_to_record(row)

    async def create(self, record: OwnerRecord) -> str:
        """Provision a new owner record."""
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(
                    """
                    INSERT INTO owner_relationships (
                        owner_id, version, relationships, created_at, updated_at
                    ) VALUES ($1, $2, $3::jsonb, NOW(), NOW())
                    """,
                    record.owner_id,
                    record.version,
                    self._dump_relationships(record),
                )
        except asyncpg.UniqueViolationError as e:
            raise ConflictError(
                f"Owner record already exists: {record.owner_id}", cause=e
            ) from e
        except (asyncpg.PostgresError, OSError, asyncio.TimeoutError) as e:
            logger.error("postgres_create_error", owner_id=record.owner_id, error=str(e))
            raise ConnectionError(f"Failed to create owner record: {e}", cause=e) from e

        logger.info("owner_record_created", owner_id=record.owner_id)
        return record.owner_id

    async def atomic_update(
        self,
        owner_id: str,
        mutate: Mutation,
    ) -> tuple[OwnerRecord | None, bool]:
        """Lock the owner's row, evaluate mutate and write back in one transaction."""
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        """
                        SELECT owner_id, version, relationships
                        FROM owner_relationships
                        WHERE owner_id = $1
                        FOR UPDATE
                        """,
                        owner_id,
                    )
                    if row is None:
                        return None, False

                    record = self._row_to_record(row)
                    if not mutate(record):
                        return record, True

                    await conn.execute(
                        """
                        UPDATE owner_relationships
                        SET version = $2,
                            relationships = $3::jsonb,
                            updated_at = NOW()
                        WHERE owner_id = $1
                        """,
                        owner_id,
                        record.version,
                        self._dump_relationships(record),
                    )
                    return record, True

        except _CONFLICT_ERRORS as e:
            logger.warning("postgres_update_conflict", owner_id=owner_id, error=str(e))
            raise ConflictError(f"Concurrent update of {owner_id}: {e}", cause=e) from e
        except (asyncpg.PostgresError, OSError, asyncio.TimeoutError) as e:
            logger.error("postgres_update_error", owner_id=owner_id, error=str(e))
            raise ConnectionError(f"Failed to update owner record: {e}", cause=e) from e

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._pool.close()
