"""Redis implementation of OwnerRecordStore.

Each owner document is one JSON string under `{prefix}:owner:{owner_id}`.
Updates use optimistic WATCH/MULTI/EXEC: if another client writes the key
between our read and EXEC, nothing is applied and the read is redone.
"""

import redis.asyncio as redis
from pydantic import ValidationError as PydanticValidationError

from liaison.config.models.storage import OwnerStoreConfig
from liaison.db.errors import ConflictError, ConnectionError, ValidationError
from liaison.observability.logging import get_logger
from liaison.relationship.models import OwnerRecord
from liaison.relationship.store import Mutation, OwnerRecordStore

logger = get_logger(__name__)


class RedisOwnerRecordStore(OwnerRecordStore):
    """Redis implementation of OwnerRecordStore.

    A lost WATCH race never writes anything, so mutate is simply
    re-evaluated against the fresh document, up to `cas_attempts` times.
    """

    backend = "redis"

    def __init__(
        self,
        client: redis.Redis,
        config: OwnerStoreConfig | None = None,
    ) -> None:
        """Initialize Redis owner store.

        Args:
            client: Redis client instance
            config: Owner store configuration (uses defaults if not provided)
        """
        self._client = client
        self._config = config or OwnerStoreConfig(backend="redis")
        self._prefix = self._config.key_prefix

    def _key(self, owner_id: str) -> str:
        return f"{self._prefix}:owner:{owner_id}"

    def _deserialize(self, owner_id: str, data: str | bytes) -> OwnerRecord:
        try:
            return OwnerRecord.model_validate_json(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Corrupt owner record {owner_id}: {e}", cause=e) from e

    async def get(self, owner_id: str) -> OwnerRecord | None:
        """Get an owner record by key."""
        try:
            data = await self._client.get(self._key(owner_id))
        except redis.RedisError as e:
            logger.error("redis_get_error", owner_id=owner_id, error=str(e))
            raise ConnectionError(f"Failed to get owner record: {e}", cause=e) from e

        if data is None:
            logger.debug("owner_record_not_found", owner_id=owner_id)
            return None
        return self._deserialize(owner_id, data)

    async def create(self, record: OwnerRecord) -> str:
        """Provision a new owner record (SET NX)."""
        try:
            created = await self._client.set(
                self._key(record.owner_id), record.model_dump_json(), nx=True
            )
        except redis.RedisError as e:
            logger.error("redis_create_error", owner_id=record.owner_id, error=str(e))
            raise ConnectionError(f"Failed to create owner record: {e}", cause=e) from e

        if not created:
            raise ConflictError(f"Owner record already exists: {record.owner_id}")
        logger.info("owner_record_created", owner_id=record.owner_id)
        return record.owner_id

    async def atomic_update(
        self,
        owner_id: str,
        mutate: Mutation,
    ) -> tuple[OwnerRecord | None, bool]:
        """WATCH the key, evaluate mutate on the fresh document, then EXEC."""
        key = self._key(owner_id)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                for attempt in range(1, self._config.cas_attempts + 1):
                    try:
                        await pipe.watch(key)
                        data = await pipe.get(key)
                        if data is None:
                            return None, False

                        record = self._deserialize(owner_id, data)
                        if not mutate(record):
                            return record, True

                        pipe.multi()
                        pipe.set(key, record.model_dump_json())
                        await pipe.execute()
                        return record, True
                    except redis.WatchError:
                        logger.debug(
                            "redis_watch_conflict",
                            owner_id=owner_id,
                            attempt=attempt,
                        )
        except redis.RedisError as e:
            logger.error("redis_update_error", owner_id=owner_id, error=str(e))
            raise ConnectionError(f"Failed to update owner record: {e}", cause=e) from e

        logger.warning(
            "redis_update_conflict",
            owner_id=owner_id,
            attempts=self._config.cas_attempts,
        )
        raise ConflictError(
            f"Concurrent update of {owner_id} after {self._config.cas_attempts} attempts"
        )

    async def close(self) -> None:
        """Close the Redis client and its connection pool."""
        await self._client.aclose()
        logger.info("redis_owner_store_closed")
