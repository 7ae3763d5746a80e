"""OwnerRecordStore factory for creating backend instances.

Connection strings are read from configuration first, then from the
environment:
- LIAISON_DATABASE_URL or DATABASE_URL: PostgreSQL (see PostgresPool)
- REDIS_URL: Redis (defaults to redis://localhost:6379/0)
"""

import os

from liaison.config.models.storage import OwnerStoreConfig
from liaison.observability.logging import get_logger
from liaison.relationship.store import OwnerRecordStore
from liaison.relationship.stores.inmemory import InMemoryOwnerRecordStore

logger = get_logger(__name__)


def create_owner_store(config: OwnerStoreConfig) -> OwnerRecordStore:
    """Create an OwnerRecordStore instance based on configuration.

    Args:
        config: Owner store configuration from settings

    Returns:
        Configured OwnerRecordStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    backend = config.backend

    if backend == "inmemory":
        logger.info("creating_owner_store", backend="inmemory")
        return InMemoryOwnerRecordStore()

    elif backend == "postgres":
        from liaison.db.pool import PostgresPool
        from liaison.relationship.stores.postgres import PostgresOwnerRecordStore

        pool = PostgresPool(
            dsn=config.connection_url,
            max_size=config.pool_size,
            command_timeout=config.pool_timeout,
        )
        logger.info(
            "creating_owner_store",
            backend="postgres",
            pool_size=config.pool_size,
        )
        return PostgresOwnerRecordStore(pool)

    elif backend == "redis":
        import redis.asyncio as redis

        from liaison.relationship.stores.redis import RedisOwnerRecordStore

        url = config.connection_url or os.environ.get(
            "REDIS_URL", "redis://localhost:6379/0"
        )
        client = redis.from_url(
            url,
            decode_responses=True,
            max_connections=config.pool_size,
            socket_timeout=config.pool_timeout,
        )
        logger.info(
            "creating_owner_store",
            backend="redis",
            prefix=config.key_prefix,
            cas_attempts=config.cas_attempts,
        )
        return RedisOwnerRecordStore(client, config)

    else:
        raise ValueError(f"Unsupported owner store backend: {backend}")
