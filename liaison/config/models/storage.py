"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory", "postgres", "redis"]


class OwnerStoreConfig(BaseModel):
    """Configuration for the owner record store.

    Connection URLs may also come from the environment
    (LIAISON_DATABASE_URL / DATABASE_URL for postgres, REDIS_URL for redis).
    """

    backend: BackendType = Field(
        default="inmemory",
        description="Backend type",
    )
    connection_url: str | None = Field(
        default=None,
        description="Connection URL",
    )
    pool_size: int = Field(
        default=10,
        gt=0,
        description="Maximum connections in pool",
    )
    pool_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Command timeout in seconds",
    )
    key_prefix: str = Field(
        default="liaison",
        description="Redis key prefix for owner documents",
    )
    cas_attempts: int = Field(
        default=5,
        gt=0,
        description="Redis WATCH/EXEC attempts before reporting a conflict",
    )


class StorageConfig(BaseModel):
    """Configuration for all storage backends."""

    owner: OwnerStoreConfig = Field(
        default_factory=OwnerStoreConfig,
        description="OwnerRecordStore backend",
    )
