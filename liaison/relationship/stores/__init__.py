"""Owner record stores."""

from liaison.relationship.store import OwnerRecordStore
from liaison.relationship.stores.inmemory import InMemoryOwnerRecordStore
from liaison.relationship.stores.postgres import PostgresOwnerRecordStore
from liaison.relationship.stores.redis import RedisOwnerRecordStore

__all__ = [
    "OwnerRecordStore",
    "InMemoryOwnerRecordStore",
    "PostgresOwnerRecordStore",
    "RedisOwnerRecordStore",
]
