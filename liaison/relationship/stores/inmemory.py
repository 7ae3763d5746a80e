"""In-memory implementation of OwnerRecordStore."""

import asyncio
from collections import defaultdict

from liaison.db.errors import ConflictError
from liaison.relationship.models import OwnerRecord
from liaison.relationship.store import Mutation, OwnerRecordStore


class InMemoryOwnerRecordStore(OwnerRecordStore):
    """In-memory implementation of OwnerRecordStore for testing and development.

    Serializes atomic_update per owner_id with an asyncio.Lock; owners
    never contend with each other. Documents are copied on the way in
    and out so callers cannot alter stored state.
    """

    backend = "inmemory"

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._records: dict[str, OwnerRecord] = {}
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def get(self, owner_id: str) -> OwnerRecord | None:
        """Get an owner record by key."""
        record = self._records.get(owner_id)
        return record.model_copy(deep=True) if record else None

    async def create(self, record: OwnerRecord) -> str:
        """Provision a new owner record."""
        async with self._locks[record.owner_id]:
            if record.owner_id in self._records:
                raise ConflictError(f"Owner record already exists: {record.owner_id}")
            self._records[record.owner_id] = record.model_copy(deep=True)
        return record.owner_id

    async def atomic_update(
        self,
        owner_id: str,
        mutate: Mutation,
    ) -> tuple[OwnerRecord | None, bool]:
        """Apply mutate to a copy under the owner's lock, then swap it in."""
        # Records are never removed; unknown owners get no lock entry
        if owner_id not in self._records:
            return None, False

        async with self._locks[owner_id]:
            current = self._records[owner_id]
            working = current.model_copy(deep=True)
            if mutate(working):
                self._records[owner_id] = working
                return working.model_copy(deep=True), True
            return current.model_copy(deep=True), True
