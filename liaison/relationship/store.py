"""OwnerRecordStore abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from liaison.db.errors import NotFoundError
from liaison.relationship.models import OwnerRecord, RelationshipEntry

# Receives a private copy of the current document, mutates it in place and
# returns True when the copy must be written back.
Mutation = Callable[[OwnerRecord], bool]


class OwnerRecordStore(ABC):
    """Abstract interface for owner relationship document storage.

    Implementations must make atomic_update indivisible per owner_id:
    no other write to the same key may land between its read and its
    write. Backend failures are raised as StoreError subclasses.
    """

    backend: str = "abstract"

    @abstractmethod
    async def get(self, owner_id: str) -> OwnerRecord | None:
        """Get an owner record by key."""
        pass

    @abstractmethod
    async def create(self, record: OwnerRecord) -> str:
        """Provision a new owner record.

        Raises:
            ConflictError: If a record with the same owner_id exists
        """
        pass

    @abstractmethod
    async def atomic_update(
        self,
        owner_id: str,
        mutate: Mutation,
    ) -> tuple[OwnerRecord | None, bool]:
        """Read, evaluate and write back one document as a single unit.

        Returns:
            The committed document (or the untouched one when mutate
            returned False) and whether any document matched owner_id.
        """
        pass

    async def take_relationship(self, owner_id: str, peer_id: str) -> RelationshipEntry:
        """Get a single relationship entry.

        Raises:
            NotFoundError: If the owner or the entry does not exist
        """
        record = await self.get(owner_id)
        if record is None:
            raise NotFoundError(f"Owner record not found: {owner_id}")
        entry = record.find(peer_id)
        if entry is None:
            raise NotFoundError(f"Relationship not found: {owner_id} -> {peer_id}")
        return entry

    async def find_relationships(
        self,
        owner_id: str,
        peer_ids: Iterable[str],
    ) -> list[RelationshipEntry]:
        """Get the entries for the given peers in document order.

        Missing peers and a missing owner are not errors.
        """
        record = await self.get(owner_id)
        if record is None:
            return []
        wanted = set(peer_ids)
        return [e for e in record.relationships if e.peer_id in wanted]

    async def close(self) -> None:
        """Release connections held by the backend."""
        pass

    async def __aenter__(self) -> "OwnerRecordStore":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
