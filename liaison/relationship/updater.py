"""Idempotent "ensure relationship exists" mutation.

RelationshipUpdater adds a peer to an owner's document at most once.
The membership check, the append and the version bump are evaluated
inside a single OwnerRecordStore.atomic_update call, so concurrent
callers never observe or produce a half-applied change.
"""

import time
from collections.abc import Callable
from datetime import datetime

from liaison.db.errors import StoreError
from liaison.observability.logging import get_logger
from liaison.observability.metrics import (
    RELATIONSHIP_ENSURE_COUNT,
    RELATIONSHIP_ENSURE_LATENCY,
    STORE_ERRORS,
)
from liaison.relationship.enums import EnsureOutcome
from liaison.relationship.models import (
    EnsureResult,
    EntryFields,
    OwnerRecord,
    RelationshipEntry,
    utc_now,
)
from liaison.relationship.store import OwnerRecordStore

logger = get_logger(__name__)


def ensure_entry(
    record: OwnerRecord,
    peer_id: str,
    fields: EntryFields,
    created_at: datetime,
) -> RelationshipEntry | None:
    """Append an entry for peer_id unless one is already present.

    Tombstoned entries count as present. On insert the new entry
    snapshots the version before the bump, then the version advances
    by one. Mutates record in place.

    Returns:
        The inserted entry, or None if record was left untouched
    """
    if record.find(peer_id) is not None:
        return None

    entry = RelationshipEntry.from_fields(
        peer_id,
        fields,
        created_at=created_at,
        entry_version=record.version,
    )
    record.relationships.append(entry)
    record.version += 1
    return entry


class RelationshipUpdater:
    """Ensures relationship entries exist on owner records.

    Never retries a failed store call; a StoreError is reported as
    STORAGE_FAILURE and the caller may safely call again.
    """

    def __init__(
        self,
        store: OwnerRecordStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the updater.

        Args:
            store: Storage collaborator providing atomic_update
            clock: Source of creation timestamps
        """
        self._store = store
        self._clock = clock

    @property
    def store(self) -> OwnerRecordStore:
        return self._store

    async def close(self) -> None:
        """Release the store's connections."""
        await self._store.close()

    async def ensure_relationship(
        self,
        owner_id: str,
        peer_id: str,
        fields: EntryFields | None = None,
    ) -> EnsureResult:
        """Add peer_id to owner_id's relationships if it is not there yet.

        Args:
            owner_id: Key of an existing owner record
            peer_id: Related party; callers must not pass owner_id here
            fields: Payload used only when a new entry is created

        Returns:
            EnsureResult with INSERTED, UNCHANGED, NOT_FOUND or STORAGE_FAILURE

        Raises:
            ValueError: If peer_id is empty; the store is not contacted
        """
        if not peer_id:
            raise ValueError("peer_id must be a non-empty string")

        fields = fields or EntryFields()
        # One timestamp per call, reused if the store re-evaluates the mutation
        created_at = self._clock()
        start = time.perf_counter()

        inserted: RelationshipEntry | None = None

        def mutate(record: OwnerRecord) -> bool:
            nonlocal inserted
            inserted = ensure_entry(record, peer_id, fields, created_at)
            return inserted is not None

        try:
            record, matched = await self._store.atomic_update(owner_id, mutate)
        except StoreError as e:
            STORE_ERRORS.labels(
                backend=self._store.backend, error_type=type(e).__name__
            ).inc()
            logger.error(
                "relationship_storage_failure",
                owner_id=owner_id,
                peer_id=peer_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return self._finish(
                start,
                EnsureResult(
                    outcome=EnsureOutcome.STORAGE_FAILURE,
                    owner_id=owner_id,
                    peer_id=peer_id,
                    error=str(e),
                    cause=e,
                ),
            )

        if not matched:
            logger.info("owner_record_not_found", owner_id=owner_id, peer_id=peer_id)
            return self._finish(
                start,
                EnsureResult(
                    outcome=EnsureOutcome.NOT_FOUND,
                    owner_id=owner_id,
                    peer_id=peer_id,
                ),
            )

        # Taken from the returned document, not the store's working copy
        entry = record.find(peer_id)

        if inserted is not None:
            logger.info(
                "relationship_inserted",
                owner_id=owner_id,
                peer_id=peer_id,
                version=record.version,
                entry_version=inserted.entry_version,
            )
            return self._finish(
                start,
                EnsureResult(
                    outcome=EnsureOutcome.INSERTED,
                    owner_id=owner_id,
                    peer_id=peer_id,
                    record=record,
                    entry=entry,
                ),
            )

        logger.debug(
            "relationship_unchanged",
            owner_id=owner_id,
            peer_id=peer_id,
            version=record.version,
            tombstoned=bool(entry and entry.deleted),
        )
        return self._finish(
            start,
            EnsureResult(
                outcome=EnsureOutcome.UNCHANGED,
                owner_id=owner_id,
                peer_id=peer_id,
                record=record,
                entry=entry,
            ),
        )

    @staticmethod
    def _finish(start: float, result: EnsureResult) -> EnsureResult:
        RELATIONSHIP_ENSURE_LATENCY.observe(time.perf_counter() - start)
        RELATIONSHIP_ENSURE_COUNT.labels(outcome=result.outcome.value).inc()
        return result
