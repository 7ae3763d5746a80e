"""Relationship documents: per-owner friend lists with a version counter.

    updater = RelationshipUpdater(InMemoryOwnerRecordStore())
    result = await updater.ensure_relationship("2000", "1000", EntryFields())
"""

from liaison.relationship.enums import EnsureOutcome, RelationshipOrigin
from liaison.relationship.factory import create_owner_store
from liaison.relationship.models import (
    EnsureResult,
    EntryFields,
    OwnerRecord,
    RelationshipEntry,
)
from liaison.relationship.store import Mutation, OwnerRecordStore
from liaison.relationship.stores.inmemory import InMemoryOwnerRecordStore
from liaison.relationship.updater import RelationshipUpdater, ensure_entry

__all__ = [
    # Enums
    "EnsureOutcome",
    "RelationshipOrigin",
    # Models
    "EnsureResult",
    "EntryFields",
    "OwnerRecord",
    "RelationshipEntry",
    # Storage
    "Mutation",
    "OwnerRecordStore",
    "InMemoryOwnerRecordStore",
    "create_owner_store",
    # Core
    "RelationshipUpdater",
    "ensure_entry",
]
