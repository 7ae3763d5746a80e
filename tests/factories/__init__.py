"""Test factories for creating test data."""

from tests.factories.relationship import (
    EntryFieldsFactory,
    OwnerRecordFactory,
    RelationshipEntryFactory,
)

__all__ = [
    "EntryFieldsFactory",
    "OwnerRecordFactory",
    "RelationshipEntryFactory",
]
