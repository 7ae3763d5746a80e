"""Enums for the relationship domain."""

from enum import Enum, IntEnum


class RelationshipOrigin(IntEnum):
    """How a relationship was established.

    Stored as its integer value.
    """

    DIRECT_ADD = 1
    IMPORTED = 2
    SYSTEM_GENERATED = 3


class EnsureOutcome(str, Enum):
    """Result of an ensure_relationship call."""

    INSERTED = "inserted"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"
    STORAGE_FAILURE = "storage_failure"
