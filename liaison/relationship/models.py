"""Relationship domain models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from liaison.relationship.enums import EnsureOutcome, RelationshipOrigin


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class EntryFields(BaseModel):
    """Descriptive payload for a relationship that may be created."""

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(default="", description="Nickname shown to the owner")
    avatar_ref: str = Field(default="", description="Avatar URL or asset key")
    note: str = Field(default="", description="Private remark")
    origin: RelationshipOrigin = Field(
        default=RelationshipOrigin.DIRECT_ADD, description="How it was established"
    )
    initiator_id: str = Field(default="", description="Actor who caused creation")
    extra: str = Field(default="", description="Opaque auxiliary payload")
    pinned: bool = Field(default=False, description="Pinned to top of list")


class RelationshipEntry(BaseModel):
    """One relationship between an owner and a peer."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    peer_id: str = Field(..., min_length=1, description="Related party")
    display_name: str = Field(default="", description="Nickname shown to the owner")
    avatar_ref: str = Field(default="", description="Avatar URL or asset key")
    note: str = Field(default="", description="Private remark")
    created_at: datetime = Field(..., description="Creation time")
    origin: RelationshipOrigin = Field(
        default=RelationshipOrigin.DIRECT_ADD, description="How it was established"
    )
    initiator_id: str = Field(default="", description="Actor who caused creation")
    extra: str = Field(default="", description="Opaque auxiliary payload")
    pinned: bool = Field(default=False, description="Pinned to top of list")
    entry_version: int = Field(
        ..., ge=0, description="Owner version at the moment of insertion"
    )
    deleted: bool = Field(default=False, description="Tombstone flag")

    @classmethod
    def from_fields(
        cls,
        peer_id: str,
        fields: EntryFields,
        *,
        created_at: datetime,
        entry_version: int,
    ) -> "RelationshipEntry":
        """Build a fresh, live entry from caller-supplied fields."""
        return cls(
            peer_id=peer_id,
            created_at=created_at,
            entry_version=entry_version,
            deleted=False,
            **fields.model_dump(),
        )


class OwnerRecord(BaseModel):
    """Per-owner relationship document.

    `version` advances by one for every accepted change to
    `relationships`, which keeps insertion order.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    owner_id: str = Field(..., min_length=1, description="Lookup key")
    version: int = Field(default=0, ge=0, description="Monotonic change counter")
    relationships: list[RelationshipEntry] = Field(
        default_factory=list, description="Entries in insertion order"
    )

    def find(self, peer_id: str) -> RelationshipEntry | None:
        """Return the entry for peer_id, tombstoned or not."""
        for entry in self.relationships:
            if entry.peer_id == peer_id:
                return entry
        return None


class EnsureResult(BaseModel):
    """Outcome of ensure_relationship together with what was committed."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    outcome: EnsureOutcome
    owner_id: str
    peer_id: str
    record: OwnerRecord | None = Field(
        default=None, description="Document as committed"
    )
    entry: RelationshipEntry | None = Field(
        default=None, description="Inserted or pre-existing entry"
    )
    error: str | None = Field(default=None, description="Storage failure message")
    cause: Exception | None = Field(default=None, exclude=True)

    @property
    def changed(self) -> bool:
        return self.outcome == EnsureOutcome.INSERTED
