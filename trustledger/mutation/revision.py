"""Per-entity creation and modification provenance."""

from datetime import datetime
from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from trustledger.audit.models import utc_now


class EntityRevisionMetadata(BaseModel):
    """Who created an entity and who last changed it, and when.

    Frozen: `created_by` can never be overwritten, and `last_modified`
    only moves through `advanced()` or `reconciled()`, neither of which
    goes backwards.
    """

    model_config = ConfigDict(frozen=True)

    created_by: str | None = Field(default=None, description="Set once at creation")
    created_at: datetime = Field(default_factory=utc_now)
    last_modified: datetime = Field(default_factory=utc_now)
    last_modified_by: str | None = Field(default=None)

    def advanced(self, actor: str | None, at: datetime | None = None) -> "EntityRevisionMetadata":
        """Return a copy stamped with a successful mutation.

        A timestamp earlier than the current `last_modified` is clamped to
        it, so `last_modified` is monotonic.
        """
        at = at or utc_now()
        return self.model_copy(
            update={
                "last_modified": max(at, self.last_modified),
                "last_modified_by": actor,
            }
        )

    def reconciled(self, incoming: "EntityRevisionMetadata") -> "EntityRevisionMetadata":
        """Accept `incoming` as a replacement for this revision.

        Creation provenance is kept from `self`, and `last_modified`
        cannot move backwards.
        """
        return incoming.model_copy(
            update={
                "created_by": self.created_by,
                "created_at": self.created_at,
                "last_modified": max(incoming.last_modified, self.last_modified),
            }
        )


class AuditedEntity(BaseModel):
    """Base for business entities mutated through a MutationGuard."""

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, description="Unique identifier")
    revision: EntityRevisionMetadata = Field(default_factory=EntityRevisionMetadata)

    @classmethod
    def created_by_actor(cls, actor: str | None, **fields: object) -> Self:
        """Build an entity whose revision records `actor` as its creator."""
        return cls(revision=EntityRevisionMetadata(created_by=actor), **fields)

    def __setattr__(self, name: str, value: Any) -> None:
        # a replaced revision keeps its creator and its latest timestamp
        if name == "revision" and "revision" in self.__dict__:
            value = self.revision.reconciled(EntityRevisionMetadata.model_validate(value))
        super().__setattr__(name, value)
