"""
Indexing domain models and schemas.

Summary of an indexing run and the single-entity sync request.

Dependencies: pydantic
System role: Indexing API contracts
"""

from enum import Enum
from typing import Any

from pydantic import Field

from q5search.boundary.vdb.vector_schemas import EntityType
from q5search.models.common import CamelModel


class ItemError(CamelModel):
    """Failure of one entity (or of a whole type fetch when link is None)."""

    entity_type: EntityType
    link: str | None = None
    error: str


class TypeSummary(CamelModel):
    """Counters for one entity type."""

    fetched: int = 0
    inserted: int = 0
    skipped: int = 0
    ineligible: int = 0
    failed: int = 0


class IndexingSummary(CamelModel):
    """
    Outcome of an indexing run.

    Attributes:
        inserted_count: Documents written in this run
        skipped_count: Entities already indexed (or lost a uniqueness race)
        ineligible_count: Entities deliberately not indexed
        errors: Per-item and per-type failures
        per_type: Counters keyed by entity type
    """

    inserted_count: int = 0
    skipped_count: int = 0
    ineligible_count: int = 0
    errors: list[ItemError] = Field(default_factory=list)
    per_type: dict[EntityType, TypeSummary] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors

    def merge(self, entity_type: EntityType, counts: TypeSummary, errors: list[ItemError]) -> None:
        """Fold one type batch into the run totals."""
        self.per_type[entity_type] = counts
        self.inserted_count += counts.inserted
        self.skipped_count += counts.skipped
        self.ineligible_count += counts.ineligible
        self.errors.extend(errors)


class SyncAction(str, Enum):
    UPSERT = "upsert"
    DELETE = "delete"


class SyncRequest(CamelModel):
    """Refresh or remove the search document of one entity."""

    type: EntityType = Field(description="Entity type")
    data: dict[str, Any] = Field(description="Entity columns (id, or slug for organizations)")
    action: SyncAction = Field(default=SyncAction.UPSERT, description="upsert or delete")
