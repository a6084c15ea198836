"""
Vector document schemas.

Pydantic models for search documents, their metadata tags and similarity
results. Used for type-safe document store interactions.

Dependencies: pydantic
System role: Type definitions for indexing and retrieval
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntityType(str, Enum):
    """Kind of platform entity a search document represents."""

    JOB = "job"
    PRODUCT = "product"
    ORGANIZATION = "organization"
    PROFILE = "profile"
    QUESTION = "question"
    POST = "post"


class ProviderId(str, Enum):
    """Embedding provider that produced a vector. Vectors of different providers are not comparable."""

    OPENAI = "openai"
    GOOGLE = "google"


class SearchMetadata(BaseModel):
    """
    Metadata attached to each search document.

    Extra keys written by other producers are kept so rows round-trip
    unchanged.
    """

    model_config = ConfigDict(extra="allow", use_enum_values=False)

    type: EntityType = Field(description="Source entity kind")
    link: str = Field(description="Stable entity identifier (primary key, or slug for organizations)")
    title: str | None = Field(default=None, description="Display title of the entity")
    provider: ProviderId | None = Field(
        default=None,
        description="Embedding provider of the stored vector (None on legacy rows)",
    )


class SearchDocument(BaseModel):
    """A rendered entity ready to be embedded and stored."""

    content: str = Field(description="Labeled-field rendering of the entity")
    metadata: SearchMetadata
    embedding: list[float] | None = Field(default=None, description="Embedding of the content")


class SearchResult(BaseModel):
    """Single row returned by the similarity search."""

    id: int | str = Field(description="search_documents primary key")
    content: str = Field(description="Document content")
    metadata: SearchMetadata
    similarity: float = Field(description="Cosine similarity to the query")
