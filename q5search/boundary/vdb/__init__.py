"""
Vector document layer: schemas and the pgvector-backed document store.
"""

from q5search.boundary.vdb.document_store import DocumentStore
from q5search.boundary.vdb.vector_schemas import (
    EntityType,
    ProviderId,
    SearchDocument,
    SearchMetadata,
    SearchResult,
)

__all__ = [
    "DocumentStore",
    "EntityType",
    "ProviderId",
    "SearchDocument",
    "SearchMetadata",
    "SearchResult",
]
