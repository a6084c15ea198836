"""
Search API schemas.

Dependencies: pydantic
System role: Search API contracts
"""

from pydantic import Field

from q5search.boundary.vdb.vector_schemas import SearchResult
from q5search.models.common import CamelModel


class SearchRequest(CamelModel):
    """Free-text similarity search."""

    query: str = Field(description="Search text")
    threshold: float = Field(default=0.1, ge=-1.0, le=1.0, description="Minimum cosine similarity")
    top_k: int = Field(default=10, ge=1, le=100, description="Maximum number of results")


class SearchResponse(CamelModel):
    results: list[SearchResult]
    total: int
