"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - SearchDocumentModel plus the read-only platform models

Dependencies: sqlalchemy, asyncpg, pgvector, q5search.configs
System role: Database adapter for the search index and platform reads
"""

from q5search.boundary.db.base import Base, UUIDMixin
from q5search.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    get_shared_session_factory,
)
from q5search.boundary.db.models import (
    ConnectionModel,
    JobModel,
    OrganizationModel,
    PostModel,
    ProductModel,
    ProfileModel,
    QuestionModel,
    SearchDocumentModel,
)

__all__ = [
    # Base classes
    "Base",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "get_shared_session_factory",
    # Models
    "SearchDocumentModel",
    "JobModel",
    "ProductModel",
    "OrganizationModel",
    "ProfileModel",
    "QuestionModel",
    "PostModel",
    "ConnectionModel",
]
