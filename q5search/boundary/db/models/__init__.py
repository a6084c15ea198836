"""
Database models package.

Exports:
  - SearchDocumentModel: search_documents table (written by this service)
  - JobModel, ProductModel, OrganizationModel, ProfileModel, QuestionModel,
    PostModel, ConnectionModel: read-only platform tables

Dependencies: sqlalchemy, pgvector, q5search.boundary.db.base
System role: Database model definitions for domain entities
"""

from q5search.boundary.db.models.search_document_model import SearchDocumentModel
from q5search.boundary.db.models.source_models import (
    ConnectionModel,
    JobModel,
    OrganizationModel,
    PostModel,
    ProductModel,
    ProfileModel,
    QuestionModel,
)

__all__ = [
    "SearchDocumentModel",
    "JobModel",
    "ProductModel",
    "OrganizationModel",
    "ProfileModel",
    "QuestionModel",
    "PostModel",
    "ConnectionModel",
]
