"""
CRUD operations package.

Exports CRUD classes and singletons for the search_documents table and the
read-only platform tables.
"""

from q5search.boundary.db.CRUD.base_crud import BaseCRUD
from q5search.boundary.db.CRUD.search_document_crud import (
    SearchDocumentCRUD,
    search_document_crud,
)
from q5search.boundary.db.CRUD.source_crud import (
    ConnectionCRUD,
    JobCRUD,
    OrganizationCRUD,
    PostCRUD,
    ProductCRUD,
    ProfileCRUD,
    QuestionCRUD,
    connection_crud,
    job_crud,
    organization_crud,
    post_crud,
    product_crud,
    profile_crud,
    question_crud,
)

__all__ = [
    "BaseCRUD",
    "SearchDocumentCRUD",
    "JobCRUD",
    "ProductCRUD",
    "OrganizationCRUD",
    "ProfileCRUD",
    "QuestionCRUD",
    "ConnectionCRUD",
    "PostCRUD",
    "search_document_crud",
    "job_crud",
    "product_crud",
    "organization_crud",
    "profile_crud",
    "question_crud",
    "connection_crud",
    "post_crud",
]
