"""
Postgres/pgvector document store.

Wraps search_document_crud with one session per operation, commits writes,
and converts SQLAlchemy failures into DocumentStoreError.

Dependencies: sqlalchemy, q5search.boundary.db, q5search.boundary.vdb.vector_schemas
System role: Document store used by indexing and retrieval
"""

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from q5search.boundary.db.CRUD.search_document_crud import search_document_crud
from q5search.boundary.vdb.vector_schemas import SearchDocument, SearchResult
from q5search.core.exceptions import DocumentStoreError

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    search_documents table access.

    Existence check and insert are separate calls: check-then-insert is not
    atomic, so two concurrent indexing runs can both insert the same link.
    With skip_on_conflict=True and the unique (type, link) index installed,
    the losing insert becomes a no-op instead.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        skip_on_conflict: bool = False,
    ) -> None:
        """
        Initialize document store.

        Args:
            session_factory: Factory producing AsyncSession instances
            skip_on_conflict: Insert with ON CONFLICT DO NOTHING
        """
        self._session_factory = session_factory
        self._skip_on_conflict = skip_on_conflict

    async def exists(self, link: str) -> bool:
        """
        Check whether a document is indexed for a link.

        Raises:
            DocumentStoreError: If the query fails
        """
        try:
            async with self._session_factory() as session:
                return await search_document_crud.exists_by_link(session, link)
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                message="Failed to check document existence",
                operation="exists",
                details={"link": link, "error": str(e)},
            ) from e

    async def insert(self, document: SearchDocument) -> bool:
        """
        Insert a document.

        Args:
            document: Document with embedding populated

        Returns:
            True if a row was written, False if skipped by a uniqueness conflict

        Raises:
            DocumentStoreError: If the insert fails
        """
        if document.embedding is None:
            raise DocumentStoreError(
                message="Cannot store a document without an embedding",
                operation="insert",
                details={"link": document.metadata.link},
            )
        try:
            async with self._session_factory() as session:
                row_id = await search_document_crud.insert_document(
                    session,
                    content=document.content,
                    embedding=document.embedding,
                    metadata=document.metadata.model_dump(mode="json", exclude_none=True),
                    skip_on_conflict=self._skip_on_conflict,
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                message="Failed to insert search document",
                operation="insert",
                details={"link": document.metadata.link, "error": str(e)},
            ) from e
        return row_id is not None

    async def replace(self, document: SearchDocument) -> None:
        """
        Replace every document for the link with this one, in one transaction.

        Raises:
            DocumentStoreError: If delete or insert fails
        """
        link = document.metadata.link
        try:
            async with self._session_factory() as session:
                deleted = await search_document_crud.delete_by_link(session, link)
                await search_document_crud.insert_document(
                    session,
                    content=document.content,
                    embedding=document.embedding,
                    metadata=document.metadata.model_dump(mode="json", exclude_none=True),
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                message="Failed to replace search document",
                operation="replace",
                details={"link": link, "error": str(e)},
            ) from e
        logger.info(f"{__name__}:replace - link={link} replaced {deleted} existing row(s)")

    async def delete(self, link: str) -> int:
        """
        Delete the documents for a link.

        Returns:
            Number of deleted rows

        Raises:
            DocumentStoreError: If the delete fails
        """
        try:
            async with self._session_factory() as session:
                deleted = await search_document_crud.delete_by_link(session, link)
                await session.commit()
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                message="Failed to delete search document",
                operation="delete",
                details={"link": link, "error": str(e)},
            ) from e
        return deleted

    async def match(
        self,
        query_embedding: list[float],
        threshold: float,
        count: int,
    ) -> list[SearchResult]:
        """
        Nearest-neighbour search through match_documents.

        Rows whose metadata does not parse are dropped with a warning.

        Args:
            query_embedding: Query vector
            threshold: Minimum cosine similarity
            count: Maximum number of rows

        Returns:
            Results ordered by descending similarity

        Raises:
            DocumentStoreError: If the procedure call fails
        """
        try:
            async with self._session_factory() as session:
                rows = await search_document_crud.match_documents(
                    session,
                    query_embedding=query_embedding,
                    match_threshold=threshold,
                    match_count=count,
                )
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                message="match_documents failed",
                operation="match",
                details={"threshold": threshold, "count": count, "error": str(e)},
            ) from e

        results = []
        for row in rows:
            try:
                results.append(
                    SearchResult(
                        id=row["id"],
                        content=row["content"],
                        metadata=row["metadata"] or {},
                        similarity=row["similarity"],
                    )
                )
            except PydanticValidationError as e:
                logger.warning(
                    f"{__name__}:match - Dropping row id={row['id']} with unusable metadata: {e.error_count()} error(s)"
                )
        return results
