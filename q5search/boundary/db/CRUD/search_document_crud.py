"""
Search document CRUD operations.

Link-keyed existence checks, inserts, deletes and the match_documents
similarity procedure for the search_documents table.

Dependencies: sqlalchemy, pgvector, q5search.boundary.db.models
System role: Vector document persistence operations
"""

from typing import Any, Sequence

from pgvector import Vector
from sqlalchemy import BigInteger, Float, Text, select, text
from sqlalchemy.dialects.postgresql import JSONB, insert as pg_insert
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from q5search.boundary.db.CRUD.base_crud import BaseCRUD
from q5search.boundary.db.models.search_document_model import SearchDocumentModel

MATCH_DOCUMENTS_SQL = (
    "SELECT id, content, metadata, similarity "
    "FROM match_documents(CAST(:query_embedding AS vector), :match_threshold, :match_count)"
)


class SearchDocumentCRUD(BaseCRUD[SearchDocumentModel]):
    """
    CRUD operations for SearchDocumentModel.

    The metadata link is the dedup key: every lookup goes through
    metadata->>'link'.
    """

    def __init__(self) -> None:
        """Initialize SearchDocumentCRUD with SearchDocumentModel."""
        super().__init__(SearchDocumentModel)

    @staticmethod
    def _link_column():
        return SearchDocumentModel.document_metadata["link"].as_string()

    async def exists_by_link(self, session: AsyncSession, link: str) -> bool:
        """
        Check whether a document is already indexed for a link.

        Args:
            session: Async database session
            link: Entity link (primary key or organization slug)

        Returns:
            True if at least one document carries this link
        """
        stmt = select(SearchDocumentModel.id).where(self._link_column() == link).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def insert_document(
        self,
        session: AsyncSession,
        content: str,
        embedding: list[float],
        metadata: dict[str, Any],
        skip_on_conflict: bool = False,
    ) -> int | None:
        """
        Insert one search document.

        Args:
            session: Async database session
            content: Rendered entity text
            embedding: Embedding vector of the content
            metadata: JSON metadata (type, link, title, provider)
            skip_on_conflict: Use ON CONFLICT DO NOTHING (needs the unique link index)

        Returns:
            New row id, or None when the insert was skipped by a conflict
        """
        stmt = (
            pg_insert(SearchDocumentModel)
            .values(content=content, embedding=embedding, document_metadata=metadata)
            .returning(SearchDocumentModel.id)
        )
        if skip_on_conflict:
            stmt = stmt.on_conflict_do_nothing()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_link(self, session: AsyncSession, link: str) -> int:
        """
        Delete every document carrying a link.

        Args:
            session: Async database session
            link: Entity link

        Returns:
            Number of deleted rows
        """
        return await self.delete_where(session, self._link_column() == link)

    async def match_documents(
        self,
        session: AsyncSession,
        query_embedding: list[float],
        match_threshold: float,
        match_count: int,
    ) -> Sequence[RowMapping]:
        """
        Run the match_documents stored procedure.

        Args:
            session: Async database session
            query_embedding: Query vector (same provider as the index)
            match_threshold: Minimum cosine similarity
            match_count: Maximum number of rows

        Returns:
            Rows with id, content, metadata, similarity ordered by descending similarity
        """
        stmt = text(MATCH_DOCUMENTS_SQL).columns(
            id=BigInteger,
            content=Text,
            metadata=JSONB,
            similarity=Float,
        )
        result = await session.execute(
            stmt,
            {
                "query_embedding": Vector(query_embedding).to_text(),
                "match_threshold": match_threshold,
                "match_count": match_count,
            },
        )
        return result.mappings().all()


search_document_crud = SearchDocumentCRUD()
