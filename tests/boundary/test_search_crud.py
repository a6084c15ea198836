"""
Test suite for search_documents and platform CRUD queries.

Uses a mocked AsyncSession; statements are compiled against the PostgreSQL
dialect to check the generated SQL.

System role: Verification of CRUD query construction
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from q5search.boundary.db.CRUD.search_document_crud import SearchDocumentCRUD
from q5search.boundary.db.CRUD.source_crud import ConnectionCRUD, PostCRUD
from q5search.boundary.db.models import ProfileModel, SearchDocumentModel


def compiled_sql(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


@pytest.fixture
def mock_session() -> AsyncSession:
    return AsyncMock(spec=AsyncSession)


class TestSearchDocumentCRUD:
    @pytest.mark.asyncio
    async def test_exists_by_link_should_query_metadata_link(self, mock_session) -> None:
        # Arrange
        result = MagicMock()
        result.scalar_one_or_none.return_value = 42
        mock_session.execute.return_value = result

        # Act
        exists = await SearchDocumentCRUD().exists_by_link(mock_session, "acme-labs")

        # Assert
        assert exists is True
        sql = compiled_sql(mock_session.execute.call_args.args[0])
        assert "search_documents.metadata ->>" in sql
        assert "LIMIT" in sql

    @pytest.mark.asyncio
    async def test_exists_by_link_should_be_false_without_rows(self, mock_session) -> None:
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        assert await SearchDocumentCRUD().exists_by_link(mock_session, "missing") is False

    @pytest.mark.asyncio
    async def test_insert_document_should_skip_conflicts_when_asked(self, mock_session) -> None:
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        row_id = await SearchDocumentCRUD().insert_document(
            mock_session,
            content="Type: Job",
            embedding=[0.1, 0.2],
            metadata={"type": "job", "link": "j1"},
            skip_on_conflict=True,
        )

        assert row_id is None
        sql = compiled_sql(mock_session.execute.call_args.args[0])
        assert "ON CONFLICT DO NOTHING" in sql
        assert "RETURNING search_documents.id" in sql

    @pytest.mark.asyncio
    async def test_match_documents_should_call_procedure_with_vector_literal(self, mock_session) -> None:
        # Arrange
        result = MagicMock()
        result.mappings.return_value.all.return_value = [{"id": 1}]
        mock_session.execute.return_value = result

        # Act
        rows = await SearchDocumentCRUD().match_documents(
            mock_session, query_embedding=[1.0, 0.5], match_threshold=0.1, match_count=10
        )

        # Assert
        assert rows == [{"id": 1}]
        statement, params = mock_session.execute.call_args.args
        assert "match_documents(" in str(statement)
        assert params["query_embedding"].startswith("[")
        assert params["match_threshold"] == 0.1
        assert params["match_count"] == 10


class TestSocialGraphCRUD:
    @pytest.mark.asyncio
    async def test_accepted_peers_should_read_both_directions(self, mock_session) -> None:
        # Arrange
        me, peer_a, peer_b = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        result = MagicMock()
        result.all.return_value = [(me, peer_a), (peer_b, me), (peer_a, me)]
        mock_session.execute.return_value = result

        # Act
        peers = await ConnectionCRUD().get_accepted_peer_ids(mock_session, me)

        # Assert
        assert peers == [peer_a, peer_b]
        sql = compiled_sql(mock_session.execute.call_args.args[0])
        assert "connections.status" in sql
        assert " OR " in sql

    @pytest.mark.asyncio
    async def test_recent_posts_should_not_query_without_authors(self, mock_session) -> None:
        post_ids = await PostCRUD().get_recent_ids_by_authors(mock_session, [], limit=20)

        assert post_ids == []
        mock_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_recent_posts_should_order_newest_first_with_limit(self, mock_session) -> None:
        post_id = uuid.uuid4()
        result = MagicMock()
        result.scalars.return_value.all.return_value = [post_id]
        mock_session.execute.return_value = result

        post_ids = await PostCRUD().get_recent_ids_by_authors(mock_session, [uuid.uuid4()], limit=20)

        assert post_ids == [str(post_id)]
        sql = compiled_sql(mock_session.execute.call_args.args[0])
        assert "ORDER BY posts.created_at DESC" in sql
        assert "LIMIT" in sql


class TestTableMappings:
    def test_search_documents_should_have_only_indexed_columns(self) -> None:
        columns = {column.name for column in SearchDocumentModel.__table__.columns}

        assert columns == {"id", "content", "embedding", "metadata"}

    def test_platform_keys_should_not_generate_ids(self) -> None:
        id_column = ProfileModel.__table__.columns["id"]

        assert id_column.primary_key
        assert id_column.default is None
