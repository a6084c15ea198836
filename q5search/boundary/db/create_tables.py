"""
Search schema creation script.

Creates the pgvector extension, the search_documents table, the
match_documents similarity function and, optionally, the unique
(type, link) index. Platform tables are owned elsewhere and never created
here.

Dependencies: sqlalchemy, pgvector, q5search.configs
System role: Search schema initialization

Usage:
    python -m q5search.boundary.db.create_tables
    python -m q5search.boundary.db.create_tables --unique-links
"""

import argparse
import asyncio

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from q5search.boundary.db.base import Base
from q5search.boundary.db.connection import get_async_engine
from q5search.boundary.db.models.search_document_model import SearchDocumentModel

CREATE_EXTENSION_SQL = "CREATE EXTENSION IF NOT EXISTS vector"

# Similarity is 1 - cosine distance; ties keep insertion order.
MATCH_DOCUMENTS_FUNCTION_SQL = """
CREATE OR REPLACE FUNCTION match_documents(
    query_embedding vector,
    match_threshold float,
    match_count int
)
RETURNS TABLE (id bigint, content text, metadata jsonb, similarity float)
LANGUAGE sql STABLE
AS $$
    SELECT
        search_documents.id,
        search_documents.content,
        search_documents.metadata,
        1 - (search_documents.embedding <=> query_embedding) AS similarity
    FROM search_documents
    WHERE 1 - (search_documents.embedding <=> query_embedding) > match_threshold
    ORDER BY search_documents.embedding <=> query_embedding, search_documents.id
    LIMIT match_count;
$$
"""

UNIQUE_LINK_INDEX_SQL = (
    "CREATE UNIQUE INDEX IF NOT EXISTS search_documents_type_link_key "
    "ON search_documents ((metadata->>'type'), (metadata->>'link'))"
)


async def create_search_schema(engine: AsyncEngine, unique_links: bool = False) -> None:
    """
    Create the search schema.

    Idempotent: every statement is IF NOT EXISTS or CREATE OR REPLACE.

    Args:
        engine: Async engine bound to the platform database
        unique_links: Also create the unique (type, link) index

    Raises:
        SQLAlchemyError: If a statement fails (for example the unique index
            cannot be built because duplicate links already exist)
    """
    async with engine.begin() as conn:
        await conn.execute(text(CREATE_EXTENSION_SQL))
        await conn.run_sync(Base.metadata.create_all, tables=[SearchDocumentModel.__table__])
        await conn.execute(text(MATCH_DOCUMENTS_FUNCTION_SQL))
        if unique_links:
            await conn.execute(text(UNIQUE_LINK_INDEX_SQL))


async def drop_search_schema(engine: AsyncEngine) -> None:
    """
    Drop the search_documents table and match_documents.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    async with engine.begin() as conn:
        await conn.execute(text("DROP FUNCTION IF EXISTS match_documents(vector, float, int)"))
        await conn.run_sync(Base.metadata.drop_all, tables=[SearchDocumentModel.__table__])


async def _main(unique_links: bool, drop: bool) -> None:
    engine = get_async_engine()
    try:
        if drop:
            await drop_search_schema(engine)
            print("Search schema dropped.")
        await create_search_schema(engine, unique_links=unique_links)
        print("Search schema created successfully.")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the search_documents schema")
    parser.add_argument("--unique-links", action="store_true", help="Create the unique (type, link) index")
    parser.add_argument("--drop", action="store_true", help="Drop the search schema first")
    args = parser.parse_args()
    asyncio.run(_main(unique_links=args.unique_links, drop=args.drop))
