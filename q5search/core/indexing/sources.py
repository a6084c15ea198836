"""
Source entity reader for the indexing pipeline.

Dependencies: sqlalchemy, q5search.boundary.db.CRUD
System role: Read indexable rows per entity type
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy.ext.asyncio import async_sessionmaker

from q5search.boundary.db.CRUD import (
    job_crud,
    organization_crud,
    product_crud,
    profile_crud,
    question_crud,
)
from q5search.boundary.vdb.vector_schemas import EntityType
from q5search.core.exceptions import ValidationError


class SourceReader:
    """Fetches the rows eligible for indexing, applying publish/active filters."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def fetch(self, entity_type: EntityType) -> Sequence[Any]:
        """
        Fetch every indexable row of one entity type.

        Jobs are limited to published rows and organizations to active ones.

        Raises:
            ValidationError: If the type has no source table
        """
        async with self._session_factory() as session:
            if entity_type == EntityType.JOB:
                return await job_crud.get_published(session)
            if entity_type == EntityType.PRODUCT:
                return await product_crud.get_where(session)
            if entity_type == EntityType.ORGANIZATION:
                return await organization_crud.get_active(session)
            if entity_type == EntityType.PROFILE:
                return await profile_crud.get_where(session)
            if entity_type == EntityType.QUESTION:
                return await question_crud.get_where(session)
        raise ValidationError(f"No source table for entity type '{entity_type.value}'", field="type")
