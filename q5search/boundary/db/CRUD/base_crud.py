"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create/Read/Delete operations that can be inherited and
extended by model-specific CRUD classes. Platform tables only use the read
side; search_documents uses all of it.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from q5search.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: Any) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            id: Primary key value

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_where(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
        limit: int | None = None,
    ) -> Sequence[ModelT]:
        """
        Retrieve all records matching the given filter criteria.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions (ANDed)
            limit: Maximum number of records to return (None for all)

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).where(*criteria)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_where(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
    ) -> int:
        """
        Count records matching the given filter criteria.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions (ANDed)

        Returns:
            Number of matching rows
        """
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def delete_where(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
    ) -> int:
        """
        Delete records matching the given filter criteria.

        Args:
            session: Async database session
            *criteria: SQLAlchemy boolean expressions (ANDed)

        Returns:
            Number of deleted rows
        """
        stmt = delete(self.model).where(*criteria)
        result = await session.execute(stmt)
        return result.rowcount
