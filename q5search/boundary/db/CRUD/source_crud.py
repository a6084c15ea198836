"""
Read-only CRUD operations for platform tables.

Publish/active filters for indexing, profile lookups, platform counts and
the accepted-connection social graph.

Dependencies: sqlalchemy, q5search.boundary.db.models
System role: Source entity and social graph reads
"""

from typing import Any, Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from q5search.boundary.db.CRUD.base_crud import BaseCRUD
from q5search.boundary.db.models.source_models import (
    ConnectionModel,
    JobModel,
    OrganizationModel,
    PostModel,
    ProductModel,
    ProfileModel,
    QuestionModel,
)

ACCEPTED_STATUS = "accepted"


class JobCRUD(BaseCRUD[JobModel]):
    """Reads for the jobs table."""

    def __init__(self) -> None:
        super().__init__(JobModel)

    async def get_published(self, session: AsyncSession) -> Sequence[JobModel]:
        """Return every published job."""
        return await self.get_where(session, JobModel.is_published.is_(True))

    async def count_published(self, session: AsyncSession) -> int:
        return await self.count_where(session, JobModel.is_published.is_(True))


class ProductCRUD(BaseCRUD[ProductModel]):
    """Reads for the products table."""

    def __init__(self) -> None:
        super().__init__(ProductModel)


class OrganizationCRUD(BaseCRUD[OrganizationModel]):
    """Reads for the organizations table."""

    def __init__(self) -> None:
        super().__init__(OrganizationModel)

    async def get_active(self, session: AsyncSession) -> Sequence[OrganizationModel]:
        """Return every active organization."""
        return await self.get_where(session, OrganizationModel.is_active.is_(True))

    async def count_active(self, session: AsyncSession) -> int:
        return await self.count_where(session, OrganizationModel.is_active.is_(True))


class ProfileCRUD(BaseCRUD[ProfileModel]):
    """Reads for the profiles table."""

    def __init__(self) -> None:
        super().__init__(ProfileModel)


class QuestionCRUD(BaseCRUD[QuestionModel]):
    """Reads for the qna_questions table."""

    def __init__(self) -> None:
        super().__init__(QuestionModel)


class ConnectionCRUD(BaseCRUD[ConnectionModel]):
    """Reads for the connections (entanglements) table."""

    def __init__(self) -> None:
        super().__init__(ConnectionModel)

    async def get_accepted_peer_ids(
        self,
        session: AsyncSession,
        user_id: Any,
    ) -> list[Any]:
        """
        Return the user's direct social neighbourhood.

        Accepted connections are undirected: the user can appear on either
        side of the row.

        Args:
            session: Async database session
            user_id: User whose peers are requested

        Returns:
            Peer user ids, one per accepted connection, in row order
        """
        stmt = select(ConnectionModel.user_id, ConnectionModel.target_user_id).where(
            ConnectionModel.status == ACCEPTED_STATUS,
            or_(
                ConnectionModel.user_id == user_id,
                ConnectionModel.target_user_id == user_id,
            ),
        )
        result = await session.execute(stmt)
        peers = []
        for source_id, target_id in result.all():
            peer = target_id if str(source_id) == str(user_id) else source_id
            if peer not in peers:
                peers.append(peer)
        return peers


class PostCRUD(BaseCRUD[PostModel]):
    """Reads for the posts table."""

    def __init__(self) -> None:
        super().__init__(PostModel)

    async def get_recent_ids_by_authors(
        self,
        session: AsyncSession,
        author_ids: Sequence[Any],
        limit: int,
    ) -> list[str]:
        """
        Return ids of the most recent posts written by any of the authors.

        Args:
            session: Async database session
            author_ids: Post author user ids
            limit: Maximum number of post ids

        Returns:
            Post ids as strings, newest first
        """
        if not author_ids:
            return []
        stmt = (
            select(PostModel.id)
            .where(PostModel.user_id.in_(list(author_ids)))
            .order_by(PostModel.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [str(post_id) for post_id in result.scalars().all()]


job_crud = JobCRUD()
product_crud = ProductCRUD()
organization_crud = OrganizationCRUD()
profile_crud = ProfileCRUD()
question_crud = QuestionCRUD()
connection_crud = ConnectionCRUD()
post_crud = PostCRUD()
