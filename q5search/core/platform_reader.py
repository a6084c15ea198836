"""
Read-only access to platform data used at query time.

Profile lookups, the accepted-connection social graph and headline counts
for the assistant prompt. Every method opens its own session so callers can
run them concurrently.

Dependencies: sqlalchemy, q5search.boundary.db.CRUD
System role: Query-time platform reads
"""

import asyncio
import logging
import uuid
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from q5search.boundary.db.CRUD import (
    connection_crud,
    job_crud,
    organization_crud,
    post_crud,
    product_crud,
    profile_crud,
    question_crud,
)
from q5search.boundary.db.models import ProfileModel
from q5search.core.exceptions import DocumentStoreError

logger = logging.getLogger(__name__)


def parse_user_id(user_id: str) -> uuid.UUID | None:
    """Parse a user id, returning None when it is not a UUID."""
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        return None


class PlatformReader:
    """Profiles, connections, posts and counts."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def get_profile(self, user_id: str) -> ProfileModel | None:
        """
        Return the profile for a user id, or None if it does not exist.

        Raises:
            DocumentStoreError: If the profile read fails
        """
        parsed = parse_user_id(user_id)
        if parsed is None:
            logger.warning(f"{__name__}:get_profile - Not a valid user id: {user_id!r}")
            return None
        try:
            async with self._session_factory() as session:
                return await profile_crud.get_by_id(session, parsed)
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                message="Failed to read profile",
                operation="get_profile",
                details={"user_id": user_id, "error": str(e)},
            ) from e

    async def get_peer_post_ids(self, user_id: str, limit: int) -> list[str]:
        """
        Most recent posts written by the user's accepted connections.

        Args:
            user_id: Viewer
            limit: Maximum number of post ids

        Returns:
            list[str]: Post ids, newest first (empty without connections)

        Raises:
            DocumentStoreError: If the connection or post read fails
        """
        parsed = parse_user_id(user_id)
        if parsed is None:
            return []
        try:
            async with self._session_factory() as session:
                peers = await connection_crud.get_accepted_peer_ids(session, parsed)
                if not peers:
                    return []
                return await post_crud.get_recent_ids_by_authors(session, peers, limit)
        except SQLAlchemyError as e:
            raise DocumentStoreError(
                message="Failed to read peer posts",
                operation="get_peer_post_ids",
                details={"user_id": user_id, "error": str(e)},
            ) from e

    async def _count(self, counter, *args: Any) -> int:
        async with self._session_factory() as session:
            return await counter(session, *args)

    async def get_stats(self) -> dict[str, int | str]:
        """
        Headline platform counts, fetched concurrently.

        A count that fails is reported as "unknown".

        Returns:
            dict: job_count, product_count, org_count, user_count, question_count
        """
        names = ["job_count", "product_count", "org_count", "user_count", "question_count"]
        results = await asyncio.gather(
            self._count(job_crud.count_published),
            self._count(product_crud.count_where),
            self._count(organization_crud.count_active),
            self._count(profile_crud.count_where),
            self._count(question_crud.count_where),
            return_exceptions=True,
        )
        stats: dict[str, int | str] = {}
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.warning(f"{__name__}:get_stats - {name} unavailable: {type(result).__name__}: {result}")
                stats[name] = "unknown"
            else:
                stats[name] = result
        return stats
