"""
Job recommendation service.

Embeds a user's profile text and returns the closest published jobs.

Dependencies: q5search.core
System role: Profile-driven job recommendations
"""

import logging

from q5search.boundary.vdb.vector_schemas import EntityType
from q5search.configs.retrieval import RetrievalSettings
from q5search.core.exceptions import ProfileNotFoundError, ValidationError
from q5search.core.profile_text import build_profile_query

logger = logging.getLogger(__name__)


class RecommendationService:
    """Recommends jobs for a profile. Retrieval failures propagate to the caller."""

    def __init__(self, retrieval_service, platform_reader, settings: RetrievalSettings) -> None:
        self.retrieval_service = retrieval_service
        self.platform_reader = platform_reader
        self.settings = settings

    async def recommend_jobs(self, user_id: str | None, limit: int | None = None) -> list[str]:
        """
        Recommend jobs for a user.

        Args:
            user_id: Profile id
            limit: Maximum number of job ids (settings.recommend_limit if None)

        Returns:
            list[str]: Job ids, best match first, at most limit

        Raises:
            ValidationError: If user_id is missing or limit < 1
            ProfileNotFoundError: If the profile does not exist
            DocumentStoreError: If the profile read fails
            RetrievalError: If embedding or similarity search fails
        """
        if not user_id:
            raise ValidationError("User ID is required", field="user_id")
        limit = self.settings.recommend_limit if limit is None else limit
        if limit < 1:
            raise ValidationError(f"limit must be >= 1, got {limit}", field="limit")

        profile = await self.platform_reader.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)

        query = build_profile_query(profile)
        if not query:
            logger.info(f"{__name__}:recommend_jobs - Profile {user_id} has no searchable fields")
            return []

        links = await self.retrieval_service.search_links(
            query,
            EntityType.JOB,
            threshold=self.settings.recommend_threshold,
            top_k=self.settings.recommend_top_k,
        )
        return links[:limit]
