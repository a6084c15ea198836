"""
Personalized feed schemas.

Dependencies: pydantic
System role: Feed API contracts
"""

from pydantic import Field

from q5search.models.common import CamelModel


class FeedRequest(CamelModel):
    user_id: str | None = Field(default=None, description="Viewer; anonymous viewers get an empty feed")


class FeedMeta(CamelModel):
    social_count: int = 0
    semantic_count: int = 0


class PersonalizedFeed(CamelModel):
    """Post ids from the social graph followed by semantically related posts."""

    post_ids: list[str] = Field(default_factory=list)
    meta: FeedMeta = Field(default_factory=FeedMeta)
