"""
Job recommendation schemas.

Dependencies: pydantic
System role: Recommendation API contracts
"""

from pydantic import Field

from q5search.models.common import CamelModel


class RecommendRequest(CamelModel):
    user_id: str | None = Field(default=None, description="Profile to recommend jobs for")
    limit: int = Field(default=2, ge=1, le=20, description="Maximum number of jobs")


class RecommendResponse(CamelModel):
    job_ids: list[str]
