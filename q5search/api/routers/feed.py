"""
Personalized feed API endpoints.

Routes:
- POST /feed/personalized - Post ids for the viewer's feed

Dependencies: q5search.application.services.feed_service
System role: Feed HTTP API
"""

from fastapi import APIRouter, Depends

from q5search.api.deps import get_feed_service
from q5search.application.services.feed_service import FeedService
from q5search.models.feed import FeedRequest, PersonalizedFeed

router = APIRouter(prefix="/feed", tags=["feed"])


@router.post("/personalized", response_model=PersonalizedFeed)
async def personalized_feed(
    request: FeedRequest,
    service: FeedService = Depends(get_feed_service),
) -> PersonalizedFeed:
    """Social posts first, then posts close to the viewer's profile."""
    return await service.compose(request.user_id)
