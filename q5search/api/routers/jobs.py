"""
Job recommendation API endpoints.

Routes:
- POST /jobs/recommend - Jobs matching a user's profile

Dependencies: q5search.application.services.recommendation_service
System role: Recommendation HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from q5search.api.deps import get_recommendation_service
from q5search.application.services.recommendation_service import RecommendationService
from q5search.core.exceptions import (
    DocumentStoreError,
    ProfileNotFoundError,
    RetrievalError,
    ValidationError,
)
from q5search.models.recommend import RecommendRequest, RecommendResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/recommend", response_model=RecommendResponse)
async def recommend_jobs(
    request: RecommendRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendResponse:
    """
    Recommend jobs for a user.

    Raises:
        HTTPException(400): Missing user id
        HTTPException(404): Profile not found
        HTTPException(502): Retrieval or profile read failure
    """
    try:
        job_ids = await service.recommend_jobs(request.user_id, request.limit)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
    except (RetrievalError, DocumentStoreError) as e:
        logger.error(f"{__name__}:recommend_jobs - {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return RecommendResponse(job_ids=job_ids)
