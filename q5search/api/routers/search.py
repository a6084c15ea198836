"""
Search API endpoints.

Routes:
- POST /search - Similarity search over the index
- POST /search/sync - Refresh or remove one entity's search document

Dependencies: q5search.core.retriever, q5search.core.indexing
System role: Search HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from q5search.api.deps import get_indexing_pipeline, get_retrieval_service
from q5search.core.exceptions import (
    DocumentStoreError,
    EmbeddingError,
    RetrievalError,
    ValidationError,
)
from q5search.core.indexing import IndexingPipeline
from q5search.core.retriever import RetrievalService
from q5search.models.common import SuccessResponse
from q5search.models.indexing import SyncAction, SyncRequest
from q5search.models.search import SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """
    Rank indexed documents against a free-text query.

    Raises:
        HTTPException(400): Invalid threshold or top_k
        HTTPException(502): Embedding provider or document store failure
    """
    try:
        results = await retrieval_service.search(request.query, request.threshold, request.top_k)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except RetrievalError as e:
        logger.error(f"{__name__}:search - {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return SearchResponse(results=results, total=len(results))


@router.post("/sync", response_model=SuccessResponse)
async def sync(
    request: SyncRequest,
    pipeline: IndexingPipeline = Depends(get_indexing_pipeline),
) -> SuccessResponse:
    """
    Refresh (delete then insert) or delete the search document of one entity.

    Raises:
        HTTPException(400): Unsupported type, missing id/slug or required field
        HTTPException(502): Embedding provider or document store failure
    """
    try:
        if request.action == SyncAction.DELETE:
            await pipeline.remove_entity(request.type, request.data)
        else:
            await pipeline.sync_entity(request.type, request.data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except (EmbeddingError, DocumentStoreError) as e:
        logger.error(f"{__name__}:sync - {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return SuccessResponse()
