"""
Admin API endpoints.

Routes:
- POST /admin/index-search-db - Index every eligible entity not yet searchable

Dependencies: q5search.core.indexing
System role: Index maintenance HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from q5search.api.deps import get_indexing_pipeline
from q5search.boundary.vdb.vector_schemas import EntityType
from q5search.core.exceptions import ValidationError
from q5search.core.indexing import IndexingPipeline
from q5search.models.indexing import IndexingSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/index-search-db", response_model=IndexingSummary)
async def index_search_db(
    types: list[EntityType] | None = Query(default=None, description="Restrict the run to these entity types"),
    pipeline: IndexingPipeline = Depends(get_indexing_pipeline),
) -> IndexingSummary:
    """
    Run the indexing pipeline.

    Per-item failures are reported in the summary and never fail the request.

    Raises:
        HTTPException(400): A requested type is not indexable
    """
    try:
        return await pipeline.run(types)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
