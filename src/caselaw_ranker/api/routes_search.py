"""Case-law search endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from caselaw_ranker.api.dependencies import get_search_pipeline
from caselaw_ranker.exceptions import ConfigurationError, UpstreamError
from caselaw_ranker.models.schemas import SearchRequest, SearchResponse
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.pipeline.search_pipeline import SearchPipeline

logger = get_logger("routes_search")

router = APIRouter()


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    pipeline: SearchPipeline = Depends(get_search_pipeline),
) -> SearchResponse:
    try:
        return await pipeline.execute(request)
    except UpstreamError as e:
        logger.error("search_upstream_failed", error=str(e), status=e.status_code)
        raise HTTPException(status_code=502, detail="Case-law index unavailable")
    except ConfigurationError as e:
        logger.error("search_misconfigured", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))
