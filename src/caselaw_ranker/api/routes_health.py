"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from caselaw_ranker.api.dependencies import get_app_settings, get_rerank_cache
from caselaw_ranker.config.settings import Settings
from caselaw_ranker.models.schemas import HealthResponse
from caselaw_ranker.protocols.cache import RerankCache

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    settings: Settings = Depends(get_app_settings),
    cache: RerankCache = Depends(get_rerank_cache),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        rerank_enabled=settings.rerank_enabled,
        rerank_provider=settings.rerank_provider,
        cache_entries=len(cache),
    )
