"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from caselaw_ranker.config.settings import Settings
from caselaw_ranker.pipeline.search_pipeline import SearchPipeline
from caselaw_ranker.protocols.cache import RerankCache


def get_search_pipeline(request: Request) -> SearchPipeline:
    return request.app.state.search_pipeline


def get_rerank_cache(request: Request) -> RerankCache:
    return request.app.state.rerank_cache


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
