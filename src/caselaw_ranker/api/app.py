"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from caselaw_ranker.api.middleware import RequestContextMiddleware
from caselaw_ranker.api.routes_health import router as health_router
from caselaw_ranker.api.routes_search import router as search_router
from caselaw_ranker.config.settings import Settings, get_settings
from caselaw_ranker.observability.logger import get_logger, setup_logging
from caselaw_ranker.pipeline.search_pipeline import SearchPipeline
from caselaw_ranker.rerank.cache import InMemoryRerankCache
from caselaw_ranker.rerank.client import RerankClient
from caselaw_ranker.rerank.factory import create_rerank_provider
from caselaw_ranker.retrieval.vector_search import VectorSearchClient
from caselaw_ranker.scoring.engine import ScoringEngine
from caselaw_ranker.vectorstore.pinecone_index import PineconeIndex

logger = get_logger("app")


def build_pipeline(settings: Settings) -> tuple[SearchPipeline, InMemoryRerankCache, list]:
    """Wire the search components; returns the pipeline, its cache and closeables."""
    index = PineconeIndex(
        api_key=settings.pinecone_api_key,
        index_host=settings.pinecone_index_host,
        namespace=settings.pinecone_namespace,
        timeout=settings.vector_search_timeout_seconds,
        api_version=settings.pinecone_api_version,
    )
    provider = create_rerank_provider(settings)
    cache = InMemoryRerankCache(ttl_seconds=settings.rerank_cache_ttl_seconds)

    pipeline = SearchPipeline(
        vector_search=VectorSearchClient(index, settings),
        scoring=ScoringEngine(settings),
        rerank_client=RerankClient(provider=provider, cache=cache, settings=settings),
        settings=settings,
    )
    closeables = [c for c in (index, provider) if hasattr(c, "close")]
    return pipeline, cache, closeables


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)

    pipeline, cache, closeables = build_pipeline(settings)

    app.state.search_pipeline = pipeline
    app.state.rerank_cache = cache
    app.state.settings = settings

    logger.info(
        "startup_complete",
        namespace=settings.pinecone_namespace,
        rerank_enabled=settings.rerank_enabled,
        rerank_provider=settings.rerank_provider,
    )

    yield

    for closeable in closeables:
        await closeable.close()
    logger.info("shutdown_complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Case-Law Ranker",
        version="1.0.0",
        description="Relevance ranking for Dutch case law",
        lifespan=lifespan,
    )
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(search_router, tags=["search"])
    return app
