"""Search orchestrator: vector search -> scoring -> rerank."""

from __future__ import annotations

from typing import Any

from caselaw_ranker.config.settings import Settings
from caselaw_ranker.keyword_search.tokenizer import extract_keywords
from caselaw_ranker.models.domain import ScoredResult, SearchQuery
from caselaw_ranker.models.schemas import ScoredResultSchema, SearchRequest, SearchResponse
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.observability.metrics import log_latency, log_search_metrics
from caselaw_ranker.observability.tracing import TraceContext
from caselaw_ranker.rerank.client import RerankClient
from caselaw_ranker.retrieval.vector_search import VectorSearchClient
from caselaw_ranker.scoring.engine import ScoringEngine

logger = get_logger("search_pipeline")


class SearchPipeline:
    def __init__(
        self,
        vector_search: VectorSearchClient,
        scoring: ScoringEngine,
        rerank_client: RerankClient,
        settings: Settings,
    ) -> None:
        self._vector_search = vector_search
        self._scoring = scoring
        self._rerank = rerank_client
        self._settings = settings

    async def search(
        self,
        case_id: str,
        query: str,
        filters: dict[str, Any] | None = None,
        top_k: int | None = None,
        score_threshold: float | None = None,
        keywords: list[str] | None = None,
        trace: TraceContext | None = None,
    ) -> list[ScoredResult]:
        """Ranked results for ``query``.

        ``keywords=None`` derives keywords from the query; pass an empty list
        to disable the keyword bonus. Vector-index failures propagate; rerank
        failures degrade to adjusted-score order.
        """
        trace = trace or TraceContext()
        if keywords is None:
            keywords = extract_keywords(query)

        search_query = SearchQuery(
            text=query,
            top_k=top_k if top_k is not None else self._settings.default_top_k,
            score_threshold=(
                score_threshold if score_threshold is not None else self._settings.default_score_threshold
            ),
            filter=filters,
        )

        # STEP 1: Vector search
        with trace.span("vector_search", top_k=search_query.top_k):
            hits = await self._vector_search.run(search_query)

        # STEP 2: Court + keyword scoring
        with trace.span("scoring"):
            scored = self._scoring.score_and_sort_results(hits, keywords)
            pool = scored[: self._settings.rerank_candidate_count]

        # STEP 3: Rerank
        with trace.span("reranking", candidates=len(pool)):
            results, outcome = await self._rerank.rerank_with_outcome(
                query, pool, case_id=case_id, filters=filters
            )

        log_search_metrics(trace.trace_id, len(hits), results, outcome)
        log_latency(trace.trace_id, trace.span_durations(), trace.elapsed_ms)
        logger.info(
            "search_completed",
            trace_id=trace.trace_id,
            case_id=case_id,
            keywords=keywords,
            results=len(results),
        )
        return results

    async def execute(self, request: SearchRequest) -> SearchResponse:
        trace = TraceContext()
        results = await self.search(
            request.case_id,
            request.query,
            filters=request.filters,
            top_k=request.top_k,
            score_threshold=request.score_threshold,
            keywords=request.keywords,
            trace=trace,
        )
        limit = request.limit or self._settings.max_results_display
        return SearchResponse(
            results=[ScoredResultSchema.from_result(r) for r in results[:limit]],
            total_candidates=len(results),
            trace_id=trace.trace_id,
            latency_ms=round(trace.elapsed_ms, 2),
        )
