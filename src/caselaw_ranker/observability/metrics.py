"""Metric recording helpers for search requests."""

from __future__ import annotations

from collections import Counter

from caselaw_ranker.models.domain import ScoredResult
from caselaw_ranker.observability.logger import get_logger

logger = get_logger("metrics")


def log_search_metrics(
    trace_id: str,
    raw_hits: int,
    results: list[ScoredResult],
    rerank_outcome: str,
) -> None:
    logger.info(
        "search_metrics",
        trace_id=trace_id,
        raw_hits=raw_hits,
        returned=len(results),
        top_adjusted=[round(r.adjusted_score, 4) for r in results[:5]],
        top_rerank=[round(r.rerank_score, 4) for r in results[:5] if r.rerank_score is not None],
        courts=dict(Counter(r.court_type.value for r in results)),
        rerank_outcome=rerank_outcome,
    )


def log_latency(trace_id: str, spans: dict[str, float], total_ms: float) -> None:
    logger.info(
        "latency",
        trace_id=trace_id,
        spans=spans,
        total_ms=round(total_ms, 2),
    )
