"""Similarity search over the case-law index with a minimum-score filter."""

from __future__ import annotations

from typing import Any

from caselaw_ranker.config.settings import Settings
from caselaw_ranker.models.domain import SearchQuery, SearchResult, VectorRecord
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.protocols.vector_index import VectorIndex

logger = get_logger("vector_search")


class VectorSearchClient:
    """Thin policy layer over a :class:`VectorIndex`.

    The filter is forwarded verbatim. Index failures propagate as
    ``UpstreamError``; nothing here retries.
    """

    def __init__(self, index: VectorIndex, settings: Settings) -> None:
        self._index = index
        self._settings = settings

    async def query(
        self,
        text: str,
        filter: dict[str, Any] | None = None,
        top_k: int | None = None,
        score_threshold: float | None = None,
        namespace: str | None = None,
    ) -> list[SearchResult]:
        top_k = top_k if top_k is not None else self._settings.default_top_k
        threshold = (
            score_threshold if score_threshold is not None else self._settings.default_score_threshold
        )

        hits = await self._index.search(text, top_k=top_k, filter=filter, namespace=namespace)

        # Stable: equal scores keep the index's order.
        ordered = sorted(hits, key=lambda r: r.score, reverse=True)

        seen: set[str] = set()
        results: list[SearchResult] = []
        for hit in ordered:
            if hit.score < threshold or hit.id in seen:
                continue
            seen.add(hit.id)
            results.append(hit)

        logger.info(
            "vector_search_results",
            hits=len(hits),
            kept=len(results),
            threshold=threshold,
            top_score=round(results[0].score, 4) if results else 0.0,
        )
        return results

    async def run(self, query: SearchQuery) -> list[SearchResult]:
        return await self.query(
            query.text,
            filter=query.filter,
            top_k=query.top_k,
            score_threshold=query.score_threshold,
            namespace=query.namespace,
        )

    async def upsert(self, records: list[VectorRecord], namespace: str | None = None) -> None:
        await self._index.upsert(records, namespace=namespace)

    async def delete(self, ids: list[str], namespace: str | None = None) -> None:
        await self._index.delete(ids, namespace=namespace)
