"""Second-pass reordering of the best candidates through a rerank provider."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from caselaw_ranker.config.settings import Settings
from caselaw_ranker.exceptions import ConfigurationError, MalformedResponseError
from caselaw_ranker.models.domain import RerankItem, ScoredResult
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.protocols.cache import RerankCache
from caselaw_ranker.protocols.reranker import RerankProvider
from caselaw_ranker.rerank.cache import make_cache_key
from caselaw_ranker.rerank.documents import format_document

logger = get_logger("rerank_client")


class RerankClient:
    """Reranks the top ``rerank_batch_size`` candidates and keeps the rest.

    The output always holds exactly the input candidates. A provider failure
    returns the adjusted-score order unchanged and is not cached. A
    ``ConfigurationError`` is not a provider failure and propagates.
    """

    def __init__(self, provider: RerankProvider, cache: RerankCache, settings: Settings) -> None:
        self._provider = provider
        self._cache = cache
        self._settings = settings

    @property
    def provider_name(self) -> str:
        return self._provider.name

    async def rerank(
        self,
        query: str,
        candidates: Sequence[ScoredResult],
        case_id: str = "unknown",
        filters: dict[str, Any] | None = None,
        enable_cache: bool = True,
    ) -> list[ScoredResult]:
        results, _ = await self.rerank_with_outcome(query, candidates, case_id, filters, enable_cache)
        return results

    async def rerank_with_outcome(
        self,
        query: str,
        candidates: Sequence[ScoredResult],
        case_id: str = "unknown",
        filters: dict[str, Any] | None = None,
        enable_cache: bool = True,
    ) -> tuple[list[ScoredResult], str]:
        """Like :meth:`rerank`, also naming the path taken: ``disabled``,
        ``empty``, ``cache_hit``, ``fallback`` or ``reranked``."""
        settings = self._settings
        if not settings.rerank_enabled:
            logger.info("rerank_disabled", count=len(candidates))
            return list(candidates), "disabled"

        if not candidates:
            return [], "empty"

        key = make_cache_key(settings.rerank_cache_version, case_id, query, filters)
        if enable_cache:
            entry = self._cache.get(key)
            if entry is not None:
                logger.info("rerank_cache_hit", case_id=case_id, count=len(entry.results))
                return list(entry.results), "cache_hit"

        ordered = sorted(candidates, key=lambda c: c.adjusted_score, reverse=True)
        batch = ordered[: settings.rerank_batch_size]
        remainder = ordered[settings.rerank_batch_size :]

        documents = [
            format_document(c, settings.rerank_max_excerpt_tokens, settings.rerank_chars_per_token)
            for c in batch
        ]
        logger.info(
            "rerank_started",
            provider=self._provider.name,
            batch=len(batch),
            remainder=len(remainder),
        )

        try:
            items = await asyncio.wait_for(
                self._provider.rerank(query, documents),
                timeout=settings.rerank_timeout_seconds,
            )
            reranked = self._apply_ranking(batch, items)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.warning(
                "rerank_failed",
                provider=self._provider.name,
                error_type=type(e).__name__,
                error=str(e),
            )
            return batch + remainder, "fallback"

        final = reranked + remainder
        if enable_cache:
            self._cache.set(key, final)
        return final, "reranked"

    @staticmethod
    def _apply_ranking(batch: list[ScoredResult], items: Sequence[RerankItem]) -> list[ScoredResult]:
        placed: list[ScoredResult] = []
        used: set[int] = set()
        for item in items or ():
            if not 0 <= item.index < len(batch) or item.index in used:
                continue
            used.add(item.index)
            original = batch[item.index]
            placed.append(
                replace(
                    original,
                    rerank_score=item.score,
                    rerank_rationale=item.rationale or original.rerank_rationale,
                    metadata=original.metadata.merged_with(item.metadata),
                )
            )

        if not used:
            raise MalformedResponseError("Provider ranking referenced none of the submitted documents")

        unranked = [c for i, c in enumerate(batch) if i not in used]
        if unranked:
            logger.warning("rerank_partial_ranking", ranked=len(placed), unranked=len(unranked))
        return placed + unranked
