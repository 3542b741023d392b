"""Composite relevance: base similarity + court-tier boost + keyword bonus, clamped to [0, 1]."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from caselaw_ranker.config.settings import Settings
from caselaw_ranker.models.domain import ScoreBreakdown, ScoredResult, SearchResult
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.scoring.court_level import map_court_level

logger = get_logger("scoring")


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class ScoringEngine:
    def __init__(self, settings: Settings) -> None:
        self._court_weights = settings.court_weights
        self._per_match = settings.keyword_bonus_per_match
        self._max_bonus = settings.max_keyword_bonus

    def calculate_keyword_bonus(self, result: SearchResult, keywords: Sequence[str]) -> float:
        terms = [k.strip().lower() for k in keywords if k and k.strip()]
        if not terms:
            return 0.0

        parts = [result.text] if result.text else []
        parts.extend(result.metadata.narrative_fields())
        haystack = " ".join(parts).lower()

        matches = sum(1 for term in terms if term in haystack)
        return min(matches * self._per_match, self._max_bonus)

    def calculate_adjusted_score(
        self, result: SearchResult, keywords: Sequence[str] = ()
    ) -> ScoredResult:
        court_type = map_court_level(result.metadata.court_level, result.metadata.court)
        breakdown = ScoreBreakdown(
            base_score=result.score,
            court_boost=self._court_weights[court_type],
            keyword_bonus=self.calculate_keyword_bonus(result, keywords),
        )
        return ScoredResult(
            id=result.id,
            score=result.score,
            metadata=result.metadata,
            text=result.text,
            adjusted_score=breakdown.total,
            score_breakdown=breakdown,
            court_type=court_type,
        )

    def score_and_sort_results(
        self, results: Sequence[SearchResult], keywords: Sequence[str] = ()
    ) -> list[ScoredResult]:
        scored = [self.calculate_adjusted_score(r, keywords) for r in results]
        # sorted() is stable, so ties keep raw-similarity order
        scored = sorted(scored, key=lambda r: r.adjusted_score, reverse=True)

        if scored:
            logger.info(
                "scored_results",
                count=len(scored),
                top_adjusted=round(scored[0].adjusted_score, 4),
                courts=dict(Counter(r.court_type.value for r in scored)),
            )
        return scored
