"""Pydantic models for API request/response and provider wire formats."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from caselaw_ranker.models.domain import ScoredResult


# --- HTTP API ---


class SearchRequest(BaseModel):
    case_id: str = "unknown"
    query: str = Field(min_length=1)
    filters: dict[str, Any] | None = None
    top_k: int | None = Field(default=None, ge=1, le=1000)
    score_threshold: float | None = Field(default=None, ge=0.0, le=1.0)
    keywords: list[str] | None = None
    limit: int | None = Field(default=None, ge=1)


class ScoreBreakdownSchema(BaseModel):
    base_score: float
    court_boost: float
    keyword_bonus: float


class ScoredResultSchema(BaseModel):
    id: str
    ecli: str | None = None
    title: str | None = None
    court: str | None = None
    legal_area: str | None = None
    decision_date: str | None = None
    url: str | None = None
    summary: str | None = None
    text: str | None = None
    score: float
    adjusted_score: float
    court_type: str
    score_breakdown: ScoreBreakdownSchema
    rerank_score: float | None = None
    rerank_rationale: str | None = None

    @classmethod
    def from_result(cls, result: ScoredResult) -> ScoredResultSchema:
        meta = result.metadata
        return cls(
            id=result.id,
            ecli=meta.ecli,
            title=meta.title,
            court=meta.court_label,
            legal_area=meta.legal_area,
            decision_date=meta.decision_date,
            url=meta.url,
            summary=meta.summary,
            text=result.text,
            score=result.score,
            adjusted_score=result.adjusted_score,
            court_type=result.court_type.value,
            score_breakdown=ScoreBreakdownSchema(
                base_score=result.score_breakdown.base_score,
                court_boost=result.score_breakdown.court_boost,
                keyword_bonus=result.score_breakdown.keyword_bonus,
            ),
            rerank_score=result.rerank_score,
            rerank_rationale=result.rerank_rationale,
        )


class SearchResponse(BaseModel):
    results: list[ScoredResultSchema]
    total_candidates: int
    trace_id: str
    latency_ms: float


class HealthResponse(BaseModel):
    status: str
    rerank_enabled: bool
    rerank_provider: str
    cache_entries: int


# --- Pinecone wire formats ---


class PineconeHit(BaseModel):
    id: str = Field(alias="_id")
    score: float = Field(default=0.0, alias="_score")
    fields: dict[str, Any] = Field(default_factory=dict)


class PineconeSearchResult(BaseModel):
    hits: list[PineconeHit] = Field(default_factory=list)


class PineconeSearchResponse(BaseModel):
    result: PineconeSearchResult = Field(default_factory=PineconeSearchResult)


class PineconeRerankRow(BaseModel):
    index: int
    score: float
    document: dict[str, Any] | None = None


class PineconeRerankResponse(BaseModel):
    model: str | None = None
    data: list[PineconeRerankRow] = Field(default_factory=list)


# --- LLM ranker structured output ---


class RankingEntry(BaseModel):
    index: int
    score: float
    rationale: str = ""
    court_level: str | None = None
    legal_area: str | None = None
    decision_date: str | None = None
    ecli: str | None = None
    title: str | None = None


class RankingResponse(BaseModel):
    rankings: list[RankingEntry]
