"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any


class CourtType(str, Enum):
    HR = "HR"
    HOF = "Hof"
    RECHTBANK = "Rechtbank"
    UNKNOWN = "Unknown"


# Index field name -> CaseMetadata attribute. Older records use the Dutch keys.
_FIELD_ALIASES: dict[str, str] = {
    "ecli": "ecli",
    "title": "title",
    "court": "court",
    "court_level": "court_level",
    "legal_area": "legal_area",
    "rechtsgebied": "legal_area",
    "decision_date": "decision_date",
    "date": "decision_date",
    "url": "url",
    "ai_inhoudsindicatie": "summary",
    "ai_feiten": "facts",
    "ai_geschil": "dispute",
    "ai_beslissing": "decision",
    "ai_motivering": "reasoning",
    "chunkIndex": "chunk_index",
    "chunk_index": "chunk_index",
    "totalChunks": "total_chunks",
    "total_chunks": "total_chunks",
}


_INT_FIELDS = frozenset({"chunk_index", "total_chunks"})


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _coerce(attr: str, value: Any) -> Any:
    """Coerce a raw index value to the attribute's type; raises ValueError or
    TypeError when it cannot be."""
    if attr in _INT_FIELDS:
        if isinstance(value, bool):
            raise TypeError(f"{attr} must be an integer")
        return int(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        items = [v for v in value if not _is_empty(v)]
        if any(isinstance(v, (dict, list, tuple)) for v in items):
            raise TypeError(f"{attr} holds nested values")
        return "; ".join(str(v).strip() for v in items)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"{attr} cannot hold {type(value).__name__}")


@dataclass(frozen=True)
class CaseMetadata:
    """Metadata of one indexed decision excerpt. Every field may be absent."""

    ecli: str | None = None
    title: str | None = None
    court: str | None = None
    court_level: str | None = None
    legal_area: str | None = None
    decision_date: str | None = None
    url: str | None = None
    summary: str | None = None
    facts: str | None = None
    dispute: str | None = None
    decision: str | None = None
    reasoning: str | None = None
    chunk_index: int | None = None
    total_chunks: int | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_fields(cls, raw: dict[str, Any]) -> CaseMetadata:
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in raw.items():
            attr = _FIELD_ALIASES.get(key)
            if attr is None:
                extra[key] = value
            elif not _is_empty(value) and attr not in known:
                try:
                    coerced = _coerce(attr, value)
                except (TypeError, ValueError):
                    extra[key] = value
                    continue
                if not _is_empty(coerced):
                    known[attr] = coerced
        return cls(**known, extra=extra)

    def merged_with(self, update: CaseMetadata | None) -> CaseMetadata:
        """Overlay ``update`` on this record; empty values in ``update`` never
        erase a value that is already known."""
        if update is None:
            return self
        changes = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(update, f.name)
            if not _is_empty(value):
                changes[f.name] = value
        merged_extra = {**self.extra, **{k: v for k, v in update.extra.items() if not _is_empty(v)}}
        return replace(self, **changes, extra=merged_extra)

    @property
    def court_label(self) -> str | None:
        return self.court_level or self.court

    @property
    def decision_year(self) -> int | None:
        if not self.decision_date:
            return None
        head = str(self.decision_date).strip()[:4]
        return int(head) if head.isdigit() else None

    def narrative_fields(self) -> list[str]:
        return [
            v
            for v in (self.summary, self.facts, self.dispute, self.decision, self.reasoning, self.title)
            if v
        ]


@dataclass(frozen=True)
class SearchQuery:
    """One vector-search request with its defaults already resolved."""

    text: str
    top_k: int
    score_threshold: float
    filter: dict[str, Any] | None = None
    namespace: str | None = None


@dataclass(frozen=True)
class SearchResult:
    id: str
    score: float  # raw similarity, 0-1
    metadata: CaseMetadata
    text: str | None = None


@dataclass(frozen=True)
class ScoreBreakdown:
    base_score: float
    court_boost: float
    keyword_bonus: float

    @property
    def total(self) -> float:
        return max(0.0, min(1.0, self.base_score + self.court_boost + self.keyword_bonus))


@dataclass(frozen=True, kw_only=True)
class ScoredResult(SearchResult):
    adjusted_score: float
    score_breakdown: ScoreBreakdown
    court_type: CourtType
    rerank_score: float | None = None
    rerank_rationale: str | None = None


@dataclass(frozen=True)
class RerankItem:
    """One entry of a provider ranking; ``index`` points into the submitted batch."""

    index: int
    score: float
    document: str | None = None
    metadata: CaseMetadata | None = None
    rationale: str | None = None


@dataclass(frozen=True)
class CacheEntry:
    key: str
    results: tuple[ScoredResult, ...]
    timestamp: float


@dataclass(frozen=True)
class VectorRecord:
    """A record for the integrated-embedding index: the index embeds ``text``."""

    id: str
    text: str
    metadata: dict[str, Any] = field(default_factory=dict)
