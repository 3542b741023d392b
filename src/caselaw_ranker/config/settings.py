"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Literal, Mapping

from pydantic_settings import BaseSettings

from caselaw_ranker.models.domain import CourtType


class Settings(BaseSettings):
    # API Keys
    pinecone_api_key: str = ""
    openai_api_key: str = ""
    google_api_key: str = ""

    # Vector index (Pinecone, integrated embedding)
    pinecone_index_host: str = ""
    pinecone_namespace: str = "ECLI_NL"
    pinecone_api_version: str = "2025-04"
    vector_search_timeout_seconds: float = 10.0
    default_top_k: int = 200
    default_score_threshold: float = 0.12

    # Court weighting (added to the base similarity score)
    court_weight_hr: float = 0.10
    court_weight_hof: float = 0.05
    court_weight_rechtbank: float = 0.0
    court_weight_unknown: float = -0.05

    # Keyword bonus
    keyword_bonus_per_match: float = 0.015
    max_keyword_bonus: float = 0.045

    # Candidate selection
    rerank_candidate_count: int = 40
    rerank_batch_size: int = 20

    # Reranking
    rerank_enabled: bool = True
    rerank_provider: Literal["pinecone", "llm"] = "pinecone"
    rerank_model: str = "bge-reranker-v2-m3"
    pinecone_api_url: str = "https://api.pinecone.io"
    rerank_max_excerpt_tokens: int = 700
    rerank_chars_per_token: int = 4
    rerank_timeout_seconds: float = 8.0

    # Rerank cache. Bump the version after any scoring change.
    rerank_cache_ttl_seconds: float = 15 * 60
    rerank_cache_version: str = "v3"

    # LLM ranker
    llm_provider: Literal["openai", "gemini"] = "openai"
    openai_model: str = "gpt-4o-mini"
    gemini_model: str = "gemini-2.0-flash"
    llm_temperature: float = 0.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    max_results_display: int = 10
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "RANKER_", "frozen": True}

    @property
    def court_weights(self) -> Mapping[CourtType, float]:
        return MappingProxyType(
            {
                CourtType.HR: self.court_weight_hr,
                CourtType.HOF: self.court_weight_hof,
                CourtType.RECHTBANK: self.court_weight_rechtbank,
                CourtType.UNKNOWN: self.court_weight_unknown,
            }
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return Settings()
