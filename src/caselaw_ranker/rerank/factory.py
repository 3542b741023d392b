"""Build the configured rerank provider."""

from __future__ import annotations

from caselaw_ranker.config.settings import Settings
from caselaw_ranker.generation.gemini_provider import GeminiProvider
from caselaw_ranker.generation.openai_provider import OpenAIProvider
from caselaw_ranker.protocols.llm import LLMProvider
from caselaw_ranker.protocols.reranker import RerankProvider
from caselaw_ranker.rerank.llm_ranker import LLMRanker
from caselaw_ranker.rerank.pinecone_reranker import PineconeReranker


def create_llm_provider(settings: Settings) -> LLMProvider:
    if settings.llm_provider == "gemini":
        return GeminiProvider(
            api_key=settings.google_api_key,
            model=settings.gemini_model,
            temperature=settings.llm_temperature,
        )
    return OpenAIProvider(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        temperature=settings.llm_temperature,
        timeout=settings.rerank_timeout_seconds,
    )


def create_rerank_provider(settings: Settings, llm: LLMProvider | None = None) -> RerankProvider:
    if settings.rerank_provider == "llm":
        return LLMRanker(llm or create_llm_provider(settings))
    return PineconeReranker(
        api_key=settings.pinecone_api_key,
        model=settings.rerank_model,
        base_url=settings.pinecone_api_url,
        timeout=settings.rerank_timeout_seconds,
        api_version=settings.pinecone_api_version,
    )
