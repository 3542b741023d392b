"""Shared test fixtures."""

from __future__ import annotations

import asyncio

import pytest

from caselaw_ranker.config.settings import Settings
from caselaw_ranker.exceptions import UpstreamError
from caselaw_ranker.models.domain import CaseMetadata, RerankItem, SearchResult
from caselaw_ranker.rerank.cache import InMemoryRerankCache
from caselaw_ranker.rerank.client import RerankClient
from caselaw_ranker.scoring.engine import ScoringEngine


def make_result(
    result_id: str,
    score: float,
    court: str | None = None,
    text: str | None = None,
    **meta,
) -> SearchResult:
    meta.setdefault("ecli", f"ECLI:NL:TEST:{result_id}")
    return SearchResult(
        id=result_id,
        score=score,
        metadata=CaseMetadata(court_level=court, **meta),
        text=text,
    )


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRerankProvider:
    """Reverses the submitted batch and counts calls."""

    name = "fake"

    def __init__(self) -> None:
        self.calls = 0
        self.last_documents: list[str] = []

    async def rerank(self, query: str, documents: list[str]) -> list[RerankItem]:
        self.calls += 1
        self.last_documents = documents
        n = len(documents)
        return [
            RerankItem(index=i, score=round(1.0 - rank / max(n, 1), 4))
            for rank, i in enumerate(reversed(range(n)))
        ]


class FailingRerankProvider:
    name = "failing"

    def __init__(self, error: Exception | None = None) -> None:
        self.calls = 0
        self._error = error or UpstreamError("provider down", status_code=503)

    async def rerank(self, query: str, documents: list[str]) -> list[RerankItem]:
        self.calls += 1
        raise self._error


class SlowRerankProvider:
    name = "slow"

    def __init__(self, delay: float = 1.0) -> None:
        self.calls = 0
        self._delay = delay

    async def rerank(self, query: str, documents: list[str]) -> list[RerankItem]:
        self.calls += 1
        await asyncio.sleep(self._delay)
        return [RerankItem(index=0, score=1.0)]


@pytest.fixture
def settings():
    return Settings(
        pinecone_api_key="test-key",
        pinecone_index_host="test-index.svc.pinecone.io",
        openai_api_key="test-key",
        google_api_key="test-key",
        rerank_batch_size=3,
        rerank_timeout_seconds=0.2,
    )


@pytest.fixture
def scoring(settings):
    return ScoringEngine(settings)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(settings, clock):
    return InMemoryRerankCache(ttl_seconds=settings.rerank_cache_ttl_seconds, clock=clock)


@pytest.fixture
def provider():
    return FakeRerankProvider()


@pytest.fixture
def rerank_client(provider, cache, settings):
    return RerankClient(provider=provider, cache=cache, settings=settings)


@pytest.fixture
def sample_results():
    """Five raw hits, already in raw-similarity order."""
    return [
        make_result("r1", 0.80, "Hoge Raad", summary="Ontbinding huurovereenkomst wegens huurachterstand."),
        make_result("r2", 0.78, "Rechtbank Amsterdam", summary="Kantonzaak over servicekosten."),
        make_result("r3", 0.75, None, summary="Onbekende instantie."),
        make_result("r4", 0.70, "Gerechtshof Den Haag", legal_area="Civiel recht", decision_date="2021-03-02"),
        make_result("r5", 0.60, "Rechtbank Rotterdam"),
    ]


@pytest.fixture
def scored_candidates(scoring, sample_results):
    return scoring.score_and_sort_results(sample_results, [])
