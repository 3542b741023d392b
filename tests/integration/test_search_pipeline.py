"""End-to-end search: vector search -> scoring -> rerank, and the HTTP adapter."""

from __future__ import annotations

import pytest
from conftest import FailingRerankProvider, make_result
from fastapi.testclient import TestClient

from caselaw_ranker.api.app import create_app
from caselaw_ranker.api.dependencies import get_app_settings, get_rerank_cache, get_search_pipeline
from caselaw_ranker.exceptions import UpstreamError
from caselaw_ranker.models.domain import CaseMetadata, SearchResult
from caselaw_ranker.models.schemas import SearchRequest
from caselaw_ranker.pipeline.search_pipeline import SearchPipeline
from caselaw_ranker.rerank.client import RerankClient
from caselaw_ranker.retrieval.vector_search import VectorSearchClient


class StaticIndex:
    def __init__(self, hits=None, error=None):
        self.hits = hits or []
        self.error = error
        self.calls = 0
        self.top_ks = []

    async def search(self, text, top_k, filter=None, namespace=None):
        self.calls += 1
        self.top_ks.append(top_k)
        if self.error:
            raise self.error
        return list(self.hits)

    async def upsert(self, records, namespace=None):
        pass

    async def delete(self, ids, namespace=None):
        pass


def huur_hits():
    return [
        make_result("hr", 0.80, "Hoge Raad", summary="Opzegging arbeidsovereenkomst."),
        make_result("rb", 0.78, "Rechtbank Amsterdam", summary="Geschil over erfpacht."),
        make_result("unk", 0.75, None, summary="Tuchtzaak notaris."),
    ]


def build(settings, scoring, cache, provider, index):
    return SearchPipeline(
        vector_search=VectorSearchClient(index, settings),
        scoring=scoring,
        rerank_client=RerankClient(provider=provider, cache=cache, settings=settings),
        settings=settings,
    )


async def test_adjusted_order_before_rerank(settings, scoring, cache):
    pipeline = build(settings, scoring, cache, FailingRerankProvider(), StaticIndex(huur_hits()))
    results = await pipeline.search("case-1", "huurachterstand", keywords=[])
    assert [r.id for r in results] == ["hr", "rb", "unk"]
    assert [r.adjusted_score for r in results] == pytest.approx([0.90, 0.78, 0.70])
    assert all(r.rerank_score is None for r in results)


async def test_derived_keywords_add_bonus(settings, scoring, cache):
    hits = [make_result("a", 0.50, "Rechtbank Utrecht", summary="Huurachterstand van drie maanden.")]
    pipeline = build(settings, scoring, cache, FailingRerankProvider(), StaticIndex(hits))
    results = await pipeline.search("case-1", "huurachterstand")
    assert results[0].score_breakdown.keyword_bonus == pytest.approx(0.015)


async def test_reranked_results_cached_per_case(settings, scoring, cache, provider):
    index = StaticIndex(huur_hits())
    pipeline = build(settings, scoring, cache, provider, index)
    first = await pipeline.search("case-1", "huurachterstand", keywords=[])
    second = await pipeline.search("case-1", "huurachterstand", keywords=[])
    assert [r.id for r in first] == ["unk", "rb", "hr"]
    assert first == second
    assert provider.calls == 1
    assert index.calls == 2


async def test_candidate_pool_is_bounded(settings, scoring, cache, provider):
    settings = settings.model_copy(update={"rerank_candidate_count": 4})
    hits = [make_result(f"h{i}", 0.9 - i * 0.01, "Rechtbank") for i in range(10)]
    pipeline = build(settings, scoring, cache, provider, StaticIndex(hits))
    results = await pipeline.search("case-1", "q", keywords=[])
    assert len(results) == 4


async def test_vector_failure_is_visible(settings, scoring, cache, provider):
    pipeline = build(settings, scoring, cache, provider, StaticIndex(error=UpstreamError("down", 503)))
    with pytest.raises(UpstreamError):
        await pipeline.search("case-1", "q")
    assert provider.calls == 0


async def test_search_resolves_defaults_from_settings(settings, scoring, cache, provider):
    index = StaticIndex([make_result("a", 0.11, "Rechtbank"), make_result("b", 0.13, "Rechtbank")])
    pipeline = build(settings, scoring, cache, provider, index)
    results = await pipeline.search("case-1", "q", keywords=[])
    assert index.top_ks == [settings.default_top_k]
    assert [r.id for r in results] == ["b"]


async def test_search_overrides_top_k_and_threshold(settings, scoring, cache, provider):
    index = StaticIndex([make_result("a", 0.11, "Rechtbank"), make_result("b", 0.13, "Rechtbank")])
    pipeline = build(settings, scoring, cache, provider, index)
    results = await pipeline.search("case-1", "q", top_k=5, score_threshold=0.05, keywords=[])
    assert index.top_ks == [5]
    assert {r.id for r in results} == {"a", "b"}


async def test_execute_with_list_and_numeric_metadata(settings, scoring, cache, provider):
    hit = SearchResult(
        id="ecli-1",
        score=0.70,
        metadata=CaseMetadata.from_fields(
            {
                "court": "Rechtbank Den Haag",
                "rechtsgebied": ["Civiel recht", "Huurrecht"],
                "date": 20220104,
                "ai_feiten": ["Huurachterstand van vier maanden."],
            }
        ),
    )
    pipeline = build(settings, scoring, cache, provider, StaticIndex([hit]))
    response = await pipeline.execute(SearchRequest(query="huurachterstand"))
    result = response.results[0]
    assert result.legal_area == "Civiel recht; Huurrecht"
    assert result.decision_date == "20220104"
    assert result.score_breakdown.keyword_bonus == pytest.approx(0.015)


@pytest.fixture
def client_for(settings, cache):
    def _make(pipeline):
        app = create_app()
        app.dependency_overrides[get_search_pipeline] = lambda: pipeline
        app.dependency_overrides[get_rerank_cache] = lambda: cache
        app.dependency_overrides[get_app_settings] = lambda: settings
        return TestClient(app)

    return _make


def test_search_endpoint(settings, scoring, cache, provider, client_for):
    pipeline = build(settings, scoring, cache, provider, StaticIndex(huur_hits()))
    response = client_for(pipeline).post(
        "/search", json={"case_id": "case-1", "query": "huurachterstand", "keywords": [], "limit": 2}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["total_candidates"] == 3
    assert len(body["results"]) == 2
    assert body["results"][0]["id"] == "unk"
    assert body["results"][0]["rerank_score"] is not None
    assert "X-Request-ID" in response.headers


def test_search_endpoint_upstream_failure(settings, scoring, cache, provider, client_for):
    pipeline = build(settings, scoring, cache, provider, StaticIndex(error=UpstreamError("down", 503)))
    response = client_for(pipeline).post("/search", json={"query": "huur"})
    assert response.status_code == 502


def test_search_endpoint_validation(settings, scoring, cache, provider, client_for):
    pipeline = build(settings, scoring, cache, provider, StaticIndex())
    response = client_for(pipeline).post("/search", json={"query": ""})
    assert response.status_code == 422


def test_health_endpoint(settings, scoring, cache, provider, client_for):
    pipeline = build(settings, scoring, cache, provider, StaticIndex())
    response = client_for(pipeline).get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "rerank_enabled": True,
        "rerank_provider": "pinecone",
        "cache_entries": 0,
    }
