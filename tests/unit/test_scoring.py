"""Tests for adjusted-score calculation and ordering."""

import pytest
from conftest import make_result

from caselaw_ranker.config.settings import Settings
from caselaw_ranker.models.domain import CourtType
from caselaw_ranker.scoring.engine import ScoringEngine


def test_keyword_bonus_per_match(scoring):
    result = make_result("a", 0.5, summary="Huurachterstand leidt tot ontbinding.", title="Huurzaak")
    assert scoring.calculate_keyword_bonus(result, ["huurachterstand", "ontbinding"]) == pytest.approx(0.030)


def test_keyword_bonus_is_capped(scoring):
    result = make_result("a", 0.5, facts="alpha beta gamma delta epsilon")
    bonus = scoring.calculate_keyword_bonus(result, ["alpha", "beta", "gamma", "delta", "epsilon"])
    assert bonus == pytest.approx(0.045)


def test_keyword_bonus_case_insensitive_across_fields(scoring):
    result = make_result(
        "a",
        0.5,
        text="Excerpt over WANPRESTATIE",
        dispute="geschil",
        reasoning="motivering",
        decision="vernietigt",
    )
    assert scoring.calculate_keyword_bonus(result, ["Wanprestatie", "VERNIETIGT"]) == pytest.approx(0.030)


def test_keyword_bonus_no_keywords(scoring):
    result = make_result("a", 0.5, summary="anything")
    assert scoring.calculate_keyword_bonus(result, []) == 0.0
    assert scoring.calculate_keyword_bonus(result, ["", "  "]) == 0.0


def test_clamped_to_one(scoring):
    scored = scoring.calculate_adjusted_score(make_result("a", 0.97, "Hoge Raad"))
    assert scored.court_type == CourtType.HR
    assert scored.adjusted_score == 1.0
    assert scored.score_breakdown.court_boost == pytest.approx(0.10)


def test_clamped_to_zero(scoring):
    scored = scoring.calculate_adjusted_score(make_result("a", 0.02, "onbekend"))
    assert scored.court_type == CourtType.UNKNOWN
    assert scored.adjusted_score == 0.0
    assert scored.score_breakdown.court_boost == pytest.approx(-0.05)


def test_adjusted_score_matches_breakdown(scoring, sample_results):
    for r in scoring.score_and_sort_results(sample_results, ["huurachterstand"]):
        b = r.score_breakdown
        assert r.adjusted_score == max(0.0, min(1.0, b.base_score + b.court_boost + b.keyword_bonus))
        assert 0.0 <= r.adjusted_score <= 1.0
        assert b.base_score == r.score


def test_sorted_descending(scoring, sample_results):
    scored = scoring.score_and_sort_results(sample_results)
    scores = [r.adjusted_score for r in scored]
    assert scores == sorted(scores, reverse=True)
    assert [r.id for r in scored] == ["r1", "r2", "r4", "r3", "r5"]


def test_sort_is_stable_for_ties(scoring):
    results = [make_result(f"t{i}", 0.5, "Rechtbank Utrecht") for i in range(6)]
    scored = scoring.score_and_sort_results(results)
    assert [r.id for r in scored] == [f"t{i}" for i in range(6)]


def test_weights_come_from_settings():
    settings = Settings(court_weight_hof=0.2, google_api_key="x")
    scored = ScoringEngine(settings).calculate_adjusted_score(make_result("a", 0.5, "Gerechtshof Amsterdam"))
    assert scored.adjusted_score == pytest.approx(0.7)


def test_scoring_keeps_metadata(scoring):
    raw = make_result("a", 0.5, "Rechtbank Utrecht", text="tekst", legal_area="Huurrecht")
    scored = scoring.calculate_adjusted_score(raw)
    assert scored.metadata == raw.metadata
    assert scored.text == "tekst"
    assert scored.rerank_score is None


def test_empty_input(scoring):
    assert scoring.score_and_sort_results([], ["x"]) == []
