"""Classify a decision's court into the tier used for score weighting."""

from __future__ import annotations

import re

from caselaw_ranker.models.domain import CourtType

_LEADING_PREFIX = re.compile(r"^(het|de|den|afdeling)\s+")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")

# Phrase patterns are substring matches, compiled patterns match on word
# boundaries. Groups are checked top-down and the first hit wins.
_COURT_PATTERNS: tuple[tuple[CourtType, tuple[str | re.Pattern[str], ...]], ...] = (
    (
        CourtType.HR,
        (
            # Hoge Raad
            "hoge raad",
            "hogeraad",
            re.compile(r"\bhr\b"),
            # Raad van State (highest administrative court)
            "raad van state",
            "raad v d state",
            "raad vd state",
            re.compile(r"\brvs\b"),
            "bestuursrechtspraak",
            # Centrale Raad van Beroep
            "centrale raad van beroep",
            "centrale raad v d beroep",
            "centrale raad vd beroep",
            re.compile(r"\bcrvb\b"),
            # College van Beroep (voor het bedrijfsleven)
            "college van beroep",
            re.compile(r"\bcbb\b"),
            re.compile(r"\bcvb\b"),
        ),
    ),
    (
        CourtType.HOF,
        (
            "gerechtshof",
            re.compile(r"\bhof\b"),
        ),
    ),
    (
        CourtType.RECHTBANK,
        (
            "rechtbank",
            re.compile(r"\brb\b"),
            "kantonrechter",
            "kanton",
        ),
    ),
)


def normalize_court_name(raw: str) -> str:
    text = raw.lower().strip()
    text = _LEADING_PREFIX.sub("", text)
    text = _NON_ALNUM.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def _matches(pattern: str | re.Pattern[str], text: str) -> bool:
    if isinstance(pattern, str):
        return pattern in text
    return pattern.search(text) is not None


def map_court_level(court_level: str | None, court: str | None = None) -> CourtType:
    """Map a raw court string to a :class:`CourtType`.

    ``court_level`` is preferred; ``court`` is the fallback carried by older
    records. Case, punctuation and repeated whitespace are ignored.
    """
    raw = court_level or court
    if not raw:
        return CourtType.UNKNOWN

    normalized = normalize_court_name(raw)
    if not normalized:
        return CourtType.UNKNOWN

    for court_type, patterns in _COURT_PATTERNS:
        if any(_matches(p, normalized) for p in patterns):
            return court_type
    return CourtType.UNKNOWN
