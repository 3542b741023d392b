"""Query tokenization for keyword evidence."""

from __future__ import annotations

import re

from caselaw_ranker.config.constants import STOPWORDS


def tokenize(text: str) -> list[str]:
    """Lowercase, strip punctuation, remove Dutch stopwords and short tokens."""
    text = text.lower()
    text = re.sub(r"[^\w\s]", " ", text)
    tokens = text.split()
    return [t for t in tokens if t not in STOPWORDS and len(t) > 2 and not t.isdigit()]


def extract_keywords(query: str, max_keywords: int = 6) -> list[str]:
    """Distinct query terms in order of first appearance."""
    seen: list[str] = []
    for token in tokenize(query):
        if token not in seen:
            seen.append(token)
        if len(seen) >= max_keywords:
            break
    return seen
