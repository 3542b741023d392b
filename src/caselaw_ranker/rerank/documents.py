"""Render candidates as bounded text documents for a rerank provider."""

from __future__ import annotations

from caselaw_ranker.models.domain import CourtType, ScoredResult


def truncate_text(text: str, max_tokens: int, chars_per_token: int = 4) -> str:
    # ~4 characters per token for Dutch text
    max_chars = max_tokens * chars_per_token
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def format_document(candidate: ScoredResult, max_tokens: int = 700, chars_per_token: int = 4) -> str:
    """Excerpt plus a ``[METADATA]`` block listing only the fields we know."""
    meta = candidate.metadata
    excerpt = meta.summary or candidate.text or ""
    body = truncate_text(excerpt.strip(), max_tokens, chars_per_token)

    lines: list[str] = []
    if meta.court_label:
        lines.append(f"court: {meta.court_label}")
    if candidate.court_type is not CourtType.UNKNOWN:
        lines.append(f"court_tier: {candidate.court_type.value}")
    if meta.legal_area:
        lines.append(f"legal_area: {meta.legal_area}")
    if meta.decision_year is not None:
        lines.append(f"decision_year: {meta.decision_year}")
    if meta.ecli:
        lines.append(f"ecli: {meta.ecli}")

    if not lines:
        return body
    block = "[METADATA]\n" + "\n".join(lines)
    return f"{body}\n\n{block}" if body else block
