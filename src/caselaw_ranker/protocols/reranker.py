"""Protocol for reranking providers."""

from __future__ import annotations

from typing import Protocol

from caselaw_ranker.models.domain import RerankItem


class RerankProvider(Protocol):
    """Ranks ``documents`` against ``query``.

    Returns one item per ranked document, best first, with ``index`` pointing
    into ``documents``. Raises on any failure; callers decide on fallback.
    """

    name: str

    async def rerank(self, query: str, documents: list[str]) -> list[RerankItem]: ...
