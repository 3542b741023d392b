"""Protocol for the external vector index service."""

from __future__ import annotations

from typing import Any, Protocol

from caselaw_ranker.models.domain import SearchResult, VectorRecord


class VectorIndex(Protocol):
    async def search(
        self,
        text: str,
        top_k: int,
        filter: dict[str, Any] | None = None,
        namespace: str | None = None,
    ) -> list[SearchResult]: ...

    async def upsert(self, records: list[VectorRecord], namespace: str | None = None) -> None: ...

    async def delete(self, ids: list[str], namespace: str | None = None) -> None: ...
