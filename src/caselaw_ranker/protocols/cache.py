"""Protocol for the rerank result cache."""

from __future__ import annotations

from typing import Protocol

from caselaw_ranker.models.domain import CacheEntry, ScoredResult


class RerankCache(Protocol):
    def get(self, key: str) -> CacheEntry | None:
        """Return a fresh entry for ``key``, or None when absent or expired."""
        ...

    def set(self, key: str, results: list[ScoredResult]) -> CacheEntry: ...

    def sweep(self) -> int:
        """Drop expired entries; returns how many were removed."""
        ...

    def __len__(self) -> int: ...
