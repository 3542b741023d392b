"""In-process TTL cache for reranked result lists."""

from __future__ import annotations

import hashlib
import json
import time
from collections.abc import Callable
from typing import Any

from caselaw_ranker.models.domain import CacheEntry, ScoredResult
from caselaw_ranker.observability.logger import get_logger

logger = get_logger("rerank_cache")


def make_cache_key(
    version: str,
    case_id: str,
    query: str,
    filters: dict[str, Any] | None = None,
) -> str:
    """Stable hash of the inputs that determine a reranked list."""
    filters_json = json.dumps(filters or {}, sort_keys=True, default=str, ensure_ascii=False)
    raw = "\x1f".join([version, case_id, query, filters_json])
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class InMemoryRerankCache:
    """Dict-backed cache with lazy expiry.

    Every ``get``/``set`` sweeps the whole map first. Entries are replaced
    wholesale, never mutated. Concurrent writers to the same key simply
    overwrite each other.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp < self._ttl

    def sweep(self) -> int:
        now = self._clock()
        expired = [k for k, e in self._entries.items() if not self._is_fresh(e, now)]
        for key in expired:
            # pop: another request may have removed it already
            self._entries.pop(key, None)
        if expired:
            logger.debug("rerank_cache_swept", removed=len(expired), remaining=len(self._entries))
        return len(expired)

    def get(self, key: str) -> CacheEntry | None:
        self.sweep()
        entry = self._entries.get(key)
        if entry is None or not self._is_fresh(entry, self._clock()):
            return None
        return entry

    def set(self, key: str, results: list[ScoredResult]) -> CacheEntry:
        self.sweep()
        entry = CacheEntry(key=key, results=tuple(results), timestamp=self._clock())
        self._entries[key] = entry
        return entry
