"""Pinecone index client for integrated-embedding records."""

from __future__ import annotations

import json
from typing import Any

import httpx
from pydantic import ValidationError

from caselaw_ranker.exceptions import MalformedResponseError
from caselaw_ranker.models.domain import CaseMetadata, SearchResult, VectorRecord
from caselaw_ranker.models.schemas import PineconeSearchResponse
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.vectorstore.pinecone_http import PineconeHTTPClient

logger = get_logger("pinecone_index")


class PineconeIndex:
    """The index embeds query and record text itself; we only send text."""

    def __init__(
        self,
        api_key: str,
        index_host: str,
        namespace: str,
        timeout: float = 10.0,
        api_version: str = "2025-04",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = PineconeHTTPClient(
            api_key=api_key,
            base_url=index_host,
            timeout=timeout,
            api_version=api_version,
            transport=transport,
        )
        self._namespace = namespace

    async def close(self) -> None:
        await self._http.close()

    async def search(
        self,
        text: str,
        top_k: int,
        filter: dict[str, Any] | None = None,
        namespace: str | None = None,
    ) -> list[SearchResult]:
        ns = namespace or self._namespace
        query: dict[str, Any] = {"inputs": {"text": text}, "top_k": top_k}
        if filter:
            query["filter"] = filter

        body = await self._http.post(f"/records/namespaces/{ns}/search", {"query": query})
        try:
            parsed = PineconeSearchResponse.model_validate(body or {})
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected Pinecone search response: {e}") from e

        results = []
        for hit in parsed.result.hits:
            fields = dict(hit.fields)
            text_field = fields.get("text")
            results.append(
                SearchResult(
                    id=hit.id,
                    score=hit.score,
                    metadata=CaseMetadata.from_fields(fields),
                    text=text_field if isinstance(text_field, str) else None,
                )
            )
        logger.info("pinecone_search", namespace=ns, top_k=top_k, hits=len(results))
        return results

    async def upsert(self, records: list[VectorRecord], namespace: str | None = None) -> None:
        if not records:
            return
        ns = namespace or self._namespace
        lines = [
            json.dumps({**record.metadata, "_id": record.id, "text": record.text})
            for record in records
        ]
        await self._http.post(
            f"/records/namespaces/{ns}/upsert",
            content="\n".join(lines),
            content_type="application/x-ndjson",
        )
        logger.info("pinecone_upserted", namespace=ns, count=len(records))

    async def delete(self, ids: list[str], namespace: str | None = None) -> None:
        if not ids:
            return
        ns = namespace or self._namespace
        await self._http.post("/vectors/delete", {"ids": ids, "namespace": ns})
        logger.info("pinecone_deleted", namespace=ns, count=len(ids))
