"""Cross-encoder reranking hosted by the Pinecone inference API."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from caselaw_ranker.exceptions import MalformedResponseError
from caselaw_ranker.models.domain import RerankItem
from caselaw_ranker.models.schemas import PineconeRerankResponse
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.vectorstore.pinecone_http import PineconeHTTPClient

logger = get_logger("pinecone_reranker")


class PineconeReranker:
    name = "pinecone"

    def __init__(
        self,
        api_key: str,
        model: str = "bge-reranker-v2-m3",
        base_url: str = "https://api.pinecone.io",
        timeout: float = 8.0,
        api_version: str = "2025-04",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = PineconeHTTPClient(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            api_version=api_version,
            transport=transport,
        )
        self._model = model

    async def close(self) -> None:
        await self._http.close()

    async def rerank(self, query: str, documents: list[str]) -> list[RerankItem]:
        if not documents:
            return []

        payload = {
            "model": self._model,
            "query": query,
            "documents": [{"text": d} for d in documents],
            "top_n": len(documents),
            "return_documents": False,
            "parameters": {"truncate": "END"},
        }
        body = await self._http.post("/rerank", payload)
        try:
            parsed = PineconeRerankResponse.model_validate(body or {})
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected Pinecone rerank response: {e}") from e
        if not parsed.data:
            raise MalformedResponseError("Empty response from Pinecone reranker")

        items = [
            RerankItem(
                index=row.index,
                score=row.score,
                document=(row.document or {}).get("text"),
            )
            for row in parsed.data
        ]
        logger.info(
            "pinecone_reranked",
            model=self._model,
            input_count=len(documents),
            output_count=len(items),
            top_scores=[round(i.score, 4) for i in items[:5]],
        )
        return items
