"""Reranking by prompting an LLM for a structured ranking with rationale."""

from __future__ import annotations

from caselaw_ranker.exceptions import MalformedResponseError
from caselaw_ranker.generation.prompt_templates import (
    RERANK_PROMPT,
    RERANK_SYSTEM,
    format_document_block,
)
from caselaw_ranker.models.domain import CaseMetadata, RerankItem
from caselaw_ranker.models.schemas import RankingEntry, RankingResponse
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.protocols.llm import LLMProvider

logger = get_logger("llm_ranker")


class LLMRanker:
    name = "llm"

    def __init__(self, llm: LLMProvider) -> None:
        self._llm = llm

    async def rerank(self, query: str, documents: list[str]) -> list[RerankItem]:
        if not documents:
            return []

        prompt = RERANK_PROMPT.format(
            query=query,
            count=len(documents),
            documents=format_document_block(documents),
        )
        result = await self._llm.generate_structured(prompt, RankingResponse, system=RERANK_SYSTEM)
        if not result.rankings:
            raise MalformedResponseError("LLM ranker returned an empty ranking")

        items = [self._to_item(entry) for entry in result.rankings]
        logger.info(
            "llm_reranked",
            model=self._llm.model,
            input_count=len(documents),
            output_count=len(items),
        )
        return items

    @staticmethod
    def _to_item(entry: RankingEntry) -> RerankItem:
        metadata = CaseMetadata(
            ecli=entry.ecli,
            title=entry.title,
            court_level=entry.court_level,
            legal_area=entry.legal_area,
            decision_date=entry.decision_date,
        )
        return RerankItem(
            index=entry.index,
            score=max(0.0, min(1.0, entry.score)),
            metadata=metadata,
            rationale=entry.rationale or None,
        )
