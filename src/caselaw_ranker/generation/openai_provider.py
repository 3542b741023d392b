"""OpenAI chat-completions provider with JSON-mode structured output."""

from __future__ import annotations

import json

from openai import AsyncOpenAI

from caselaw_ranker.exceptions import ConfigurationError, GenerationError
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.protocols.llm import SchemaT

logger = get_logger("openai")


class OpenAIProvider:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.0,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._timeout = timeout
        self._client: AsyncOpenAI | None = None

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> AsyncOpenAI:
        if not self._api_key:
            raise ConfigurationError("OpenAI API key is not configured (RANKER_OPENAI_API_KEY)")
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, timeout=self._timeout, max_retries=0)
        return self._client

    async def generate_structured(
        self,
        prompt: str,
        response_schema: type[SchemaT],
        system: str | None = None,
    ) -> SchemaT:
        client = self._get_client()
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content or ""
            data = json.loads(content)
            return response_schema.model_validate(data)
        except Exception as e:
            logger.warning("openai_structured_failed", model=self._model, error=str(e))
            raise GenerationError(f"OpenAI structured generation failed: {e}") from e
