"""Google Gemini LLM provider using the google-genai SDK."""

from __future__ import annotations

import json

from google import genai
from google.genai import types

from caselaw_ranker.exceptions import ConfigurationError, GenerationError
from caselaw_ranker.observability.logger import get_logger
from caselaw_ranker.protocols.llm import SchemaT

logger = get_logger("gemini")


class GeminiProvider:
    def __init__(self, api_key: str, model: str = "gemini-2.0-flash", temperature: float = 0.0) -> None:
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._client: genai.Client | None = None

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> genai.Client:
        if not self._api_key:
            raise ConfigurationError("Google API key is not configured (RANKER_GOOGLE_API_KEY)")
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate_structured(
        self,
        prompt: str,
        response_schema: type[SchemaT],
        system: str | None = None,
    ) -> SchemaT:
        client = self._get_client()
        try:
            config = types.GenerateContentConfig(
                temperature=self._temperature,
                response_mime_type="application/json",
                response_schema=response_schema,
            )
            if system:
                config.system_instruction = system

            response = await client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
            data = json.loads(response.text or "")
            return response_schema.model_validate(data)
        except Exception as e:
            logger.warning("gemini_structured_failed", model=self._model, error=str(e))
            raise GenerationError(f"Gemini structured generation failed: {e}") from e
