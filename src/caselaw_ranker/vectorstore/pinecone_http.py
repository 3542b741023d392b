"""Shared httpx plumbing for the Pinecone REST APIs."""

from __future__ import annotations

import json
from typing import Any

import httpx

from caselaw_ranker.exceptions import ConfigurationError, MalformedResponseError, UpstreamError
from caselaw_ranker.observability.logger import get_logger

logger = get_logger("pinecone_http")


class PineconeHTTPClient:
    """Lazily-created ``httpx.AsyncClient`` with Pinecone auth headers.

    ``transport`` is forwarded to httpx so tests can mount a MockTransport.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float,
        api_version: str = "2025-04",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._api_version = api_version
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if not self._api_key:
            raise ConfigurationError("Pinecone API key is not configured (RANKER_PINECONE_API_KEY)")
        if not self._base_url:
            raise ConfigurationError("Pinecone base URL is not configured")
        if self._client is None:
            base_url = self._base_url
            if "://" not in base_url:
                base_url = f"https://{base_url}"
            self._client = httpx.AsyncClient(
                base_url=base_url,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
                headers={
                    "Api-Key": self._api_key,
                    "X-Pinecone-API-Version": self._api_version,
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def post(
        self,
        path: str,
        payload: Any | None = None,
        content: str | None = None,
        content_type: str = "application/json",
    ) -> Any:
        """POST and decode the JSON body. Empty bodies decode to None."""
        client = self._get_client()
        try:
            if content is None:
                content = json.dumps(payload if payload is not None else {})
            response = await client.post(path, content=content, headers={"Content-Type": content_type})
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("pinecone_timeout", path=path, timeout_s=self._timeout)
            raise UpstreamError(f"Pinecone request to {path} timed out") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("pinecone_http_error", path=path, status=status, body=e.response.text[:200])
            raise UpstreamError(f"Pinecone returned {status} for {path}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.warning("pinecone_transport_error", path=path, error=str(e))
            raise UpstreamError(f"Pinecone request to {path} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Pinecone returned non-JSON body for {path}") from e
