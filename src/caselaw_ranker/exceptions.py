"""Custom exception hierarchy for the case-law ranker."""

from __future__ import annotations


class RankerError(Exception):
    """Base exception for all ranker errors."""


class ConfigurationError(RankerError):
    """A required credential or setting is missing."""


class UpstreamError(RankerError):
    """An external service failed or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(UpstreamError):
    """An external service answered, but the body could not be used."""


class GenerationError(UpstreamError):
    """Error from an LLM provider."""
