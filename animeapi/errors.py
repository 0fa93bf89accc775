"""Exception hierarchy for animeapi.

Extraction failures are raised inside the providers and turned into
``Err`` results at the operation boundary, see ``animeapi.result``.
"""

from __future__ import annotations


class AnimeApiError(Exception):
    """Base exception for all animeapi errors."""


class ExtractionError(AnimeApiError):
    """An extraction operation could not produce a result."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider
        self.message = message


class SourceUnavailable(ExtractionError):
    """The provider page could not be fetched (network error or non-2xx status)."""


class ParseMismatch(ExtractionError):
    """The fetched page did not have the shape the provider selectors expect."""


class ProviderNotFound(AnimeApiError):
    """Raised when a requested provider id is not registered."""


class OperationNotSupported(AnimeApiError):
    """Raised when a provider does not expose the requested operation."""
