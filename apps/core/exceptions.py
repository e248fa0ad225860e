# apps/core/exceptions.py
# ================================================================================
"""Error taxonomy shared by the fetch, normalize and analytics layers."""

from __future__ import annotations

from typing import Any


class PipelineError(Exception):
    """Base class for every error raised by the ingestion pipeline."""

    # Provider attempts made before this error was final; set by the fetcher.
    attempts: int = 1


class ValidationError(PipelineError, ValueError):
    """
    A raw provider record is missing a required field or carries a malformed one.

    Fatal to the single record only; batch callers catch it per record.
    """

    def __init__(self, field: str, message: str, *, record_id: Any = None) -> None:
        self.field = field
        self.record_id = record_id
        prefix = f"record {record_id}: " if record_id is not None else ""
        super().__init__(f"{prefix}{field}: {message}")


class NetworkError(PipelineError):
    """Transport-level failure talking to the provider. Retryable."""


class FetchTimeoutError(NetworkError, TimeoutError):
    """A single provider attempt exceeded its time budget. Retryable."""

    def __init__(self, timeout_s: float, *, match_id: int | None = None) -> None:
        self.timeout_s = timeout_s
        self.match_id = match_id
        super().__init__(f"provider request for {match_id} timed out after {timeout_s:g}s")


class ProviderError(PipelineError):
    """The provider answered with an HTTP status >= 400. Never retried."""

    def __init__(self, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"provider returned HTTP {status_code} for {url or 'request'}")


RETRYABLE_ERRORS: tuple[type[PipelineError], ...] = (NetworkError,)
