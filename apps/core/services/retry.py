# apps/core/services/retry.py
# ================================================================================
"""
Bounded exponential backoff expressed as a pure policy.

The I/O loop that applies it lives in the fetcher; this module never sleeps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

from apps.core.conf import DEFAULT_BASE_DELAY_S, DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_DELAY_S
from apps.core.exceptions import RETRYABLE_ERRORS

if TYPE_CHECKING:
    from config.settings import ProviderSettings


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Config for exponential-backoff retries."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay_s: float = DEFAULT_BASE_DELAY_S
    max_delay_s: float = DEFAULT_MAX_DELAY_S

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = "max_attempts must be >= 1"
            raise ValueError(msg)
        if self.base_delay_s < 0 or self.max_delay_s < 0:
            msg = "delays must be non-negative"
            raise ValueError(msg)

    @classmethod
    def from_settings(cls, settings: ProviderSettings) -> Self:
        retry = settings.retry
        return cls(
            max_attempts=retry.max_attempts,
            base_delay_s=retry.base_delay_s,
            max_delay_s=retry.max_delay_s,
        )

    def next_delay(self, attempt: int) -> float | None:
        """
        Delay to wait after failed attempt number ``attempt`` (1-based).

        Returns ``None`` once the attempt budget is spent. The curve doubles
        per attempt and is capped at ``max_delay_s``, so it never decreases.
        """
        if attempt < 1:
            msg = "attempt numbers start at 1"
            raise ValueError(msg)
        if attempt >= self.max_attempts:
            return None
        return min(self.base_delay_s * (2 ** (attempt - 1)), self.max_delay_s)

    def schedule(self) -> list[float]:
        """Every delay the policy would produce, in order."""
        delays: list[float] = []
        attempt = 1
        while (delay := self.next_delay(attempt)) is not None:
            delays.append(delay)
            attempt += 1
        return delays

    @staticmethod
    def is_retryable(exc: BaseException) -> bool:
        return isinstance(exc, RETRYABLE_ERRORS)
