"""Core data types and type definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypedDict

from apps.core.exceptions import RETRYABLE_ERRORS

# ─── Fetch Result Types ─────────────────────────────


@dataclass(frozen=True, slots=True)
class FailedFetch:
    """One key that could not be fetched, with the final error and how many attempts it took."""

    match_id: int
    cause: BaseException
    attempts: int = 1

    @property
    def retryable(self) -> bool:
        return isinstance(self.cause, RETRYABLE_ERRORS)


@dataclass(frozen=True, slots=True)
class FetchOutcome[T]:
    """
    Partitioned result of a fan-out fetch.

    Order is completion-independent; callers key results by ID, not position.
    """

    succeeded: list[T] = field(default_factory=list)
    failed: list[FailedFetch] = field(default_factory=list)

    @property
    def failed_ids(self) -> list[int]:
        return [f.match_id for f in self.failed]

    @property
    def ok(self) -> bool:
        return not self.failed


class FetchSummary(TypedDict):
    """Aggregated counters logged once per batch."""

    requested: int
    succeeded: int
    failed: int
    cache_hits: int
    elapsed_ms: float
