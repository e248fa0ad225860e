# apps/core/services/base_fetcher.py
# ================================================================================
"""
Abstract async fan-out fetcher with caching, per-attempt timeouts, bounded
retry and in-flight de-duplication.

Concrete fetchers only say how to load one key; everything about concurrency
and failure isolation lives here.
"""

from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import structlog

from apps.core.conf import BaseFetcherConfig
from apps.core.datatype import FailedFetch, FetchOutcome, FetchSummary
from apps.core.exceptions import FetchTimeoutError, PipelineError, ValidationError
from apps.core.services.retry import RetryPolicy
from common.cache_utils import AsyncMemoryCache
from common.iterables_utils import unique_by

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

module_log = structlog.get_logger(__name__).bind(component="BaseFetcher")

type Sleep = Callable[[float], Awaitable[Any]]


class BaseFetcher[CfgT: BaseFetcherConfig, V](ABC):
    """
    Template class for concrete fetchers keyed by a positive integer ID.

    The cache is injected so independent sessions (and tests) never share
    state by accident; ``sleep`` is injectable so backoff needs no real timers.
    """

    def __init__(
        self,
        cfg: CfgT | None = None,
        *,
        cache: AsyncMemoryCache[int, V] | None = None,
        retry: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.cfg: CfgT = cfg or self._default_config()
        self.cache: AsyncMemoryCache[int, V] = cache if cache is not None else AsyncMemoryCache(self._fetcher_type())
        self.retry = retry or RetryPolicy()
        self._sleep = sleep
        self.log = module_log.bind(fetcher=self.__class__.__name__)

    # ------------------------------------------------------------- abstract
    @abstractmethod
    def _default_config(self) -> CfgT: ...

    @abstractmethod
    def _fetcher_type(self) -> str: ...

    @abstractmethod
    async def _load(self, key: int) -> V:
        """One provider round-trip for ``key``, already converted to ``V``."""

    # ------------------------------------------------------------- main run
    async def fetch_many(self, keys: Iterable[int], *, force: bool | None = None) -> FetchOutcome[V]:
        """
        Fetch every key concurrently and partition the results.

        A failing key is reported in ``failed`` and never aborts its siblings.
        Duplicate keys are collapsed before any work starts.
        """
        force = self.cfg.force if force is None else force
        unique = list(unique_by(keys, key=lambda k: k))
        started = time.perf_counter()
        hits_before = self.cache.stats()["hits"]

        results = await asyncio.gather(*(self._settle(key, force=force) for key in unique))

        outcome: FetchOutcome[V] = FetchOutcome()
        for result in results:
            if isinstance(result, FailedFetch):
                outcome.failed.append(result)
            else:
                outcome.succeeded.append(result)

        summary = FetchSummary(
            requested=len(unique),
            succeeded=len(outcome.succeeded),
            failed=len(outcome.failed),
            cache_hits=self.cache.stats()["hits"] - hits_before,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        self.log.info("fetch batch settled", **summary)
        return outcome

    # ------------------------------------------------------------- per key
    async def _settle(self, key: int, *, force: bool) -> V | FailedFetch:
        """Run one key's pipeline to completion, turning any failure into a FailedFetch."""
        if isinstance(key, bool) or not isinstance(key, int) or key < 1:
            cause = ValidationError(f"{self._fetcher_type()}_id", f"expected a positive integer, got {key!r}")
            return FailedFetch(key, cause, attempts=0)

        try:
            return await self.cache.get_or_load(key, lambda: self._load_with_retry(key), force=force)
        except PipelineError as exc:
            self.log.error(
                "fetch failed",
                key=key,
                error=type(exc).__name__,
                detail=str(exc),
                attempts=exc.attempts,
            )
            return FailedFetch(key, exc, attempts=exc.attempts)
        except Exception as exc:
            self.log.exception("unexpected error while fetching", key=key)
            return FailedFetch(key, exc)

    async def _load_with_retry(self, key: int) -> V:
        attempt = 1
        while True:
            try:
                return await self._attempt(key)
            except PipelineError as exc:
                delay = self.retry.next_delay(attempt) if self.retry.is_retryable(exc) else None
                if delay is None:
                    exc.attempts = attempt
                    raise
                self.log.warning(
                    "fetch attempt failed, retrying",
                    key=key,
                    attempt=attempt,
                    delay_s=delay,
                    error=type(exc).__name__,
                )
                await self._sleep(delay)
                attempt += 1

    async def _attempt(self, key: int) -> V:
        """One bounded attempt; the timeout aborts only this key's call."""
        try:
            async with asyncio.timeout(self.cfg.timeout_s):
                return await self._load(key)
        except TimeoutError as exc:
            if isinstance(exc, FetchTimeoutError):
                raise
            raise FetchTimeoutError(self.cfg.timeout_s, match_id=key) from exc
