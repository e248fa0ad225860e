# common/cache_utils.py
"""
In-process async cache with an explicit lifecycle and in-flight de-duplication.

Entries are append-only: once a key holds a value it is never overwritten by a
later write for the same key. Concurrent loads for one missing key share a
single producer call, run as a task that outlives any one caller.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Hashable, Iterator

log = structlog.get_logger(__name__).bind(component="CacheUtils")


class AsyncMemoryCache[K: Hashable, V]:
    """
    Keyed value cache shared by concurrent coroutines on one event loop.

    ``init()`` prepares empty storage, ``clear()`` drops stored values.
    """

    def __init__(self, name: str = "cache") -> None:
        self.name = name
        self._entries: dict[K, V] = {}
        self._inflight: dict[K, asyncio.Future[V]] = {}
        self._hits = 0
        self._misses = 0
        self._initialized = False
        self.init()

    # ------------------------------------------------------------- lifecycle
    def init(self) -> None:
        if self._initialized:
            return
        self._entries = {}
        self._inflight = {}
        self._hits = 0
        self._misses = 0
        self._initialized = True
        log.debug("cache initialised", cache=self.name)

    def clear(self) -> int:
        dropped = len(self._entries)
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        log.info("cache cleared", cache=self.name, dropped=dropped)
        return dropped

    # ------------------------------------------------------------- access
    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._entries))

    def get(self, key: K) -> V | None:
        return self._entries.get(key)

    def put(self, key: K, value: V) -> V:
        """Store ``value`` unless ``key`` already holds one; return the stored value."""
        existing = self._entries.get(key)
        if existing is not None:
            if existing != value:
                log.warning("ignoring conflicting cache write", cache=self.name, key=key)
            return existing
        self._entries[key] = value
        return value

    def is_inflight(self, key: K) -> bool:
        return key in self._inflight

    # ------------------------------------------------------------- get-or-load
    async def get_or_load(
        self,
        key: K,
        producer: Callable[[], Awaitable[V]],
        *,
        force: bool = False,
    ) -> V:
        """
        Return the cached value for ``key`` or produce it exactly once.

        The load runs as a task owned by the cache: a caller arriving while it
        is pending awaits the same task, and cancelling any one caller leaves
        the load running for the others. ``force`` skips the cache hit path
        but still joins a pending load.
        """
        if not force and (cached := self._entries.get(key)) is not None:
            self._hits += 1
            return cached

        if (pending := self._inflight.get(key)) is not None:
            log.debug("joining in-flight load", cache=self.name, key=key)
            return await asyncio.shield(pending)

        self._misses += 1
        task = asyncio.ensure_future(self._produce(key, producer, force=force))
        task.add_done_callback(_observe)
        self._inflight[key] = task
        return await asyncio.shield(task)

    async def _produce(self, key: K, producer: Callable[[], Awaitable[V]], *, force: bool) -> V:
        try:
            value = await producer()
        finally:
            self._inflight.pop(key, None)
        stored = self.put(key, value)
        # A forced load hands back what it produced; the stored entry is kept.
        return value if force else stored

    def stats(self) -> dict[str, Any]:
        return {
            "cache": self.name,
            "entries": len(self._entries),
            "inflight": len(self._inflight),
            "hits": self._hits,
            "misses": self._misses,
        }


def _observe(task: asyncio.Future[Any]) -> None:
    # Mark a failure retrieved even when every caller was cancelled.
    if not task.cancelled():
        task.exception()
