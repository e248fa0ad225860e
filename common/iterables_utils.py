# common/iterables_utils.py
# ================================================================================
"""
Small helpers for working with in-memory iterables. They stay
dependency-free so any app can use them.

Exported symbols
────────────────
• unique_by(iterable, key) → Iterator[T]      first occurrence wins
• flatten(nested_iterable) → list[T]
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable, Iterator


# ────────────────────────────────────────────────────────────────────────────
# HELPER UTILITIES
# ────────────────────────────────────────────────────────────────────────────
def unique_by[T, K: Hashable](iterable: Iterable[T], key: Callable[[T], K]) -> Iterator[T]:
    """
    Lazily yield items whose ``key`` has not been seen yet.

    >>> list(unique_by([(1, "a"), (2, "b"), (1, "c")], key=lambda row: row[0]))
    [(1, 'a'), (2, 'b')]
    """
    seen: set[K] = set()
    for item in iterable:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        yield item


# ──────────────────────────────────────────────
#  flatten
# ──────────────────────────────────────────────
def flatten[T](nested: Iterable[Iterable[T]]) -> list[T]:
    """
    Fully realise a nested iterable into a single flat list.

    >>> flatten([[1, 2], [3], []])
    [1, 2, 3]
    """
    return list(itertools.chain.from_iterable(nested))
