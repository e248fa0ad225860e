"""
Helpers for pulling match identifiers out of loosely shaped provider rows.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

__all__ = [
    "parse_match_ids_from_rows",
]

# Keys where a single match ID might be found, checked in order.
_SINGLE_ID_KEYS = ("match_id", "matchId")
# Keys where several match IDs might be found.
_MULTIPLE_ID_KEYS = ("match_ids", "matches")


def _coerce_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip()) or None
    return None


def parse_match_ids_from_rows(rows: Iterable[Mapping[str, Any]]) -> list[int]:
    """
    Extract match IDs from an iterable of data rows, first occurrence first.

    This utility can find match IDs from various common keys and formats:
    - A key named 'match_id' or 'matchId' holding an int or digit string.
    - A key named 'match_ids' holding a comma-separated string of IDs.
    - A key named 'match_ids' or 'matches' holding a list of IDs or of rows.

    Args:
        rows: An iterable of mappings, e.g. a player's match history.

    Returns:
        The unique positive match IDs in the order they were first seen.
    """
    unique_ids: dict[int, None] = {}

    for row in rows:
        if not isinstance(row, Mapping):
            continue

        # 1. Check for single match ID fields.
        for key in _SINGLE_ID_KEYS:
            if (match_id := _coerce_id(row.get(key))) is not None:
                unique_ids.setdefault(match_id)
                break

        # 2. Check for multiple match ID fields.
        for key in _MULTIPLE_ID_KEYS:
            value = row.get(key)
            if not value:
                continue
            if isinstance(value, str):
                value = value.split(",")
            if isinstance(value, list):
                nested = [item for item in value if isinstance(item, Mapping)]
                for match_id in parse_match_ids_from_rows(nested):
                    unique_ids.setdefault(match_id)
                for item in value:
                    if (match_id := _coerce_id(item)) is not None:
                        unique_ids.setdefault(match_id)
            break

    return list(unique_ids)
