# apps/teams/conf.py
# ================================================================================
"""Configuration and constants for the 'teams' app."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class TeamSource(StrEnum):
    OPENDOTA = "opendota"
    DOTABUFF = "dotabuff"


# ─── Normalization Defaults ───────────────────────────────────────────────────
UNKNOWN_TEAM_NAME: Final[str] = "Unknown Team"

# ─── Tag Derivation ───────────────────────────────────────────────────────────
# A single-word name is cut to TAG_MAX_LEN characters. A two-word name whose
# words include one of TAG_WORD_LEN characters uses that word; otherwise the
# initials are taken, again capped at TAG_MAX_LEN.
TAG_MAX_LEN: Final[int] = 3
TAG_WORD_LEN: Final[tuple[int, int]] = (2, 4)
KNOWN_TAGS: Final[dict[str, str]] = {
    "evil geniuses": "EG",
}
