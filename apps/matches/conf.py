# apps/matches/conf.py
# ================================================================================
"""Configuration, constants, and enums for the 'matches' app."""

from __future__ import annotations

from enum import StrEnum
from typing import Final, Self

from pydantic import Field, field_validator

from apps.core.conf import BaseFetcherConfig

# ─── App-wide Constants ────────────────────────────────────────────────────────
ITEM_SLOTS: Final[int] = 6
ADVANTAGE_SAMPLE_INTERVAL_S: Final[int] = 60

# ─── Normalizer Defaults ───────────────────────────────────────────────────────
# Applied only when the provider omits the field (absent key or JSON null).
DEFAULT_PLAYER_STAT: Final[int] = 0
DEFAULT_OPPONENT_NAME: Final[str] = "Unknown"
ANONYMOUS_PLAYER_NAME: Final[str] = "Anonymous"

# ─── Filter Thresholds ─────────────────────────────────────────────────────────
SHORT_MATCH_MAX_MIN: Final[float] = 30.0
LONG_MATCH_MIN_MIN: Final[float] = 45.0


# ─── Enums ─────────────────────────────────────────────────────────────────────


class Side(StrEnum):
    """Represents the team side in a match or draft."""

    RADIANT = "radiant"
    DIRE = "dire"

    @property
    def opposite(self) -> Side:
        return Side.DIRE if self is Side.RADIANT else Side.RADIANT

    @classmethod
    def from_team_index(cls, team: int) -> Self:
        """OpenDota encodes draft sides as 0 = Radiant, 1 = Dire."""
        return cls.RADIANT if team == 0 else cls.DIRE


class MatchResult(StrEnum):
    WON = "won"
    LOST = "lost"


class PickOrder(StrEnum):
    FIRST = "first"
    SECOND = "second"


class DraftAction(StrEnum):
    PICK = "pick"
    BAN = "ban"


class DateRange(StrEnum):
    ALL = "all"
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    CUSTOM = "custom"


class ResultFilter(StrEnum):
    ALL = "all"
    WINS = "wins"
    LOSSES = "losses"


class SideFilter(StrEnum):
    ALL = "all"
    RADIANT = "radiant"
    DIRE = "dire"


class PickOrderFilter(StrEnum):
    ALL = "all"
    FIRST = "first"
    SECOND = "second"


class DurationBucket(StrEnum):
    ALL = "all"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class PerformanceTag(StrEnum):
    HIGH_KDA = "high-kda"
    HIGH_GPM = "high-gpm"
    HIGH_XPM = "high-xpm"
    HIGH_LAST_HITS = "high-last-hits"


# ─── Enum-keyed Thresholds ─────────────────────────────────────────────────────
RELATIVE_RANGE_DAYS: Final[dict[DateRange, int]] = {
    DateRange.LAST_7_DAYS: 7,
    DateRange.LAST_30_DAYS: 30,
}

# Compared against the tracked team's per-player averages.
PERFORMANCE_THRESHOLDS: Final[dict[PerformanceTag, float]] = {
    PerformanceTag.HIGH_KDA: 3.0,
    PerformanceTag.HIGH_GPM: 500.0,
    PerformanceTag.HIGH_XPM: 600.0,
    PerformanceTag.HIGH_LAST_HITS: 200.0,
}


class EventType(StrEnum):
    FIRST_BLOOD = "CHAT_MESSAGE_FIRSTBLOOD"
    ROSHAN_KILL = "CHAT_MESSAGE_ROSHAN_KILL"
    AEGIS = "CHAT_MESSAGE_AEGIS"
    BUILDING_KILL = "building_kill"
    COURIER_LOST = "CHAT_MESSAGE_COURIER_LOST"
    TEAM_FIGHT = "team_fight"


# ─── Pydantic Fetcher Configuration ────────────────────────────────────────────


class MatchFetcherConfig(BaseFetcherConfig):
    """Configuration for MatchFetcher; ``match_ids`` is the default batch."""

    match_ids: list[int] | None = Field(default=None)

    @field_validator("match_ids")
    @classmethod
    def _positive_ids(cls, v: list[int] | None) -> list[int] | None:
        if v is not None and any(mid < 1 for mid in v):
            msg = "match_ids must be positive integers"
            raise ValueError(msg)
        return v
