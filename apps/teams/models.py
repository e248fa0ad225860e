# apps/teams/models.py
# ================================================================================
"""Processed team records and their lazily attached performance summary."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING

from apps.analytics.conf import Trend
from apps.analytics.services.aggregator import StreakSummary
from apps.matches.conf import MatchResult

if TYPE_CHECKING:
    from datetime import datetime

    from apps.teams.conf import TeamSource


@dataclass(frozen=True, slots=True)
class TeamMatchSummary:
    """One line of an imported team match history."""

    match_id: int
    result: MatchResult
    duration: int
    opponent_name: str
    league_id: int | None = None
    start_time: datetime | None = None

    @property
    def won(self) -> bool:
        return self.result is MatchResult.WON


@dataclass(frozen=True, slots=True)
class TeamPerformance:
    total_matches: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    average_duration: float = 0.0
    first_pick_win_rate: float = 0.0
    second_pick_win_rate: float = 0.0
    streaks: StreakSummary = dataclasses.field(default_factory=StreakSummary)
    # Most recent first.
    recent_form: tuple[MatchResult, ...] = ()
    trend: Trend = Trend.STABLE


@dataclass(frozen=True, slots=True)
class ProcessedTeam:
    id: int
    name: str
    tag: str
    source: TeamSource
    logo_url: str | None = None
    rating: float | None = None
    matches: tuple[TeamMatchSummary, ...] = ()
    statistics: TeamPerformance | None = None

    def __str__(self) -> str:
        return f"{self.name} [{self.tag}]"

    @property
    def match_ids(self) -> list[int]:
        return [m.match_id for m in self.matches]

    def with_statistics(self, statistics: TeamPerformance) -> ProcessedTeam:
        """Fresh copy carrying ``statistics``; the receiver is left untouched."""
        return dataclasses.replace(self, statistics=statistics)
