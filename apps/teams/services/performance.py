# apps/teams/services/performance.py
# ================================================================================
"""
Team performance summaries.

``team_performance`` works over fully normalized matches plus the tracked
team's participations; ``summary_performance`` covers an imported match
history that only carries per-match results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from apps.analytics.conf import RECENT_FORM_SIZE
from apps.analytics.services.aggregator import safe_mean, streaks, win_rate, win_rate_trend
from apps.matches.conf import MatchResult, PickOrder
from apps.teams.models import TeamPerformance
from common.time_utils import EPOCH

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from apps.matches.models import Match, TeamMatchParticipation
    from apps.teams.models import TeamMatchSummary


@dataclass(frozen=True, slots=True)
class _Game:
    start_time: datetime
    match_id: int
    result: MatchResult
    duration: int
    pick_order: PickOrder | None = None

    @property
    def won(self) -> bool:
        return self.result is MatchResult.WON


def _pick_win_rate(games: list[_Game], order: PickOrder) -> float:
    picked = [g for g in games if g.pick_order == order]
    return win_rate(sum(g.won for g in picked), len(picked))


def _summarize(games: Iterable[_Game]) -> TeamPerformance:
    ordered = sorted(games, key=lambda g: (g.start_time, g.match_id), reverse=True)
    results = [g.won for g in ordered]
    wins = sum(results)
    return TeamPerformance(
        total_matches=len(ordered),
        wins=wins,
        losses=len(ordered) - wins,
        win_rate=win_rate(wins, len(ordered)),
        average_duration=safe_mean(g.duration for g in ordered),
        first_pick_win_rate=_pick_win_rate(ordered, PickOrder.FIRST),
        second_pick_win_rate=_pick_win_rate(ordered, PickOrder.SECOND),
        streaks=streaks(results),
        recent_form=tuple(g.result for g in ordered[:RECENT_FORM_SIZE]),
        trend=win_rate_trend(results),
    )


def team_performance(
    matches: Iterable[Match],
    participations: Mapping[int, TeamMatchParticipation],
) -> TeamPerformance:
    """Summary over the attributed matches; matches without a participation are ignored."""
    games = [
        _Game(match.start_time, match.match_id, p.result, match.duration, p.pick_order)
        for match in matches
        if (p := participations.get(match.match_id)) is not None
    ]
    return _summarize(games)


def summary_performance(summaries: Iterable[TeamMatchSummary]) -> TeamPerformance:
    """Same summary from an imported history; pick-order rates stay at 0.0."""
    return _summarize(
        _Game(s.start_time or EPOCH, s.match_id, s.result, s.duration) for s in summaries
    )
