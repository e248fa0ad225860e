# apps/analytics/services/aggregator.py
# ================================================================================
"""
Pure statistical reducers over a match set.

Nothing here keeps state between calls or suspends; feeding the same input
twice yields equal output. Inputs must already be validated and normalized.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import groupby
from statistics import fmean
from typing import TYPE_CHECKING

from apps.analytics.conf import (
    KDA_TREND_THRESHOLD,
    TIER_CUTOFFS,
    TREND_WINDOW,
    WIN_RATE_TREND_THRESHOLD,
    Tier,
    Trend,
)
from apps.heroes.conf import HIGH_PERFORMING_MIN_GAMES, HIGH_PERFORMING_MIN_WIN_RATE

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from apps.matches.models import Match, TeamMatchParticipation


@dataclass(frozen=True, slots=True)
class StreakSummary:
    """``current_streak`` is positive for an active win run, negative for a loss run."""

    longest_win_streak: int = 0
    longest_loss_streak: int = 0
    current_streak: int = 0


# ─── Ratios ────────────────────────────────────────────────────────────────────


def win_rate(wins: int, games: int) -> float:
    """``wins / games`` as a 0..1 fraction; 0.0 when there are no games."""
    if games <= 0:
        return 0.0
    return wins / games


def win_rate_pct(wins: int, games: int) -> float:
    return win_rate(wins, games) * 100


def kda(kills: int, deaths: int, assists: int) -> float:
    """(kills + assists) / deaths, or kills + assists for a deathless game."""
    if deaths > 0:
        return (kills + assists) / deaths
    return float(kills + assists)


def safe_mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    mean = fmean(values)
    return mean if math.isfinite(mean) else 0.0


# ─── Streaks ───────────────────────────────────────────────────────────────────


def streaks(results: Iterable[bool]) -> StreakSummary:
    """
    Walk outcomes ordered most-recent-first (``True`` = win) and report run lengths.

    The first run encountered is the one still active, so it becomes the
    current streak; its sign encodes direction.
    """
    longest_win = longest_loss = current = 0
    for index, (won, run) in enumerate(groupby(results)):
        length = sum(1 for _ in run)
        if won:
            longest_win = max(longest_win, length)
        else:
            longest_loss = max(longest_loss, length)
        if index == 0:
            current = length if won else -length
    return StreakSummary(longest_win, longest_loss, current)


def ordered_results(
    matches: Iterable[Match],
    participations: Mapping[int, TeamMatchParticipation],
) -> list[bool]:
    """Tracked-team outcomes, most recent first. Unattributed matches are skipped."""
    attributed = [
        (match.start_time, match.match_id, participations[match.match_id].won)
        for match in matches
        if match.match_id in participations
    ]
    attributed.sort(key=lambda row: (row[0], row[1]), reverse=True)
    return [won for _, _, won in attributed]


def team_streaks(
    matches: Iterable[Match],
    participations: Mapping[int, TeamMatchParticipation],
) -> StreakSummary:
    return streaks(ordered_results(matches, participations))


# ─── Trend ─────────────────────────────────────────────────────────────────────


def trend(values: Sequence[float], *, window: int = TREND_WINDOW, threshold: float) -> Trend:
    """
    Compare the mean of the most recent ``window`` values against the next ``window``.

    ``values`` is ordered most-recent-first. Fewer than ``2 * window`` values
    always report ``Trend.STABLE``.
    """
    if window < 1:
        msg = "window must be >= 1"
        raise ValueError(msg)
    if len(values) < 2 * window:
        return Trend.STABLE

    recent = safe_mean(values[:window])
    older = safe_mean(values[window : 2 * window])
    delta = recent - older
    if delta > threshold:
        return Trend.IMPROVING
    if delta < -threshold:
        return Trend.DECLINING
    return Trend.STABLE


def win_rate_trend(results: Sequence[bool], *, window: int = TREND_WINDOW) -> Trend:
    return trend([1.0 if won else 0.0 for won in results], window=window, threshold=WIN_RATE_TREND_THRESHOLD)


def kda_trend(kdas: Sequence[float], *, window: int = TREND_WINDOW) -> Trend:
    return trend(kdas, window=window, threshold=KDA_TREND_THRESHOLD)


# ─── Classification ────────────────────────────────────────────────────────────


def tier(score: float) -> Tier:
    """Bucket a 0-100 score; cutoffs are exclusive so exactly 70 is an A."""
    for cutoff, bucket in TIER_CUTOFFS:
        if score > cutoff:
            return bucket
    return Tier.D


def is_high_performing(games: int, wins: int) -> bool:
    return games >= HIGH_PERFORMING_MIN_GAMES and win_rate(wins, games) >= HIGH_PERFORMING_MIN_WIN_RATE
