# apps/matches/services/filters.py
# ================================================================================
"""
Filter & visibility engine.

``apply_filters`` is a pure, conjunctive composition of independent
predicates plus the caller-owned hidden-match set. Side, result, pick order,
hero and performance criteria are judged from the tracked team's
participation, never from the raw match.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, model_validator

from apps.analytics.services.aggregator import safe_mean
from apps.matches.conf import (
    LONG_MATCH_MIN_MIN,
    PERFORMANCE_THRESHOLDS,
    RELATIVE_RANGE_DAYS,
    SHORT_MATCH_MAX_MIN,
    DateRange,
    DurationBucket,
    PerformanceTag,
    PickOrderFilter,
    ResultFilter,
    SideFilter,
)
from apps.matches.models import Match, TeamMatchParticipation
from apps.matches.services.participation import roster_for, team_draft
from common.time_utils import days_ago, ensure_aware

# ─── Criteria ───────────────────────────────────────────────────────────────────


class CustomDateRange(BaseModel):
    """Inclusive bounds; either side may be open."""

    start: datetime | None = None
    end: datetime | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def _ordered(self) -> CustomDateRange:
        if self.start and self.end and ensure_aware(self.start) > ensure_aware(self.end):
            msg = "custom date range start must not be after its end"
            raise ValueError(msg)
        return self


class MatchFilterCriteria(BaseModel):
    """
    Immutable filter settings, replaced wholesale on every change.

    ``opponent`` and ``heroes_played`` match any listed value; every other
    active criterion must hold.
    """

    date_range: DateRange = DateRange.ALL
    custom_date_range: CustomDateRange = Field(default_factory=CustomDateRange)
    result: ResultFilter = ResultFilter.ALL
    opponent: tuple[str, ...] = ()
    team_side: SideFilter = SideFilter.ALL
    pick_order: PickOrderFilter = PickOrderFilter.ALL
    heroes_played: tuple[int, ...] = ()
    duration: DurationBucket = DurationBucket.ALL
    performance_tags: tuple[PerformanceTag, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_empty(self) -> bool:
        return not any(active for _, active, _ in _criteria(self))


# ─── Predicates ─────────────────────────────────────────────────────────────────

type Predicate = Callable[[Match, TeamMatchParticipation | None, MatchFilterCriteria, datetime | None], bool]


def _date_ok(match: Match, _: TeamMatchParticipation | None, c: MatchFilterCriteria, now: datetime | None) -> bool:
    played = ensure_aware(match.start_time)
    if c.date_range == DateRange.CUSTOM:
        start, end = c.custom_date_range.start, c.custom_date_range.end
        if start is not None and played < ensure_aware(start):
            return False
        return not (end is not None and played > ensure_aware(end))
    return played >= days_ago(RELATIVE_RANGE_DAYS[c.date_range], now=now)


def _duration_ok(match: Match, _: TeamMatchParticipation | None, c: MatchFilterCriteria, __: datetime | None) -> bool:
    minutes = match.duration_minutes
    if c.duration == DurationBucket.SHORT:
        return minutes < SHORT_MATCH_MAX_MIN
    if c.duration == DurationBucket.MEDIUM:
        return SHORT_MATCH_MAX_MIN <= minutes <= LONG_MATCH_MIN_MIN
    return minutes > LONG_MATCH_MIN_MIN


def _result_ok(_: Match, p: TeamMatchParticipation | None, c: MatchFilterCriteria, __: datetime | None) -> bool:
    return p is not None and p.won == (c.result == ResultFilter.WINS)


def _side_ok(_: Match, p: TeamMatchParticipation | None, c: MatchFilterCriteria, __: datetime | None) -> bool:
    return p is not None and p.side == c.team_side


def _pick_order_ok(_: Match, p: TeamMatchParticipation | None, c: MatchFilterCriteria, __: datetime | None) -> bool:
    return p is not None and p.pick_order is not None and p.pick_order == c.pick_order


def _opponent_ok(_: Match, p: TeamMatchParticipation | None, c: MatchFilterCriteria, __: datetime | None) -> bool:
    return p is not None and p.opponent_name in c.opponent


def _heroes_ok(match: Match, p: TeamMatchParticipation | None, c: MatchFilterCriteria, __: datetime | None) -> bool:
    if p is None:
        return False
    played = {player.hero_id for player in roster_for(match, p)}
    played.update(entry.hero.id for entry in team_draft(match, p) if entry.is_pick)
    return any(hero_id in played for hero_id in c.heroes_played)


def team_averages(match: Match, participation: TeamMatchParticipation) -> dict[PerformanceTag, float]:
    """Per-player means of the tracked team's KDA, GPM, XPM and last hits."""
    players = roster_for(match, participation)
    return {
        PerformanceTag.HIGH_KDA: safe_mean(p.stats.kda for p in players),
        PerformanceTag.HIGH_GPM: safe_mean(p.stats.gpm for p in players),
        PerformanceTag.HIGH_XPM: safe_mean(p.stats.xpm for p in players),
        PerformanceTag.HIGH_LAST_HITS: safe_mean(p.stats.last_hits for p in players),
    }


def _performance_ok(
    match: Match, p: TeamMatchParticipation | None, c: MatchFilterCriteria, __: datetime | None
) -> bool:
    if p is None or not roster_for(match, p):
        return False
    averages = team_averages(match, p)
    return all(averages[tag] >= PERFORMANCE_THRESHOLDS[tag] for tag in c.performance_tags)


def _criteria(c: MatchFilterCriteria) -> Iterable[tuple[str, bool, Predicate]]:
    """Every criterion as (name, active, predicate), in evaluation order."""
    yield "date_range", c.date_range != DateRange.ALL, _date_ok
    yield "result", c.result != ResultFilter.ALL, _result_ok
    yield "team_side", c.team_side != SideFilter.ALL, _side_ok
    yield "pick_order", c.pick_order != PickOrderFilter.ALL, _pick_order_ok
    yield "heroes_played", bool(c.heroes_played), _heroes_ok
    yield "opponent", bool(c.opponent), _opponent_ok
    yield "duration", c.duration != DurationBucket.ALL, _duration_ok
    yield "performance_tags", bool(c.performance_tags), _performance_ok


CRITERIA_NAMES: Final[tuple[str, ...]] = tuple(name for name, _, _ in _criteria(MatchFilterCriteria()))


# ─── Engine ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FilterResult:
    """
    ``visible`` feeds the match list; ``recomputable`` feeds hero and team
    statistics. Both currently hold the same matches.
    """

    visible: tuple[Match, ...] = ()
    recomputable: tuple[Match, ...] = ()


@dataclass(frozen=True, slots=True)
class FilterStats:
    total_matches: int
    filtered_matches: int
    hidden_matches: int
    breakdown: dict[str, int] = field(default_factory=dict, hash=False)


def matches_criteria(
    match: Match,
    participation: TeamMatchParticipation | None,
    criteria: MatchFilterCriteria,
    *,
    now: datetime | None = None,
) -> bool:
    return all(pred(match, participation, criteria, now) for _, active, pred in _criteria(criteria) if active)


def apply_filters(
    matches: Sequence[Match],
    participations: Mapping[int, TeamMatchParticipation],
    criteria: MatchFilterCriteria,
    hidden: Collection[int] = frozenset(),
    *,
    now: datetime | None = None,
) -> FilterResult:
    """
    Split ``matches`` into what is shown and what statistics are computed from.

    Pure: inputs are never mutated and no state survives the call, so a newly
    hidden match disappears from both outputs on the very next call.
    """
    passing = tuple(
        match
        for match in matches
        if match.match_id not in hidden
        and matches_criteria(match, participations.get(match.match_id), criteria, now=now)
    )
    return FilterResult(visible=passing, recomputable=passing)


def filter_breakdown(
    matches: Sequence[Match],
    participations: Mapping[int, TeamMatchParticipation],
    criteria: MatchFilterCriteria,
    hidden: Collection[int] = frozenset(),
    *,
    now: datetime | None = None,
) -> FilterStats:
    """How many non-hidden matches pass each active criterion on its own."""
    shown = [m for m in matches if m.match_id not in hidden]
    breakdown = dict.fromkeys(CRITERIA_NAMES, len(shown))
    for name, active, pred in _criteria(criteria):
        if active:
            breakdown[name] = sum(1 for m in shown if pred(m, participations.get(m.match_id), criteria, now))
    filtered = sum(1 for m in shown if matches_criteria(m, participations.get(m.match_id), criteria, now=now))
    return FilterStats(
        total_matches=len(matches),
        filtered_matches=filtered,
        hidden_matches=len(matches) - len(shown),
        breakdown=breakdown,
    )


# ─── Hidden set helpers ─────────────────────────────────────────────────────────


def hide(hidden: Collection[int], *match_ids: int) -> frozenset[int]:
    return frozenset(hidden) | frozenset(match_ids)


def unhide(hidden: Collection[int], *match_ids: int) -> frozenset[int]:
    return frozenset(hidden) - frozenset(match_ids)
