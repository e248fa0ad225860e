# apps/drafts/services/draft_advisor.py
# ================================================================================
"""
Draft advisor.

Turns per-hero results into ``HeroStat`` rows (win rate in percent) and ranks
them into per-phase pick recommendations. Everything here is a pure function
of its inputs.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from apps.analytics.services.aggregator import win_rate_pct
from apps.core.exceptions import PipelineError, ValidationError
from apps.drafts.conf import (
    LIMITED_POOL_SIZE,
    LOW_WIN_RATE,
    LOW_WIN_RATE_MIN_GAMES,
    PRIORITY_RULES,
    RECOMMEND_MIN_GAMES,
    RECOMMEND_MIN_WIN_RATE,
    RECOMMENDATIONS_PER_PHASE,
    ROLE_TAGS,
    DraftPhase,
    HeroRole,
    PickPriority,
)
from apps.drafts.schemas import parse_player_hero_row
from apps.heroes.models import HeroRef
from common.iterables_utils import flatten

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from apps.core.services.protocols import CatalogProvider
    from apps.heroes.models import Hero, HeroPerformance

log = structlog.get_logger(__name__).bind(component="DraftAdvisor")


@dataclass(frozen=True, slots=True)
class HeroStat:
    hero: HeroRef
    role: HeroRole
    games: int
    wins: int
    win_rate: float  # percent

    @property
    def name(self) -> str:
        return self.hero.display_name


@dataclass(frozen=True, slots=True)
class HeroRecommendation:
    stat: HeroStat
    pick_priority: PickPriority

    @property
    def reason(self) -> str:
        return f"{self.stat.win_rate:.1f}% win rate in {self.stat.games} games"


@dataclass(frozen=True, slots=True)
class PhaseRecommendation:
    phase: DraftPhase
    heroes: tuple[HeroRecommendation, ...] = ()

    @property
    def title(self) -> str:
        return f"{self.phase.capitalize()} Phase Recommendations"

    @property
    def description(self) -> str:
        return f"Top performing heroes for {self.phase} phase picks"


# ─── Hero stats ─────────────────────────────────────────────────────────────────


def role_for(hero: Hero | None) -> HeroRole:
    """Lane role from the hero's provider role tags; ``flex`` when none apply."""
    if hero is None:
        return HeroRole.FLEX
    for tag, role in ROLE_TAGS:
        if tag in hero.roles:
            return role
    return HeroRole.FLEX


def _stat(
    hero_id: int,
    games: int,
    wins: int,
    heroes: Mapping[int, Hero],
    fallback: HeroRef | None = None,
) -> HeroStat:
    hero = heroes.get(hero_id)
    ref = hero.ref() if hero is not None else fallback or HeroRef(hero_id)
    return HeroStat(hero=ref, role=role_for(hero), games=games, wins=wins, win_rate=win_rate_pct(wins, games))


def aggregate_hero_stats(
    performance: Mapping[int, HeroPerformance],
    heroes: Mapping[int, Hero],
) -> list[HeroStat]:
    """One ``HeroStat`` per hero in ``performance``, in the same order."""
    return [_stat(hero_id, row.games, row.wins, heroes, row.hero) for hero_id, row in performance.items()]


def hero_stats_from_rows(
    rows: Iterable[Any],
    heroes: Mapping[int, Hero],
) -> list[HeroStat]:
    """
    Sum OpenDota per-player hero rows into one ``HeroStat`` per hero.

    Rows from several players of the same team may be concatenated; malformed
    rows are logged and skipped.
    """
    totals: defaultdict[int, list[int]] = defaultdict(lambda: [0, 0])
    for index, raw in enumerate(rows):
        try:
            row = parse_player_hero_row(raw)
        except ValidationError as exc:
            log.warning("skipping malformed hero row", index=index, field=exc.field)
            continue
        totals[row.hero_id][0] += row.games
        totals[row.hero_id][1] += row.win
    return [_stat(hero_id, games, wins, heroes) for hero_id, (games, wins) in totals.items()]


# ─── Recommendations ────────────────────────────────────────────────────────────


def pick_priority(stat: HeroStat, phase: DraftPhase) -> PickPriority:
    cutoff, above, below = PRIORITY_RULES[DraftPhase(phase)]
    return above if stat.win_rate >= cutoff else below


def recommend_draft_phase(hero_stats: Sequence[HeroStat], phase: DraftPhase) -> PhaseRecommendation:
    """
    Top heroes for ``phase``: at least 3 games and a 50% win rate, best win
    rate first (ties by games, then name), capped at five.
    """
    phase = DraftPhase(phase)
    eligible = [s for s in hero_stats if s.games >= RECOMMEND_MIN_GAMES and s.win_rate >= RECOMMEND_MIN_WIN_RATE]
    eligible.sort(key=lambda s: (-s.win_rate, -s.games, s.name))
    return PhaseRecommendation(
        phase=phase,
        heroes=tuple(HeroRecommendation(s, pick_priority(s, phase)) for s in eligible[:RECOMMENDATIONS_PER_PHASE]),
    )


def recommend_draft(hero_stats: Sequence[HeroStat]) -> dict[DraftPhase, PhaseRecommendation]:
    return {phase: recommend_draft_phase(hero_stats, phase) for phase in DraftPhase}


# ─── Hero pool analysis ─────────────────────────────────────────────────────────


def role_strengths(hero_stats: Sequence[HeroStat]) -> dict[HeroRole, HeroStat | None]:
    """Best win-rate hero per lane role, ``None`` where the pool has none."""
    best: dict[HeroRole, HeroStat | None] = {}
    for role in (HeroRole.CARRY, HeroRole.MID, HeroRole.SUPPORT, HeroRole.OFFLANE):
        candidates = sorted((s for s in hero_stats if s.role == role), key=lambda s: (-s.win_rate, -s.games, s.name))
        best[role] = candidates[0] if candidates else None
    return best


def pool_weaknesses(hero_stats: Sequence[HeroStat]) -> list[str]:
    """Human-readable gaps in the hero pool: missing or thin roles and weak heroes."""
    weaknesses: list[str] = []
    for role in (HeroRole.CARRY, HeroRole.MID, HeroRole.SUPPORT, HeroRole.OFFLANE):
        count = sum(1 for s in hero_stats if s.role == role)
        if count == 0:
            weaknesses.append(f"No {role} heroes in pool")
        elif count < LIMITED_POOL_SIZE:
            weaknesses.append(f"Limited {role} hero pool")
    if any(s.win_rate < LOW_WIN_RATE and s.games >= LOW_WIN_RATE_MIN_GAMES for s in hero_stats):
        weaknesses.append("Several heroes with low win rates")
    return weaknesses


# ─── Provider-backed aggregation ────────────────────────────────────────────────


async def fetch_team_hero_stats(
    provider: CatalogProvider,
    account_ids: Iterable[int],
    heroes: Mapping[int, Hero],
) -> list[HeroStat]:
    """
    Pull every player's hero history concurrently and sum it per hero.

    A player whose request fails is logged and left out; the rest still count.
    """
    ids = list(dict.fromkeys(account_ids))
    results = await asyncio.gather(*(provider.fetch_player_heroes(a) for a in ids), return_exceptions=True)

    histories: list[list[Any]] = []
    for account_id, result in zip(ids, results, strict=True):
        if isinstance(result, PipelineError):
            log.warning("player hero history unavailable", account_id=account_id, error=type(result).__name__)
            continue
        if isinstance(result, BaseException):
            raise result
        histories.append(result)
    return hero_stats_from_rows(flatten(histories), heroes)
