# apps/heroes/services/hero_stats.py
# ================================================================================
"""
Per-hero statistics for a tracked team.

Everything is computed from the ``recomputable`` match set handed in by the
caller and the team's participations; hidden matches never get here.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from apps.analytics.services.aggregator import (
    is_high_performing,
    ordered_results,
    tier,
    win_rate,
    win_rate_pct,
    win_rate_trend,
)
from apps.heroes.conf import MATCHUP_MIN_GAMES
from apps.heroes.models import HeroMatchup, HeroPerformance, ProcessedHero
from apps.matches.services.participation import opponent_roster_for, roster_for, team_draft

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from apps.heroes.models import Hero, HeroRef
    from apps.matches.models import Match, TeamMatchParticipation


@dataclass(slots=True)
class _Tally:
    hero: HeroRef
    games: int = 0
    wins: int = 0


def _attributed(
    matches: Iterable[Match],
    participations: Mapping[int, TeamMatchParticipation],
) -> Iterator[tuple[Match, TeamMatchParticipation]]:
    for match in matches:
        if (participation := participations.get(match.match_id)) is not None:
            yield match, participation


# ─── Hero performance ───────────────────────────────────────────────────────────


def hero_performance(
    recomputable: Iterable[Match],
    participations: Mapping[int, TeamMatchParticipation],
) -> dict[int, HeroPerformance]:
    """
    Games and wins per hero played by the tracked team's roster.

    Ordered by games, then win rate, descending; ties by hero ID.
    """
    tallies: dict[int, _Tally] = {}
    for match, participation in _attributed(recomputable, participations):
        for player in roster_for(match, participation):
            if player.hero_id <= 0:
                continue
            tally = tallies.get(player.hero_id)
            if tally is None:
                tally = tallies[player.hero_id] = _Tally(player.hero)
            elif tally.hero.localized_name is None and player.hero.localized_name is not None:
                tally.hero = player.hero
            tally.games += 1
            tally.wins += participation.won

    rows = [
        HeroPerformance(
            hero=t.hero,
            games=t.games,
            wins=t.wins,
            losses=t.games - t.wins,
            win_rate=win_rate(t.wins, t.games),
            is_high_performing=is_high_performing(t.games, t.wins),
        )
        for t in tallies.values()
    ]
    rows.sort(key=lambda r: (-r.games, -r.win_rate, r.hero.id))
    return {row.hero.id: row for row in rows}


def high_performing_heroes(
    recomputable: Iterable[Match],
    participations: Mapping[int, TeamMatchParticipation],
) -> frozenset[int]:
    """IDs of heroes with at least 5 games and a win rate of 60% or more."""
    return frozenset(
        hero_id for hero_id, row in hero_performance(recomputable, participations).items() if row.is_high_performing
    )


# ─── Processed hero ─────────────────────────────────────────────────────────────


def _played_heroes(match: Match, participation: TeamMatchParticipation) -> set[int]:
    played = {p.hero_id for p in roster_for(match, participation)}
    played.update(e.hero.id for e in team_draft(match, participation) if e.is_pick)
    return played


def _opposing_heroes(match: Match, participation: TeamMatchParticipation) -> set[int]:
    opposing = {p.hero_id for p in opponent_roster_for(match, participation)}
    opposing.update(e.hero.id for e in match.picks(participation.side.opposite))
    return opposing


def _matchups(
    games: Sequence[tuple[Match, TeamMatchParticipation]],
    min_games: int,
) -> tuple[HeroMatchup, ...]:
    totals: defaultdict[int, list[int]] = defaultdict(lambda: [0, 0])
    for match, participation in games:
        for opponent_id in _opposing_heroes(match, participation):
            if opponent_id <= 0:
                continue
            totals[opponent_id][0] += 1
            totals[opponent_id][1] += participation.won

    rows = [
        HeroMatchup(opponent_id, n, wins, win_rate(wins, n))
        for opponent_id, (n, wins) in totals.items()
        if n >= min_games
    ]
    rows.sort(key=lambda r: (-r.games, r.opponent_hero_id))
    return tuple(rows)


def process_hero(
    hero: Hero,
    matches: Iterable[Match],
    participations: Mapping[int, TeamMatchParticipation],
    *,
    min_matchup_games: int = MATCHUP_MIN_GAMES,
) -> ProcessedHero:
    """
    Fresh ``ProcessedHero`` for ``hero`` over the given (recomputable) matches.

    ``picks`` and ``bans`` count the tracked team's own draft actions; ``games``
    counts matches where the team fielded the hero. The tier is taken from the
    win rate as a 0-100 score.
    """
    played: list[tuple[Match, TeamMatchParticipation]] = []
    picks = bans = 0
    for match, participation in _attributed(matches, participations):
        draft = team_draft(match, participation)
        picks += any(e.is_pick and e.hero.id == hero.id for e in draft)
        bans += any(not e.is_pick and e.hero.id == hero.id for e in draft)
        if hero.id in _played_heroes(match, participation):
            played.append((match, participation))

    games = len(played)
    wins = sum(p.won for _, p in played)
    played_matches = [m for m, _ in played]
    return ProcessedHero(
        hero=hero,
        picks=picks,
        bans=bans,
        wins=wins,
        games=games,
        win_rate=win_rate(wins, games),
        tier=tier(win_rate_pct(wins, games)),
        trend=win_rate_trend(ordered_results(played_matches, participations)),
        is_high_performing=is_high_performing(games, wins),
        matchups=_matchups(played, min_matchup_games),
    )


def process_heroes(
    heroes: Iterable[Hero],
    matches: Sequence[Match],
    participations: Mapping[int, TeamMatchParticipation],
) -> list[ProcessedHero]:
    return [process_hero(hero, matches, participations) for hero in heroes]
