# apps/matches/services/participation.py
# ================================================================================
"""
Binding a tracked team to one side of a match.

``roster_for`` is the only sanctioned way to reach the tracked team's
players: it cross-references ``TeamMatchParticipation.side`` against
``Match.players`` so no call site indexes the roster by hand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from apps.matches.conf import DEFAULT_OPPONENT_NAME, MatchResult, Side
from apps.matches.models import TeamMatchParticipation

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping

    from apps.matches.models import DraftEntry, Match, PlayerMatchData

log = structlog.get_logger(__name__).bind(component="Participation")


def roster_for(match: Match, participation: TeamMatchParticipation) -> tuple[PlayerMatchData, ...]:
    """The tracked team's players in ``match``."""
    if participation.match_id != match.match_id:
        msg = f"participation for match {participation.match_id} applied to match {match.match_id}"
        raise ValueError(msg)
    return match.players[participation.side]


def opponent_roster_for(match: Match, participation: TeamMatchParticipation) -> tuple[PlayerMatchData, ...]:
    if participation.match_id != match.match_id:
        msg = f"participation for match {participation.match_id} applied to match {match.match_id}"
        raise ValueError(msg)
    return match.players[participation.side.opposite]


def team_draft(match: Match, participation: TeamMatchParticipation) -> tuple[DraftEntry, ...]:
    """The tracked team's own picks and bans, in draft order."""
    return tuple(entry for entry in match.draft if entry.side == participation.side)


def build_participation(match: Match, side: Side) -> TeamMatchParticipation:
    """Participation of the team that played ``side`` in ``match``."""
    side = Side(side)
    opponent = match.team(side.opposite).name
    return TeamMatchParticipation(
        match_id=match.match_id,
        side=side,
        result=MatchResult.WON if match.winner is side else MatchResult.LOST,
        opponent_name=opponent if opponent is not None else DEFAULT_OPPONENT_NAME,
        pick_order=match.pick_order[side],
        duration=match.duration,
        date=match.start_time,
    )


def resolve_side(
    match: Match,
    *,
    team_id: int | None = None,
    account_ids: Collection[int] = (),
) -> Side | None:
    """
    Work out which side a team played.

    The provider team ID decides first; otherwise the side fielding most of
    ``account_ids`` wins. Returns ``None`` when neither settles it.
    """
    if team_id is not None:
        if match.radiant.id == team_id:
            return Side.RADIANT
        if match.dire.id == team_id:
            return Side.DIRE

    if account_ids:
        counts = {
            side: sum(1 for p in match.players[side] if p.account_id is not None and p.account_id in account_ids)
            for side in Side
        }
        if counts[Side.RADIANT] != counts[Side.DIRE]:
            return max(counts, key=counts.__getitem__)
    return None


def build_participations(
    matches: Iterable[Match],
    *,
    team_id: int | None = None,
    account_ids: Collection[int] = (),
    sides: Mapping[int, Side] | None = None,
) -> dict[int, TeamMatchParticipation]:
    """
    One participation per match the team can be placed in, keyed by match ID.

    ``sides`` pins the side for specific matches (e.g. manually added ones) and
    takes precedence over resolution. Unplaceable matches are left out.
    """
    sides = sides or {}
    account_ids = frozenset(account_ids)
    result: dict[int, TeamMatchParticipation] = {}
    unplaced: list[int] = []

    for match in matches:
        if match.match_id in result:
            continue
        side = sides.get(match.match_id) or resolve_side(match, team_id=team_id, account_ids=account_ids)
        if side is None:
            unplaced.append(match.match_id)
            continue
        result[match.match_id] = build_participation(match, side)

    if unplaced:
        log.info("matches without a resolvable side", team_id=team_id, match_ids=unplaced)
    return result
