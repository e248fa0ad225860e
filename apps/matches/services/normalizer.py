# apps/matches/services/normalizer.py
# ================================================================================
"""
Pure conversion of raw provider match payloads into ``Match`` records.

Each payload is validated once against the tagged union in
``apps.matches.schemas``; from there on the code works with typed rows only.
Defaults are applied solely to absent or null fields, never to a present zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from apps.core.exceptions import ValidationError
from apps.heroes.models import HeroRef
from apps.matches.conf import (
    ADVANTAGE_SAMPLE_INTERVAL_S,
    ANONYMOUS_PLAYER_NAME,
    DEFAULT_PLAYER_STAT,
    DraftAction,
    Side,
)
from apps.matches.models import (
    AdvantageSample,
    DraftEntry,
    Match,
    MatchSource,
    MatchStatistics,
    PlayerMatchData,
    PlayerStats,
    Roster,
    TeamRef,
)
from apps.matches.schemas.match_row import MatchRow, PlayerMatchRow, parse_raw_match
from apps.matches.services.events import build_events
from common.iterables_utils import unique_by
from common.time_utils import utc_from_unix

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from apps.heroes.models import Hero
    from apps.matches.schemas.pickban_row import PickBanRow
    from apps.matches.schemas.player_row import PlayerRow

log = structlog.get_logger(__name__).bind(component="MatchNormalizer")


@dataclass(frozen=True, slots=True)
class RejectedRecord:
    index: int
    error: ValidationError


@dataclass(frozen=True, slots=True)
class NormalizedBatch:
    """Outcome of a batch: unique matches in first-seen order plus per-record failures."""

    matches: tuple[Match, ...] = ()
    rejected: tuple[RejectedRecord, ...] = ()
    duplicates: int = 0

    @property
    def by_id(self) -> dict[int, Match]:
        return {m.match_id: m for m in self.matches}


def _stat(value: int | None) -> int:
    return DEFAULT_PLAYER_STAT if value is None else value


def _hero_ref(hero_id: int | None, heroes: Mapping[int, Hero]) -> HeroRef:
    hero_id = hero_id or 0
    hero = heroes.get(hero_id)
    return hero.ref() if hero else HeroRef(hero_id)


def _player_name(personaname: str | None, name: str | None, account_id: int | None) -> str:
    if personaname is not None:
        return personaname
    if name is not None:
        return name
    return f"Player {account_id}" if account_id is not None else ANONYMOUS_PLAYER_NAME


# ─── Full match payload ─────────────────────────────────────────────────────────


def _player(row: PlayerRow, heroes: Mapping[int, Hero]) -> PlayerMatchData:
    net_worth = row.net_worth if row.net_worth is not None else row.total_gold
    return PlayerMatchData(
        hero=_hero_ref(row.hero_id, heroes),
        account_id=row.account_id,
        player_name=_player_name(row.personaname, row.name, row.account_id),
        stats=PlayerStats(
            kills=_stat(row.kills),
            deaths=_stat(row.deaths),
            assists=_stat(row.assists),
            last_hits=_stat(row.last_hits),
            denies=_stat(row.denies),
            gpm=_stat(row.gold_per_min),
            xpm=_stat(row.xp_per_min),
            net_worth=_stat(net_worth),
            level=_stat(row.level),
        ),
        items=row.items,
        hero_damage=_stat(row.hero_damage),
        hero_healing=_stat(row.hero_healing),
        tower_damage=_stat(row.tower_damage),
    )


def _draft(picks_bans: Sequence[PickBanRow], heroes: Mapping[int, Hero]) -> tuple[DraftEntry, ...]:
    ordered = sorted(picks_bans, key=lambda pb: pb.order)
    return tuple(
        DraftEntry(
            phase=DraftAction.PICK if pb.is_pick else DraftAction.BAN,
            side=pb.side,
            hero=_hero_ref(pb.hero_id, heroes),
            time=pb.order + 1,
        )
        for pb in ordered
    )


def _first_pick(draft: Sequence[DraftEntry]) -> Side | None:
    return next((entry.side for entry in draft if entry.is_pick), None)


def _samples(values: Sequence[int] | None) -> tuple[AdvantageSample, ...]:
    return tuple(AdvantageSample(i * ADVANTAGE_SAMPLE_INTERVAL_S, v) for i, v in enumerate(values or ()))


def _statistics(row: MatchRow) -> MatchStatistics | None:
    fields = (row.radiant_score, row.dire_score, row.radiant_gold_adv, row.radiant_xp_adv)
    if all(value is None for value in fields):
        return None
    return MatchStatistics(
        radiant_score=_stat(row.radiant_score),
        dire_score=_stat(row.dire_score),
        gold_advantage=_samples(row.radiant_gold_adv),
        experience_advantage=_samples(row.radiant_xp_adv),
    )


def _from_full(row: MatchRow, heroes: Mapping[int, Hero]) -> Match:
    radiant: list[PlayerMatchData] = []
    dire: list[PlayerMatchData] = []
    for player in row.players:
        (radiant if player.side is Side.RADIANT else dire).append(_player(player, heroes))

    draft = _draft(row.picks_bans or (), heroes)
    radiant_info, dire_info = row.team_info(Side.RADIANT), row.team_info(Side.DIRE)
    return Match(
        match_id=row.match_id,
        start_time=utc_from_unix(row.start_time),
        duration=row.duration,
        radiant_win=row.radiant_win,
        radiant=TeamRef(radiant_info.team_id, radiant_info.name),
        dire=TeamRef(dire_info.team_id, dire_info.name),
        players=Roster(tuple(radiant), tuple(dire)),
        draft=draft,
        first_pick=_first_pick(draft),
        statistics=_statistics(row),
        events=build_events(row, heroes),
        source=MatchSource.OPENDOTA,
        league_id=row.leagueid,
    )


# ─── Per-player match row ───────────────────────────────────────────────────────


def _from_player_row(row: PlayerMatchRow, heroes: Mapping[int, Hero], account_id: int | None) -> Match:
    player = PlayerMatchData(
        hero=_hero_ref(row.hero_id, heroes),
        account_id=account_id,
        player_name=_player_name(None, None, account_id),
        stats=PlayerStats(
            kills=_stat(row.kills),
            deaths=_stat(row.deaths),
            assists=_stat(row.assists),
            last_hits=_stat(row.last_hits),
            denies=_stat(row.denies),
            gpm=_stat(row.gold_per_min),
            xpm=_stat(row.xp_per_min),
        ),
    )
    side = row.side
    roster = Roster(radiant=(player,)) if side is Side.RADIANT else Roster(dire=(player,))
    return Match(
        match_id=row.match_id,
        start_time=utc_from_unix(row.start_time),
        duration=row.duration,
        radiant_win=row.radiant_win,
        players=roster,
        source=MatchSource.OPENDOTA_PLAYER,
        league_id=row.leagueid,
    )


# ─── Public API ─────────────────────────────────────────────────────────────────


def normalize_match(
    raw: Any,
    *,
    heroes: Mapping[int, Hero] | None = None,
    account_id: int | None = None,
) -> Match:
    """
    Validate and convert one raw match payload.

    ``heroes`` enriches hero references with display names; ``account_id``
    identifies the player a per-player history row belongs to.

    Raises:
        ValidationError: naming the first missing or malformed required field.
    """
    row = parse_raw_match(raw)
    heroes = heroes or {}
    if isinstance(row, PlayerMatchRow):
        return _from_player_row(row, heroes, account_id)
    return _from_full(row, heroes)


def normalize_matches(
    raws: Iterable[Any],
    *,
    heroes: Mapping[int, Hero] | None = None,
    account_id: int | None = None,
) -> NormalizedBatch:
    """
    Normalize a batch, keeping the first occurrence of each match ID.

    A malformed record is rejected on its own and never fails the batch.
    """
    matches: dict[int, Match] = {}
    rejected: list[RejectedRecord] = []
    duplicates = 0

    for index, raw in enumerate(raws):
        try:
            match = normalize_match(raw, heroes=heroes, account_id=account_id)
        except ValidationError as exc:
            log.warning("rejecting malformed match record", index=index, field=exc.field, record_id=exc.record_id)
            rejected.append(RejectedRecord(index, exc))
            continue
        if match.match_id in matches:
            duplicates += 1
            continue
        matches[match.match_id] = match

    if rejected or duplicates:
        log.info("batch normalized", kept=len(matches), rejected=len(rejected), duplicates=duplicates)
    return NormalizedBatch(tuple(matches.values()), tuple(rejected), duplicates)


def dedupe_matches(matches: Iterable[Match]) -> list[Match]:
    """First occurrence of each match ID, in input order."""
    return list(unique_by(matches, key=lambda m: m.match_id))
