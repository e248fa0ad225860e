# apps/matches/models/match.py
# ================================================================================
"""The normalized Match record and the value objects it is built from."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from apps.matches.conf import PickOrder, Side

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime

    from apps.matches.models.event import GameEvent
    from apps.matches.models.pick_ban import DraftEntry
    from apps.matches.models.player_match import PlayerMatchData


class MatchSource(StrEnum):
    OPENDOTA = "opendota"
    OPENDOTA_PLAYER = "opendota_player"


@dataclass(frozen=True, slots=True)
class TeamRef:
    id: int | None = None
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Roster:
    radiant: tuple[PlayerMatchData, ...] = ()
    dire: tuple[PlayerMatchData, ...] = ()

    def __getitem__(self, side: Side) -> tuple[PlayerMatchData, ...]:
        return self.radiant if side == Side.RADIANT else self.dire

    def __iter__(self) -> Iterator[PlayerMatchData]:
        yield from self.radiant
        yield from self.dire


@dataclass(frozen=True, slots=True)
class AdvantageSample:
    """Radiant-relative lead at ``time`` seconds; negative means Dire leads."""

    time: int
    value: int


@dataclass(frozen=True, slots=True)
class MatchStatistics:
    radiant_score: int = 0
    dire_score: int = 0
    gold_advantage: tuple[AdvantageSample, ...] = ()
    experience_advantage: tuple[AdvantageSample, ...] = ()


@dataclass(frozen=True, slots=True)
class Match:
    """
    A single Dota 2 match in the unified domain shape.

    Immutable once normalized and identified by the provider's match ID.
    """

    match_id: int
    start_time: datetime
    duration: int  # seconds
    radiant_win: bool
    radiant: TeamRef = TeamRef()
    dire: TeamRef = TeamRef()
    players: Roster = Roster()
    draft: tuple[DraftEntry, ...] = ()
    first_pick: Side | None = None
    statistics: MatchStatistics | None = None
    events: tuple[GameEvent, ...] = ()
    source: MatchSource = MatchSource.OPENDOTA
    league_id: int | None = None

    @property
    def winner(self) -> Side:
        return Side.RADIANT if self.radiant_win else Side.DIRE

    @property
    def duration_minutes(self) -> float:
        return self.duration / 60

    @property
    def pick_order(self) -> dict[Side, PickOrder | None]:
        if self.first_pick is None:
            return {Side.RADIANT: None, Side.DIRE: None}
        return {self.first_pick: PickOrder.FIRST, self.first_pick.opposite: PickOrder.SECOND}

    def team(self, side: Side) -> TeamRef:
        return self.radiant if side == Side.RADIANT else self.dire

    def picks(self, side: Side) -> tuple[DraftEntry, ...]:
        return tuple(entry for entry in self.draft if entry.side is side and entry.is_pick)

    def bans(self, side: Side) -> tuple[DraftEntry, ...]:
        return tuple(entry for entry in self.draft if entry.side is side and not entry.is_pick)
