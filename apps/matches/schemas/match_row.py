# apps/matches/schemas/match_row.py
# ================================================================================
"""
Raw match payloads as the provider ships them.

Two variants reach the normalizer: the full ``/matches/{id}`` record and the
slimmer per-player row from ``/players/{id}/matches``. ``RawMatch`` is the
tagged union of both and ``parse_raw_match`` validates it exactly once.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Discriminator, Field, StrictBool, StrictInt, Tag, TypeAdapter

from apps.core.conf import DIRE_SLOT_OFFSET
from apps.core.schemas import RawPayload, discriminate, validate_payload
from apps.matches.conf import Side
from apps.matches.schemas.event_rows import ObjectiveRow, TeamfightRow
from apps.matches.schemas.pickban_row import PickBanRow
from apps.matches.schemas.player_row import PlayerRow

FULL_MATCH = "match"
PLAYER_MATCH = "player_match"


class TeamInfo(RawPayload):
    team_id: int | None = None
    name: str | None = None
    tag: str | None = None


class _MatchCore(RawPayload):
    """Fields every match variant must carry, checked strictly."""

    match_id: StrictInt = Field(ge=1)
    duration: StrictInt = Field(gt=0)
    radiant_win: StrictBool
    start_time: int | None = None


class MatchRow(_MatchCore):
    """A full match record."""

    variant: Literal["match"] = FULL_MATCH

    leagueid: int | None = None
    radiant_team_id: int | None = None
    dire_team_id: int | None = None
    radiant_name: str | None = None
    dire_name: str | None = None
    radiant_team: TeamInfo | None = None
    dire_team: TeamInfo | None = None
    radiant_score: int | None = None
    dire_score: int | None = None

    radiant_gold_adv: list[int] | None = None
    radiant_xp_adv: list[int] | None = None
    picks_bans: list[PickBanRow] | None = None
    players: list[PlayerRow] = Field(default_factory=list)
    objectives: list[ObjectiveRow] | None = None
    teamfights: list[TeamfightRow] | None = None

    def team_info(self, side: Side) -> TeamInfo:
        """Merge the nested team object with the flat ``*_team_id`` / ``*_name`` keys."""
        if side == Side.RADIANT:
            nested, team_id, name = self.radiant_team, self.radiant_team_id, self.radiant_name
        else:
            nested, team_id, name = self.dire_team, self.dire_team_id, self.dire_name
        nested = nested or TeamInfo()
        return TeamInfo(
            team_id=nested.team_id if nested.team_id is not None else team_id,
            name=nested.name if nested.name is not None else name,
            tag=nested.tag,
        )


class PlayerMatchRow(_MatchCore):
    """One row of a player's match history: the match as that player saw it."""

    variant: Literal["player_match"] = PLAYER_MATCH

    player_slot: int | None = None
    is_radiant: StrictBool | None = Field(default=None, alias="isRadiant")
    hero_id: int | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    last_hits: int | None = None
    denies: int | None = None
    gold_per_min: int | None = None
    xp_per_min: int | None = None
    leagueid: int | None = None

    @property
    def side(self) -> Side:
        if self.is_radiant is not None:
            return Side.RADIANT if self.is_radiant else Side.DIRE
        if self.player_slot is not None:
            return Side.RADIANT if self.player_slot < DIRE_SLOT_OFFSET else Side.DIRE
        return Side.DIRE


_MATCH_TAGS: dict[str, tuple[str, ...]] = {
    FULL_MATCH: ("players", "picks_bans"),
    PLAYER_MATCH: ("player_slot", "hero_id"),
}

RawMatch = Annotated[
    Annotated[MatchRow, Tag(FULL_MATCH)] | Annotated[PlayerMatchRow, Tag(PLAYER_MATCH)],
    Discriminator(lambda raw: discriminate(raw, _MATCH_TAGS, default=FULL_MATCH)),
]

_adapter: TypeAdapter[MatchRow | PlayerMatchRow] = TypeAdapter(RawMatch)


def parse_raw_match(raw: Any) -> MatchRow | PlayerMatchRow:
    """Validate a provider match payload; raises ``ValidationError`` on the first bad field."""
    return validate_payload(_adapter, raw, tags=_MATCH_TAGS, id_keys=("match_id",))
