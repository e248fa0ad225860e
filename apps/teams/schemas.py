# apps/teams/schemas.py
# ================================================================================
"""Raw team payloads from OpenDota (``/teams/{id}``) and from a Dotabuff import."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Discriminator, Field, StrictInt, Tag, TypeAdapter, field_validator

from apps.core.schemas import RawPayload, discriminate, validate_payload
from apps.matches.conf import MatchResult

OPENDOTA_TEAM = "opendota"
DOTABUFF_TEAM = "dotabuff"


def _strip_name(v: str) -> str:
    if not v.strip():
        msg = "team name must not be blank"
        raise ValueError(msg)
    return v.strip()


class OpenDotaTeamRow(RawPayload):
    variant: Literal["opendota"] = OPENDOTA_TEAM

    team_id: StrictInt = Field(ge=1)
    name: str | None = None
    tag: str | None = None
    logo_url: str | None = None
    rating: float | None = None
    wins: int | None = None
    losses: int | None = None
    last_match_time: int | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str | None) -> str | None:
        return None if v is None else _strip_name(v)


class DotabuffMatchSummaryRow(RawPayload):
    match_id: int = Field(alias="matchId", ge=1)
    result: MatchResult
    duration: int = Field(ge=0)
    opponent_name: str | None = Field(default=None, alias="opponentName")
    league_id: int | None = Field(default=None, alias="leagueId")
    start_time: int | None = Field(default=None, alias="startTime")

    @field_validator("league_id", mode="before")
    @classmethod
    def _blank_league(cls, v: Any) -> Any:
        return None if v == "" else v


class DotabuffTeamRow(RawPayload):
    """Dotabuff ships the ID as a string and the name as required."""

    variant: Literal["dotabuff"] = DOTABUFF_TEAM

    id: int = Field(ge=1)
    name: str
    matches: list[DotabuffMatchSummaryRow] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return _strip_name(v)


_TEAM_TAGS: dict[str, tuple[str, ...]] = {
    OPENDOTA_TEAM: ("team_id",),
    DOTABUFF_TEAM: ("matches", "id"),
}

RawTeam = Annotated[
    Annotated[OpenDotaTeamRow, Tag(OPENDOTA_TEAM)] | Annotated[DotabuffTeamRow, Tag(DOTABUFF_TEAM)],
    Discriminator(lambda raw: discriminate(raw, _TEAM_TAGS, default=OPENDOTA_TEAM)),
]

_adapter: TypeAdapter[OpenDotaTeamRow | DotabuffTeamRow] = TypeAdapter(RawTeam)


def parse_raw_team(raw: Any) -> OpenDotaTeamRow | DotabuffTeamRow:
    return validate_payload(_adapter, raw, tags=_TEAM_TAGS, id_keys=("team_id", "id"))
