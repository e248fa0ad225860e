# apps/heroes/schemas.py
# ================================================================================
"""Raw hero payloads: the ``/heroes`` constants list and the ``/heroStats`` rows."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Discriminator, Field, StrictInt, Tag, TypeAdapter, field_validator

from apps.core.schemas import RawPayload, discriminate, validate_payload
from apps.heroes.conf import AttackType, PrimaryAttribute

HERO = "hero"
HERO_STATS = "hero_stats"


class HeroRow(RawPayload):
    variant: Literal["hero"] = HERO

    id: StrictInt = Field(ge=1)
    localized_name: str = Field(min_length=1)
    name: str | None = None
    primary_attr: PrimaryAttribute | None = None
    attack_type: AttackType | None = None
    roles: list[str] = Field(default_factory=list)
    complexity: int | None = None

    @field_validator("localized_name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "display name must not be blank"
            raise ValueError(msg)
        return v.strip()

    @field_validator("roles", mode="before")
    @classmethod
    def _null_roles(cls, v: Any) -> Any:
        return [] if v is None else v


class HeroStatsRow(HeroRow):
    """A hero row enriched with image paths and pro-scene pick/ban/win counts."""

    variant: Literal["hero_stats"] = HERO_STATS  # type: ignore[assignment]

    img: str | None = None
    icon: str | None = None
    pro_pick: int | None = None
    pro_win: int | None = None
    pro_ban: int | None = None


_HERO_TAGS: dict[str, tuple[str, ...]] = {
    HERO_STATS: ("img", "pro_pick", "pro_ban"),
}

RawHero = Annotated[
    Annotated[HeroRow, Tag(HERO)] | Annotated[HeroStatsRow, Tag(HERO_STATS)],
    Discriminator(lambda raw: discriminate(raw, _HERO_TAGS, default=HERO)),
]

_adapter: TypeAdapter[HeroRow | HeroStatsRow] = TypeAdapter(RawHero)


def parse_raw_hero(raw: Any) -> HeroRow | HeroStatsRow:
    return validate_payload(_adapter, raw, tags=(HERO, HERO_STATS), id_keys=("id",))
