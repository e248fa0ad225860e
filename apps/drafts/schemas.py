# apps/drafts/schemas.py
# ================================================================================
"""Raw OpenDota ``/players/{account_id}/heroes`` rows."""

from __future__ import annotations

from typing import Any

from pydantic import Field, TypeAdapter, field_validator

from apps.core.schemas import RawPayload, validate_payload


class PlayerHeroRow(RawPayload):
    """OpenDota ships ``hero_id`` as a string on this endpoint, so lax ints are accepted."""

    hero_id: int = Field(ge=1)
    games: int = Field(default=0, ge=0)
    win: int = Field(default=0, ge=0)

    @field_validator("games", "win", mode="before")
    @classmethod
    def _null_count(cls, v: Any) -> Any:
        return 0 if v is None else v


_adapter: TypeAdapter[PlayerHeroRow] = TypeAdapter(PlayerHeroRow)


def parse_player_hero_row(raw: Any) -> PlayerHeroRow:
    return validate_payload(_adapter, raw, id_keys=("hero_id",))
