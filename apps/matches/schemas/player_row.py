# apps/matches/schemas/player_row.py
# ================================================================================
"""
Raw per-player entry of a full OpenDota match payload.

Every numeric stat is optional here: the normalizer decides the default for an
absent (or null) value, while a present value of the wrong type is rejected.
"""

from __future__ import annotations

from pydantic import Field, StrictBool

from apps.core.conf import DIRE_SLOT_OFFSET
from apps.core.schemas import RawPayload
from apps.matches.conf import ITEM_SLOTS, Side
from apps.matches.schemas.event_rows import KillLogRow


class PlayerRow(RawPayload):
    account_id: int | None = None
    player_slot: int | None = None
    is_radiant: StrictBool | None = Field(default=None, alias="isRadiant")
    hero_id: int | None = None
    personaname: str | None = None
    name: str | None = None

    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    last_hits: int | None = None
    denies: int | None = None
    gold_per_min: int | None = None
    xp_per_min: int | None = None
    net_worth: int | None = None
    total_gold: int | None = None
    level: int | None = None
    hero_damage: int | None = None
    hero_healing: int | None = None
    tower_damage: int | None = None
    kills_log: list[KillLogRow] | None = None

    item_0: int | None = None
    item_1: int | None = None
    item_2: int | None = None
    item_3: int | None = None
    item_4: int | None = None
    item_5: int | None = None

    @property
    def side(self) -> Side:
        """``isRadiant`` wins over the slot encoding; a player with neither counts as Dire."""
        if self.is_radiant is not None:
            return Side.RADIANT if self.is_radiant else Side.DIRE
        if self.player_slot is not None:
            return Side.RADIANT if self.player_slot < DIRE_SLOT_OFFSET else Side.DIRE
        return Side.DIRE

    @property
    def items(self) -> tuple[int, ...]:
        slots = (getattr(self, f"item_{i}") for i in range(ITEM_SLOTS))
        return tuple(item for item in slots if item is not None and item > 0)
