# apps/matches/schemas/pickban_row.py
# ================================================================================
"""Raw ``picks_bans`` entry of an OpenDota match payload."""

from __future__ import annotations

from pydantic import Field, StrictBool, StrictInt

from apps.core.schemas import RawPayload
from apps.matches.conf import DraftAction, Side


class PickBanRow(RawPayload):
    """``team`` is 0 for Radiant and 1 for Dire; ``order`` is 0-based."""

    is_pick: StrictBool
    hero_id: StrictInt = Field(ge=0)
    team: StrictInt = Field(ge=0, le=1)
    order: StrictInt = Field(ge=0)

    @property
    def side(self) -> Side:
        return Side.from_team_index(self.team)

    @property
    def action(self) -> DraftAction:
        return DraftAction.PICK if self.is_pick else DraftAction.BAN
