# apps/matches/models/participation.py
# ================================================================================
"""The join record binding a tracked team to one side of one match."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from apps.matches.conf import MatchResult, PickOrder, Side

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class TeamMatchParticipation:
    """
    Exactly one per (team, match) pair.

    ``side`` decides which half of ``Match.players`` belongs to the tracked
    team; every downstream computation relies on it.
    """

    match_id: int
    side: Side
    result: MatchResult
    opponent_name: str
    pick_order: PickOrder | None
    duration: int
    date: datetime

    @property
    def won(self) -> bool:
        return self.result is MatchResult.WON
