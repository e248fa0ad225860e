# apps/matches/models/pick_ban.py
# ================================================================================
"""A single pick or ban in a match's Captains Mode draft."""

from __future__ import annotations

from dataclasses import dataclass

from apps.heroes.models import HeroRef
from apps.matches.conf import DraftAction, Side


@dataclass(frozen=True, slots=True)
class DraftEntry:
    """``time`` is the 1-based position of the action within the draft."""

    phase: DraftAction
    side: Side
    hero: HeroRef
    time: int

    @property
    def is_pick(self) -> bool:
        return self.phase is DraftAction.PICK
