# apps/matches/models/event.py
# ================================================================================
"""Processed in-game events attached to a match."""

from __future__ import annotations

from dataclasses import dataclass

from apps.matches.conf import EventType, Side


@dataclass(frozen=True, slots=True)
class GameEvent:
    time: int  # seconds from the horn; negative during the pre-game
    type: EventType
    description: str
    side: Side | None = None
    value: int | None = None
