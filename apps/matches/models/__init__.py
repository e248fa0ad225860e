# apps/matches/models/__init__.py
# ================================================================================
"""
Immutable match-domain records.

Everything here is produced by the normalizer and never mutated afterwards;
this module re-exports the records for easy access from other apps.
"""

from __future__ import annotations

from .event import GameEvent
from .match import AdvantageSample, Match, MatchSource, MatchStatistics, Roster, TeamRef
from .participation import TeamMatchParticipation
from .pick_ban import DraftEntry
from .player_match import PlayerMatchData, PlayerStats

__all__ = [
    "AdvantageSample",
    "DraftEntry",
    "GameEvent",
    "Match",
    "MatchSource",
    "MatchStatistics",
    "PlayerMatchData",
    "PlayerStats",
    "Roster",
    "TeamMatchParticipation",
    "TeamRef",
]
