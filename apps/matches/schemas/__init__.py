# apps/matches/schemas/__init__.py
# ================================================================================
"""Raw OpenDota match payload models."""

from .event_rows import KillLogRow, ObjectiveRow, TeamfightRow
from .match_row import MatchRow, PlayerMatchRow, TeamInfo, parse_raw_match
from .pickban_row import PickBanRow
from .player_row import PlayerRow

__all__ = [
    "KillLogRow",
    "MatchRow",
    "ObjectiveRow",
    "PickBanRow",
    "PlayerMatchRow",
    "PlayerRow",
    "TeamInfo",
    "TeamfightRow",
    "parse_raw_match",
]
