# apps/matches/models/player_match.py
# ================================================================================
"""Per-player, per-match performance records."""

from __future__ import annotations

from dataclasses import dataclass

from apps.analytics.services.aggregator import kda
from apps.heroes.models import HeroRef


@dataclass(frozen=True, slots=True)
class PlayerStats:
    """End-of-game numbers for one player. Missing provider values arrive as 0."""

    kills: int = 0
    deaths: int = 0
    assists: int = 0
    last_hits: int = 0
    denies: int = 0
    gpm: int = 0
    xpm: int = 0
    net_worth: int = 0
    level: int = 0

    @property
    def kda(self) -> float:
        return kda(self.kills, self.deaths, self.assists)


@dataclass(frozen=True, slots=True)
class PlayerMatchData:
    """
    One player's line in a match.

    Owned by exactly one match side; reach a team's players through
    ``roster_for`` rather than indexing ``Match.players`` directly.
    """

    hero: HeroRef
    account_id: int | None = None
    player_name: str = ""
    stats: PlayerStats = PlayerStats()
    items: tuple[int, ...] = ()
    hero_damage: int = 0
    hero_healing: int = 0
    tower_damage: int = 0

    @property
    def hero_id(self) -> int:
        return self.hero.id
