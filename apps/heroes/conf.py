# apps/heroes/conf.py
# ================================================================================
"""Configuration and constants for the heroes app."""

from __future__ import annotations

from enum import StrEnum
from typing import Final

# ─── Static Attribute Choices ──────────────────────────────────────────────────


class PrimaryAttribute(StrEnum):
    STRENGTH = "str"
    AGILITY = "agi"
    INTELLIGENCE = "int"
    UNIVERSAL = "all"


class AttackType(StrEnum):
    MELEE = "Melee"
    RANGED = "Ranged"


CDN_BASE_URL: Final[str] = "https://cdn.cloudflare.steamstatic.com"
IMAGE_URL_TEMPLATE: Final[str] = CDN_BASE_URL + "/apps/dota2/images/dota_react/heroes/{short}.png"
INTERNAL_NAME_PREFIX: Final[str] = "npc_dota_hero_"

# Complexity 1 (simple) .. 3 (very complex), used when the provider does not
# ship one. Matched as substrings of the localized name.
COMPLEX_HEROES: Final[tuple[str, ...]] = ("Invoker", "Meepo", "Chen", "Visage", "Lone Druid")
MODERATE_HEROES: Final[tuple[str, ...]] = ("Anti-Mage", "Pudge", "Crystal Maiden", "Drow Ranger")
DEFAULT_COMPLEXITY: Final[int] = 1

# ─── Performance Thresholds ────────────────────────────────────────────────────
HIGH_PERFORMING_MIN_GAMES: Final[int] = 5
HIGH_PERFORMING_MIN_WIN_RATE: Final[float] = 0.6

# Minimum head-to-head games before a matchup row is reported.
MATCHUP_MIN_GAMES: Final[int] = 1
