# apps/drafts/conf.py
# ================================================================================
"""Configuration and constants for the draft advisor."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class DraftPhase(StrEnum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"


class PickPriority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class HeroRole(StrEnum):
    CARRY = "carry"
    MID = "mid"
    OFFLANE = "offlane"
    SUPPORT = "support"
    FLEX = "flex"


# ─── Role Derivation ──────────────────────────────────────────────────────────
# Checked in order; the first provider role tag a hero carries decides.
ROLE_TAGS: Final[tuple[tuple[str, HeroRole], ...]] = (
    ("Carry", HeroRole.CARRY),
    ("Support", HeroRole.SUPPORT),
    ("Initiator", HeroRole.OFFLANE),
    ("Durable", HeroRole.OFFLANE),
    ("Nuker", HeroRole.MID),
    ("Escape", HeroRole.MID),
)

# ─── Recommendation Rules ─────────────────────────────────────────────────────
RECOMMEND_MIN_GAMES: Final[int] = 3
RECOMMEND_MIN_WIN_RATE: Final[float] = 50.0  # percent
RECOMMENDATIONS_PER_PHASE: Final[int] = 5

# (cutoff, priority at or above the cutoff, priority below it), win rate in percent.
PRIORITY_RULES: Final[dict[DraftPhase, tuple[float, PickPriority, PickPriority]]] = {
    DraftPhase.FIRST: (60.0, PickPriority.HIGH, PickPriority.MEDIUM),
    DraftPhase.SECOND: (55.0, PickPriority.HIGH, PickPriority.MEDIUM),
    DraftPhase.THIRD: (50.0, PickPriority.MEDIUM, PickPriority.LOW),
}

# ─── Hero Pool Analysis ───────────────────────────────────────────────────────
LIMITED_POOL_SIZE: Final[int] = 3
LOW_WIN_RATE: Final[float] = 45.0  # percent
LOW_WIN_RATE_MIN_GAMES: Final[int] = 5
