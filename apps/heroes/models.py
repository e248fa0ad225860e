# apps/heroes/models.py
# ================================================================================
"""Hero entities: the lightweight reference carried by matches, the static
definition, and the derived per-team view rebuilt on every aggregation run."""

from __future__ import annotations

from dataclasses import dataclass, field

from apps.analytics.conf import Tier, Trend
from apps.heroes.conf import AttackType, PrimaryAttribute


@dataclass(frozen=True, slots=True)
class HeroRef:
    """Identity of a hero as it appears inside a match record."""

    id: int
    localized_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.localized_name or f"Hero {self.id}"


@dataclass(frozen=True, slots=True)
class Hero:
    """Represents a single hero's definitions and attributes."""

    id: int
    name: str
    localized_name: str
    primary_attr: PrimaryAttribute | None = None
    attack_type: AttackType | None = None
    roles: tuple[str, ...] = ()
    complexity: int = 1
    image_url: str = ""

    def ref(self) -> HeroRef:
        return HeroRef(self.id, self.localized_name)

    def __str__(self) -> str:
        return self.localized_name


@dataclass(frozen=True, slots=True)
class HeroMatchup:
    """Tracked team's record with one hero against one opposing hero."""

    opponent_hero_id: int
    games: int
    wins: int
    win_rate: float


@dataclass(frozen=True, slots=True)
class ProcessedHero:
    """
    A hero plus statistics derived from one match set.

    Never mutated: recomputation produces a new instance.
    """

    hero: Hero
    picks: int = 0
    bans: int = 0
    wins: int = 0
    games: int = 0
    win_rate: float = 0.0
    tier: Tier = Tier.D
    trend: Trend = Trend.STABLE
    is_high_performing: bool = False
    matchups: tuple[HeroMatchup, ...] = field(default=())

    @property
    def id(self) -> int:
        return self.hero.id

    @property
    def losses(self) -> int:
        return self.games - self.wins


@dataclass(frozen=True, slots=True)
class HeroPerformance:
    """Per-hero record of the tracked team over a recomputable match set."""

    hero: HeroRef
    games: int
    wins: int
    losses: int
    win_rate: float
    is_high_performing: bool
