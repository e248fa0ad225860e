# apps/analytics/conf.py
# ================================================================================
"""Configuration and constants for the analytics app."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class Tier(StrEnum):
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Trend(StrEnum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


# ─── Tier Cutoffs ──────────────────────────────────────────────────────────────
# Exclusive lower bounds on a 0-100 score, evaluated top-down. Anything not
# above the last cutoff lands in Tier.D.
TIER_CUTOFFS: Final[tuple[tuple[float, Tier], ...]] = (
    (70.0, Tier.S),
    (60.0, Tier.A),
    (50.0, Tier.B),
    (40.0, Tier.C),
)

# ─── Trend Windows ─────────────────────────────────────────────────────────────
TREND_WINDOW: Final[int] = 10
WIN_RATE_TREND_THRESHOLD: Final[float] = 0.1  # on a 0..1 win-rate fraction
KDA_TREND_THRESHOLD: Final[float] = 0.5

# Number of most recent results reported as "form" in team summaries.
RECENT_FORM_SIZE: Final[int] = 10
