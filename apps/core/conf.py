"""Core configuration, constants, and Pydantic models for the entire project."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

# ─── Constants ──────────────────────────────────────────────────────────────────

DEFAULT_TIMEOUT_S: Final[float] = 30.0
DEFAULT_MAX_ATTEMPTS: Final[int] = 3
DEFAULT_BASE_DELAY_S: Final[float] = 1.0
DEFAULT_MAX_DELAY_S: Final[float] = 30.0

# Radiant player slots are 0-4 (or 0-127 in the bitmask encoding), Dire 128+.
DIRE_SLOT_OFFSET: Final[int] = 128

# User agents for rotation
USER_AGENTS: Final[tuple[str, ...]] = (
    # Desktop Browsers
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:123.0) Gecko/20100101 Firefox/123.0",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

# Provider endpoint templates, relative to the configured base URL
ENDPOINTS: Final[dict[str, str]] = {
    "match": "/matches/{match_id}",
    "player_matches": "/players/{account_id}/matches",
    "player_heroes": "/players/{account_id}/heroes",
    "heroes": "/heroes",
    "team": "/teams/{team_id}",
}

# ─── Base Pydantic Models ───────────────────────────────────────────────────────


class BaseFetcherConfig(BaseModel):
    """Base Pydantic model for all fetcher configurations."""

    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)
    force: bool = Field(default=False)

    model_config = ConfigDict(frozen=True, validate_assignment=True)
