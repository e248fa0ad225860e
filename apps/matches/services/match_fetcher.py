# apps/matches/services/match_fetcher.py
# ================================================================================
"""
Fetch orchestrator for matches.

Pulls raw match payloads from an injected provider, normalizes them and keeps
the resulting ``Match`` records in an injected, add-only cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

import structlog

from apps.core.services.base_fetcher import BaseFetcher, Sleep
from apps.core.services.retry import RetryPolicy
from apps.matches.conf import MatchFetcherConfig
from apps.matches.services.normalizer import normalize_match
from common.cache_utils import AsyncMemoryCache
from common.parsers_utils import parse_match_ids_from_rows

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from apps.core.datatype import FetchOutcome
    from apps.core.services.protocols import CatalogProvider, MatchProvider
    from apps.heroes.models import Hero
    from apps.matches.models import Match
    from config.settings import ProviderSettings

log = structlog.get_logger(__name__).bind(fetcher="MatchFetcher")

type MatchCache = AsyncMemoryCache[int, Match]


def new_match_cache() -> MatchCache:
    return AsyncMemoryCache("matches")


class MatchFetcher(BaseFetcher[MatchFetcherConfig, "Match"]):
    def __init__(
        self,
        provider: MatchProvider,
        cfg: MatchFetcherConfig | None = None,
        *,
        cache: MatchCache | None = None,
        retry: RetryPolicy | None = None,
        heroes: Mapping[int, Hero] | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        kwargs: dict[str, Any] = {"cache": cache, "retry": retry}
        if sleep is not None:
            kwargs["sleep"] = sleep
        super().__init__(cfg, **kwargs)
        self.provider = provider
        self.heroes = dict(heroes or {})

    @classmethod
    def from_settings(
        cls,
        provider: MatchProvider,
        settings: ProviderSettings,
        *,
        cache: MatchCache | None = None,
    ) -> MatchFetcher:
        cfg = MatchFetcherConfig(timeout_s=settings.timeout_s)
        return cls(provider, cfg, cache=cache, retry=RetryPolicy.from_settings(settings))

    # ───────────────────────── default wiring ──────────────────────────
    def _default_config(self) -> MatchFetcherConfig:
        return MatchFetcherConfig()

    def _fetcher_type(self) -> Literal["match"]:
        return "match"

    async def _load(self, key: int) -> Match:
        raw = await self.provider.fetch_match(key)
        return normalize_match(raw, heroes=self.heroes)

    # ───────────────────────── public API ──────────────────────────
    async def fetch_matches(
        self,
        match_ids: Iterable[int] | None = None,
        *,
        force: bool | None = None,
    ) -> FetchOutcome[Match]:
        """
        Fetch, normalize and cache every match ID concurrently.

        Defaults to the configured ``match_ids`` batch when none are given.
        """
        if match_ids is None:
            match_ids = self.cfg.match_ids or ()
        return await self.fetch_many(match_ids, force=force)

    async def fetch_from_rows(
        self,
        rows: Iterable[Mapping[str, Any]],
        *,
        force: bool | None = None,
    ) -> FetchOutcome[Match]:
        """Fetch every match referenced by loosely shaped rows, e.g. a player's history."""
        match_ids = parse_match_ids_from_rows(rows)
        if not match_ids:
            log.warning("no match ids parsed from rows")
        return await self.fetch_many(match_ids, force=force)

    async def fetch_player_history(
        self,
        catalog: CatalogProvider,
        account_id: int,
        *,
        limit: int | None = None,
        force: bool | None = None,
    ) -> FetchOutcome[Match]:
        """Fetch the full record of every match in a player's recent history."""
        params = {"limit": limit} if limit is not None else {}
        rows = await catalog.fetch_player_matches(account_id, **params)
        self.log.info("player history listed", account_id=account_id, rows=len(rows))
        return await self.fetch_from_rows(rows, force=force)
