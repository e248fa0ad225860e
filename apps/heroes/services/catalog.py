# apps/heroes/services/catalog.py
# ================================================================================
"""Loading the hero catalogue from a provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from apps.heroes.services.normalizer import normalize_heroes

if TYPE_CHECKING:
    from apps.core.services.protocols import CatalogProvider
    from apps.heroes.models import Hero

log = structlog.get_logger(__name__).bind(component="HeroCatalog")


async def load_hero_catalog(provider: CatalogProvider) -> dict[int, Hero]:
    """
    Fetch and normalize every hero, keyed by ID.

    Provider errors propagate; individual malformed rows are dropped.
    """
    rows = await provider.fetch_heroes()
    heroes = normalize_heroes(rows)
    log.info("hero catalogue loaded", rows=len(rows), heroes=len(heroes))
    return heroes
