# apps/heroes/services/normalizer.py
# ================================================================================
"""Pure conversion of raw hero rows into ``Hero`` records."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import structlog

from apps.core.exceptions import ValidationError
from apps.heroes.conf import (
    CDN_BASE_URL,
    COMPLEX_HEROES,
    DEFAULT_COMPLEXITY,
    IMAGE_URL_TEMPLATE,
    INTERNAL_NAME_PREFIX,
    MODERATE_HEROES,
)
from apps.heroes.models import Hero
from apps.heroes.schemas import HeroStatsRow, parse_raw_hero

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apps.heroes.schemas import HeroRow

log = structlog.get_logger(__name__).bind(component="HeroNormalizer")

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def _internal_name(row: HeroRow) -> str:
    if row.name:
        return row.name
    slug = _SLUG_RE.sub("_", row.localized_name.lower()).strip("_")
    return f"{INTERNAL_NAME_PREFIX}{slug}"


def complexity_for(localized_name: str, provided: int | None = None) -> int:
    if provided is not None and 1 <= provided <= 3:
        return provided
    if any(name in localized_name for name in COMPLEX_HEROES):
        return 3
    if any(name in localized_name for name in MODERATE_HEROES):
        return 2
    return DEFAULT_COMPLEXITY


def _image_url(row: HeroRow, internal_name: str) -> str:
    if isinstance(row, HeroStatsRow) and row.img:
        path = row.img.split("?", 1)[0]
        return path if path.startswith("http") else f"{CDN_BASE_URL}{path}"
    return IMAGE_URL_TEMPLATE.format(short=internal_name.removeprefix(INTERNAL_NAME_PREFIX))


def normalize_hero(raw: Any) -> Hero:
    """
    Validate and convert one hero row (``/heroes`` or ``/heroStats`` shape).

    Raises:
        ValidationError: for a non-integer ID or a missing/blank display name.
    """
    row = parse_raw_hero(raw)
    name = _internal_name(row)
    return Hero(
        id=row.id,
        name=name,
        localized_name=row.localized_name,
        primary_attr=row.primary_attr,
        attack_type=row.attack_type,
        roles=tuple(row.roles),
        complexity=complexity_for(row.localized_name, row.complexity),
        image_url=_image_url(row, name),
    )


def normalize_heroes(raws: Iterable[Any]) -> dict[int, Hero]:
    """Hero catalogue keyed by ID; malformed rows are logged and left out."""
    heroes: dict[int, Hero] = {}
    for index, raw in enumerate(raws):
        try:
            hero = normalize_hero(raw)
        except ValidationError as exc:
            log.warning("rejecting malformed hero row", index=index, field=exc.field, record_id=exc.record_id)
            continue
        heroes.setdefault(hero.id, hero)
    return heroes
