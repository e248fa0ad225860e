# apps/teams/services/normalizer.py
# ================================================================================
"""Pure conversion of raw OpenDota / Dotabuff team payloads into ``ProcessedTeam``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from apps.core.exceptions import ValidationError
from apps.matches.conf import DEFAULT_OPPONENT_NAME
from apps.teams.conf import KNOWN_TAGS, TAG_MAX_LEN, TAG_WORD_LEN, UNKNOWN_TEAM_NAME, TeamSource
from apps.teams.models import ProcessedTeam, TeamMatchSummary
from apps.teams.schemas import DotabuffTeamRow, parse_raw_team
from common.iterables_utils import unique_by
from common.time_utils import to_datetime_aware_safe

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apps.teams.schemas import DotabuffMatchSummaryRow

log = structlog.get_logger(__name__).bind(component="TeamNormalizer")


def derive_tag(name: str) -> str:
    """
    Short upper-case tag for a team that ships none.

    >>> derive_tag("Liquid"), derive_tag("Team Spirit"), derive_tag("Gaimin Gladiators Academy")
    ('LIQ', 'TEAM', 'GGA')
    """
    words = name.split()
    if not words:
        return ""
    known = KNOWN_TAGS.get(name.strip().lower())
    if known is not None:
        return known
    if len(words) == 1:
        return words[0][:TAG_MAX_LEN].upper()

    low, high = TAG_WORD_LEN
    if len(words) == 2:
        short = next((w for w in words if low <= len(w) <= high), None)
        if short is not None:
            return short.upper()
    return "".join(w[0] for w in words)[:TAG_MAX_LEN].upper()


def _summary(row: DotabuffMatchSummaryRow) -> TeamMatchSummary:
    return TeamMatchSummary(
        match_id=row.match_id,
        result=row.result,
        duration=row.duration,
        opponent_name=row.opponent_name or DEFAULT_OPPONENT_NAME,
        league_id=row.league_id,
        start_time=to_datetime_aware_safe(row.start_time),
    )


def normalize_team(raw: Any) -> ProcessedTeam:
    """
    Validate and convert one team payload; ``statistics`` is left ``None``.

    Raises:
        ValidationError: for a missing/non-numeric ID or a blank name.
    """
    row = parse_raw_team(raw)
    if isinstance(row, DotabuffTeamRow):
        unique = unique_by(row.matches, key=lambda m: m.match_id)
        return ProcessedTeam(
            id=row.id,
            name=row.name,
            tag=derive_tag(row.name),
            source=TeamSource.DOTABUFF,
            matches=tuple(_summary(m) for m in unique),
        )

    name = row.name or UNKNOWN_TEAM_NAME
    return ProcessedTeam(
        id=row.team_id,
        name=name,
        tag=(row.tag or "").strip() or derive_tag(name),
        source=TeamSource.OPENDOTA,
        logo_url=row.logo_url or None,
        rating=row.rating,
    )


def normalize_teams(raws: Iterable[Any]) -> dict[int, ProcessedTeam]:
    """Teams keyed by ID, first occurrence wins; malformed payloads are logged and left out."""
    teams: dict[int, ProcessedTeam] = {}
    for index, raw in enumerate(raws):
        try:
            team = normalize_team(raw)
        except ValidationError as exc:
            log.warning("rejecting malformed team payload", index=index, field=exc.field, record_id=exc.record_id)
            continue
        teams.setdefault(team.id, team)
    return teams
