# apps/teams/services/team_loader.py
# ================================================================================
"""Fetching a team's profile and attaching its performance summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from apps.teams.services.normalizer import normalize_team
from apps.teams.services.performance import summary_performance, team_performance

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from apps.core.services.protocols import CatalogProvider
    from apps.matches.models import Match, TeamMatchParticipation
    from apps.teams.models import ProcessedTeam

log = structlog.get_logger(__name__).bind(component="TeamLoader")


async def load_team(provider: CatalogProvider, team_id: int) -> ProcessedTeam:
    """Fetch and normalize one team; ``statistics`` stays ``None``."""
    team = normalize_team(await provider.fetch_team(team_id))
    log.info("team loaded", team_id=team.id, name=team.name, source=team.source)
    return team


def attach_statistics(
    team: ProcessedTeam,
    matches: Iterable[Match] | None = None,
    participations: Mapping[int, TeamMatchParticipation] | None = None,
) -> ProcessedTeam:
    """
    Fresh team carrying a performance summary.

    Uses the normalized matches when given, otherwise the team's own imported
    match history.
    """
    if matches is not None:
        statistics = team_performance(matches, participations or {})
    else:
        statistics = summary_performance(team.matches)
    return team.with_statistics(statistics)
