# apps/teams/services/__init__.py
# ================================================================================
"""
Services for the 'teams' app.

Example:
    from apps.teams.services import load_team, team_performance
"""

from .normalizer import derive_tag, normalize_team, normalize_teams
from .performance import summary_performance, team_performance
from .team_loader import attach_statistics, load_team

__all__ = [
    "attach_statistics",
    "derive_tag",
    "load_team",
    "normalize_team",
    "normalize_teams",
    "summary_performance",
    "team_performance",
]
