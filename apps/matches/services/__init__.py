# apps/matches/services/__init__.py
# ================================================================================
"""
Services for the 'matches' app.

Example:
    from apps.matches.services import MatchFetcher, apply_filters
"""

from .filters import FilterResult, MatchFilterCriteria, apply_filters, filter_breakdown
from .match_fetcher import MatchFetcher, new_match_cache
from .normalizer import NormalizedBatch, normalize_match, normalize_matches
from .participation import build_participations, roster_for

__all__ = [
    "FilterResult",
    "MatchFetcher",
    "MatchFilterCriteria",
    "NormalizedBatch",
    "apply_filters",
    "build_participations",
    "filter_breakdown",
    "new_match_cache",
    "normalize_match",
    "normalize_matches",
    "roster_for",
]
