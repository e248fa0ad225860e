# apps/matches/schemas/event_rows.py
# ================================================================================
"""Raw ``objectives``, ``teamfights`` and per-player ``kills_log`` entries."""

from __future__ import annotations

from apps.core.schemas import RawPayload


class ObjectiveRow(RawPayload):
    """
    One objective. ``team`` is the 2/3 Radiant/Dire code used by Roshan kills;
    ``unit`` names the destroyed building.
    """

    type: str | None = None
    time: int | None = None
    player_slot: int | None = None
    team: int | None = None
    unit: str | None = None
    key: str | None = None


class TeamfightRow(RawPayload):
    start: int | None = None
    end: int | None = None
    deaths: int | None = None


class KillLogRow(RawPayload):
    time: int | None = None
    key: str | None = None
