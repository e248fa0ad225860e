# apps/matches/services/events.py
# ================================================================================
"""
Turns a full match payload's ``objectives`` and ``teamfights`` into GameEvents
with display descriptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from apps.core.conf import DIRE_SLOT_OFFSET
from apps.heroes.conf import INTERNAL_NAME_PREFIX
from apps.matches.conf import EventType, Side
from apps.matches.models import GameEvent

if TYPE_CHECKING:
    from collections.abc import Mapping

    from apps.heroes.models import Hero
    from apps.matches.schemas.event_rows import ObjectiveRow
    from apps.matches.schemas.match_row import MatchRow
    from apps.matches.schemas.player_row import PlayerRow

UNKNOWN_PLAYER: Final[str] = "unknown player"

# Objective ``team`` codes used by Roshan kills.
_TEAM_CODES: Final[dict[int, Side]] = {2: Side.RADIANT, 3: Side.DIRE}

_BUILDING_KINDS: Final[tuple[tuple[str, str], ...]] = (
    ("tower", "tower"),
    ("rax", "barracks"),
    ("fort", "Ancient"),
)


def _side_from_slot(slot: int | None) -> Side:
    return Side.RADIANT if slot is not None and slot < DIRE_SLOT_OFFSET else Side.DIRE


def _short_name(name: str | None) -> str:
    return (name or "").removeprefix(INTERNAL_NAME_PREFIX)


class _EventBuilder:
    """Resolves player slots to names while walking a single match's objectives."""

    def __init__(self, row: MatchRow, heroes: Mapping[int, Hero]) -> None:
        self.row = row
        self.heroes = heroes
        self.by_slot: dict[int, PlayerRow] = {p.player_slot: p for p in row.players if p.player_slot is not None}

    def hero_name(self, slot: int | None) -> str:
        player = self.by_slot.get(slot)
        if player is None:
            return UNKNOWN_PLAYER
        hero = self.heroes.get(player.hero_id or 0)
        return hero.localized_name if hero else "unknown hero"

    def player_name(self, slot: int | None) -> str:
        player = self.by_slot.get(slot)
        if player is None:
            return UNKNOWN_PLAYER
        return player.personaname or f"Player {player.account_id or 'Unknown'}"

    def victim_name(self, slot: int | None, time: int) -> str:
        killer = self.by_slot.get(slot)
        if killer is None or not killer.kills_log:
            return UNKNOWN_PLAYER
        kill = next((k for k in killer.kills_log if k.time == time and k.key), None)
        if kill is None:
            return UNKNOWN_PLAYER
        short = _short_name(kill.key)
        hero = next((h for h in self.heroes.values() if _short_name(h.name) == short), None)
        return hero.localized_name if hero else short

    # ------------------------------------------------------------------ kinds
    def first_blood(self, obj: ObjectiveRow, time: int) -> GameEvent:
        slot = obj.player_slot
        killer = self.hero_name(slot) if slot is not None else UNKNOWN_PLAYER
        victim = self.victim_name(slot, time)
        return GameEvent(time, EventType.FIRST_BLOOD, f"First Blood: {killer} killed {victim}", _side_from_slot(slot))

    def roshan(self, obj: ObjectiveRow, time: int) -> GameEvent:
        side = _TEAM_CODES.get(obj.team) or _side_from_slot(obj.player_slot)
        return GameEvent(time, EventType.ROSHAN_KILL, f"{side.value.capitalize()} killed Roshan", side)

    def aegis(self, obj: ObjectiveRow, time: int) -> GameEvent:
        slot = obj.player_slot
        holder = self.player_name(slot) if slot is not None else UNKNOWN_PLAYER
        return GameEvent(time, EventType.AEGIS, f"Aegis picked up by {holder}", _side_from_slot(slot))

    def building(self, obj: ObjectiveRow, time: int) -> GameEvent | None:
        unit = obj.unit
        if not unit:
            return None
        kind = next((label for needle, label in _BUILDING_KINDS if needle in unit), "building")
        side = _side_from_slot(obj.player_slot)
        return GameEvent(time, EventType.BUILDING_KILL, f"{side.value.capitalize()} destroyed {kind}", side)


def build_events(row: MatchRow, heroes: Mapping[int, Hero] | None = None) -> tuple[GameEvent, ...]:
    """
    Objective events (first blood, Roshan, Aegis, buildings) plus team fights,
    ordered by game time. Courier kills and unknown objective types are skipped.
    """
    builder = _EventBuilder(row, heroes or {})
    events: list[GameEvent] = []

    for obj in row.objectives or ():
        time = obj.time
        if time is None:
            continue
        match obj.type:
            case EventType.FIRST_BLOOD:
                events.append(builder.first_blood(obj, time))
            case EventType.ROSHAN_KILL:
                events.append(builder.roshan(obj, time))
            case EventType.AEGIS:
                events.append(builder.aegis(obj, time))
            case EventType.BUILDING_KILL:
                if (event := builder.building(obj, time)) is not None:
                    events.append(event)
            case _:
                pass

    for fight in row.teamfights or ():
        if fight.start is None:
            continue
        events.append(GameEvent(fight.start, EventType.TEAM_FIGHT, "Team Fight", value=fight.deaths))

    events.sort(key=lambda e: e.time)
    return tuple(events)
