# apps/matches/tests/test_participation.py
import pytest

from apps.matches.conf import MatchResult, PickOrder, Side
from apps.matches.services.participation import (
    build_participation,
    build_participations,
    opponent_roster_for,
    resolve_side,
    roster_for,
    team_draft,
)
from apps.matches.tests.factories import make_match


def test_participation_from_the_dire_side():
    match = make_match(1, radiant_win=True, first_pick=Side.RADIANT)

    participation = build_participation(match, Side.DIRE)

    assert participation.side is Side.DIRE
    assert participation.result is MatchResult.LOST
    assert not participation.won
    assert participation.opponent_name == "Alpha"
    assert participation.pick_order is PickOrder.SECOND
    assert participation.duration == match.duration
    assert participation.date == match.start_time


def test_missing_opponent_name_falls_back():
    match = make_match(1, radiant_name=None)

    assert build_participation(match, Side.DIRE).opponent_name == "Unknown"


def test_no_draft_means_no_pick_order():
    match = make_match(1, first_pick=None)

    assert build_participation(match, Side.RADIANT).pick_order is None


def test_roster_for_follows_the_participation_side():
    match = make_match(1)
    dire = build_participation(match, Side.DIRE)

    assert [p.hero_id for p in roster_for(match, dire)] == [6, 7, 8, 9, 10]
    assert [p.hero_id for p in opponent_roster_for(match, dire)] == [1, 2, 3, 4, 5]
    assert {e.hero.id for e in team_draft(match, dire)} == {6, 7, 8, 9, 10}


def test_roster_for_rejects_a_foreign_participation():
    participation = build_participation(make_match(1), Side.RADIANT)

    with pytest.raises(ValueError, match="applied to match 2"):
        roster_for(make_match(2), participation)


def test_resolve_side_prefers_team_id_then_roster_majority():
    match = make_match(1)

    assert resolve_side(match, team_id=200) is Side.DIRE
    assert resolve_side(match, team_id=999, account_ids={1000, 1001, 2000}) is Side.RADIANT
    assert resolve_side(match, account_ids={1000, 2000}) is None
    assert resolve_side(match) is None


def test_build_participations_skips_unplaceable_and_honours_pins():
    matches = [make_match(1), make_match(2), make_match(3)]

    participations = build_participations(
        matches,
        account_ids={2000, 2001, 2002},
        sides={3: Side.RADIANT},
    )

    assert participations[1].side is Side.DIRE
    assert participations[3].side is Side.RADIANT
    assert set(participations) == {1, 2, 3}
    assert build_participations(matches) == {}
