# apps/teams/tests/test_teams.py
from datetime import UTC, datetime

import pytest

from apps.core.exceptions import ValidationError
from apps.matches.conf import MatchResult, Side
from apps.matches.services.participation import build_participation
from apps.matches.tests.factories import make_match
from apps.teams.conf import UNKNOWN_TEAM_NAME, TeamSource
from apps.teams.services import (
    attach_statistics,
    derive_tag,
    load_team,
    normalize_team,
    normalize_teams,
    summary_performance,
    team_performance,
)

DOTABUFF_TEAM = {
    "id": "4242",
    "name": "Gaimin Gladiators",
    "matches": [
        {
            "matchId": 10,
            "result": "won",
            "duration": 2000,
            "opponentName": "Liquid",
            "leagueId": "",
            "startTime": 1_700_000_000,
        },
        {"matchId": 11, "result": "lost", "duration": 1800, "startTime": 1_700_003_600},
        {"matchId": 10, "result": "lost", "duration": 1, "startTime": 1},
    ],
}


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Liquid", "LIQ"),
        ("OG", "OG"),
        ("Team Spirit", "TEAM"),
        ("Evil Geniuses", "EG"),
        ("Gaimin Gladiators Academy", "GGA"),
        ("", ""),
    ],
)
def test_derive_tag(name, expected):
    assert derive_tag(name) == expected


def test_opendota_team_keeps_its_own_tag():
    team = normalize_team({"team_id": 15, "name": " Team Spirit ", "tag": "TSpirit", "logo_url": "", "rating": 1500.5})

    assert team.id == 15
    assert team.name == "Team Spirit"
    assert team.tag == "TSpirit"
    assert team.source is TeamSource.OPENDOTA
    assert team.logo_url is None
    assert team.rating == 1500.5
    assert team.statistics is None
    assert str(team) == "Team Spirit [TSpirit]"


def test_opendota_team_without_name_or_tag_gets_defaults():
    team = normalize_team({"team_id": 16, "tag": "  "})

    assert team.name == UNKNOWN_TEAM_NAME
    assert team.tag == derive_tag(UNKNOWN_TEAM_NAME)


def test_dotabuff_team_with_match_history():
    team = normalize_team(DOTABUFF_TEAM)

    assert team.id == 4242
    assert team.tag == "GG"
    assert team.source is TeamSource.DOTABUFF
    assert team.match_ids == [10, 11]
    first, second = team.matches
    assert first.won
    assert first.opponent_name == "Liquid"
    assert first.league_id is None
    assert first.start_time == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
    assert second.opponent_name == "Unknown"


@pytest.mark.parametrize(
    ("raw", "field"),
    [
        ({"team_id": 5, "name": "   "}, "name"),
        ({"team_id": "abc"}, "team_id"),
        ({"id": 3, "matches": []}, "name"),
        ({"id": 3, "name": "X", "matches": [{"matchId": 1, "result": "draw", "duration": 5}]}, "matches.0.result"),
    ],
)
def test_malformed_team_payloads(raw, field):
    with pytest.raises(ValidationError) as exc_info:
        normalize_team(raw)

    assert exc_info.value.field == field


def test_normalize_teams_first_wins_and_skips_bad_payloads():
    teams = normalize_teams([{"team_id": 1, "name": "A"}, {"team_id": 2, "name": ""}, {"team_id": 1, "name": "B"}])

    assert list(teams) == [1]
    assert teams[1].name == "A"


def test_team_performance_over_normalized_matches():
    matches = [
        make_match(1, radiant_win=True, first_pick=Side.RADIANT),
        make_match(2, radiant_win=False, first_pick=Side.RADIANT),
        make_match(3, radiant_win=True, first_pick=Side.DIRE),
        make_match(4, radiant_win=True, first_pick=Side.DIRE, duration=3000),
        make_match(5, radiant_win=False),
    ]
    participations = {m.match_id: build_participation(m, Side.RADIANT) for m in matches[:4]}

    performance = team_performance(matches, participations)

    assert (performance.total_matches, performance.wins, performance.losses) == (4, 3, 1)
    assert performance.win_rate == 0.75
    assert performance.average_duration == 2550.0
    assert performance.first_pick_win_rate == 0.5
    assert performance.second_pick_win_rate == 1.0
    assert performance.streaks.current_streak == 1
    assert performance.streaks.longest_win_streak == 2
    assert performance.recent_form == (MatchResult.WON, MatchResult.LOST, MatchResult.WON, MatchResult.WON)


def test_summary_performance_from_imported_history():
    team = normalize_team(DOTABUFF_TEAM)

    performance = summary_performance(team.matches)

    assert performance.recent_form == (MatchResult.LOST, MatchResult.WON)
    assert performance.streaks.current_streak == -1
    assert performance.average_duration == 1900.0
    assert performance.first_pick_win_rate == 0.0


def test_empty_history_summarizes_to_zero():
    performance = summary_performance([])

    assert performance.total_matches == 0
    assert performance.win_rate == 0.0
    assert performance.recent_form == ()


def test_attach_statistics_returns_a_fresh_team():
    team = normalize_team(DOTABUFF_TEAM)

    enriched = attach_statistics(team)

    assert team.statistics is None
    assert enriched.statistics is not None
    assert enriched.statistics.total_matches == 2
    assert enriched.id == team.id

    match = make_match(1)
    from_matches = attach_statistics(team, [match], {1: build_participation(match, Side.DIRE)})
    assert from_matches.statistics.losses == 1


class FakeCatalog:
    def __init__(self, payload):
        self.payload = payload
        self.requested = []

    async def fetch_team(self, team_id):
        self.requested.append(team_id)
        return self.payload


async def test_load_team():
    catalog = FakeCatalog({"team_id": 8255888, "name": "BetBoom Team"})

    team = await load_team(catalog, 8255888)

    assert catalog.requested == [8255888]
    assert team.tag == "TEAM"
    assert team.statistics is None
