# apps/heroes/tests/test_hero_stats.py
from apps.analytics.conf import Tier, Trend
from apps.heroes.services.catalog import load_hero_catalog
from apps.heroes.services.hero_stats import (
    hero_performance,
    high_performing_heroes,
    process_hero,
    process_heroes,
)
from apps.matches.conf import Side
from apps.matches.services.filters import MatchFilterCriteria, apply_filters, hide, unhide
from apps.matches.services.normalizer import normalize_match
from apps.matches.services.participation import build_participation
from apps.matches.tests.factories import make_hero, make_match, raw_hero, raw_match

CORE = (1, 2, 3, 4, 5)
BENCH = (11, 12, 13, 14, 15)


def _radiant(matches):
    return {m.match_id: build_participation(m, Side.RADIANT) for m in matches}


def _season():
    """Five games on the core pool (three wins) and four straight wins on the bench pool."""
    core = [make_match(i, radiant_win=i <= 3, radiant_heroes=CORE) for i in range(1, 6)]
    bench = [make_match(i, radiant_win=True, radiant_heroes=BENCH) for i in range(6, 10)]
    return core + bench


def test_hero_performance_counts_the_tracked_roster_only():
    matches = _season()

    rows = hero_performance(matches, _radiant(matches))

    assert list(rows)[:5] == [1, 2, 3, 4, 5]
    assert 6 not in rows
    assert (rows[1].games, rows[1].wins, rows[1].losses) == (5, 3, 2)
    assert rows[1].win_rate == 0.6
    assert rows[11].win_rate == 1.0


def test_high_performing_needs_five_games_at_sixty_percent():
    matches = _season()

    assert high_performing_heroes(matches, _radiant(matches)) == frozenset(CORE)


def test_hiding_a_match_recomputes_hero_statistics():
    matches = _season()
    participations = _radiant(matches)
    hidden = hide(frozenset(), 1)

    recomputable = apply_filters(matches, participations, MatchFilterCriteria(), hidden).recomputable
    rows = hero_performance(recomputable, participations)

    assert (rows[1].games, rows[1].wins, rows[1].losses) == (4, 2, 2)
    assert not rows[1].is_high_performing
    assert high_performing_heroes(recomputable, participations) == frozenset()

    restored = apply_filters(matches, participations, MatchFilterCriteria(), unhide(hidden, 1)).recomputable
    assert high_performing_heroes(restored, participations) == frozenset(CORE)


def test_unattributed_matches_are_ignored():
    matches = _season()
    participations = _radiant(matches[:2])

    assert hero_performance(matches, participations)[1].games == 2


def test_process_hero_builds_a_fresh_summary():
    matches = _season()

    processed = process_hero(make_hero(1, "Anti-Mage"), matches, _radiant(matches))

    assert processed.id == 1
    assert (processed.picks, processed.bans, processed.games, processed.wins) == (5, 0, 5, 3)
    assert processed.losses == 2
    assert processed.tier is Tier.B
    assert processed.trend is Trend.STABLE
    assert processed.is_high_performing
    first = processed.matchups[0]
    assert (first.opponent_hero_id, first.games, first.wins) == (6, 5, 3)


def test_process_hero_counts_own_bans():
    match = normalize_match(raw_match(1))
    participations = {1: build_participation(match, Side.RADIANT)}

    banned = process_hero(make_hero(20, "Lion"), [match], participations)

    assert (banned.picks, banned.bans, banned.games) == (0, 1, 0)
    assert banned.tier is Tier.D
    assert banned.matchups == ()


def test_process_heroes_recomputes_independently():
    matches = _season()
    participations = _radiant(matches)
    heroes = [make_hero(1, "Anti-Mage"), make_hero(11, "Shadow Fiend")]

    first = process_heroes(heroes, matches, participations)
    second = process_heroes(heroes, matches, participations)

    assert first == second
    assert [p.games for p in first] == [5, 4]


class FakeCatalog:
    async def fetch_heroes(self):
        return [raw_hero(1, "Anti-Mage"), {"id": 2}, raw_hero(74, "Invoker")]


async def test_load_hero_catalog():
    heroes = await load_hero_catalog(FakeCatalog())

    assert sorted(heroes) == [1, 74]
    assert heroes[74].complexity == 3
