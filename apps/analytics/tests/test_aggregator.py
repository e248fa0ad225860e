# apps/analytics/tests/test_aggregator.py
from datetime import timedelta

import pytest

from apps.analytics.conf import Tier, Trend
from apps.analytics.services.aggregator import (
    StreakSummary,
    is_high_performing,
    kda,
    kda_trend,
    ordered_results,
    safe_mean,
    streaks,
    team_streaks,
    tier,
    trend,
    win_rate,
    win_rate_pct,
    win_rate_trend,
)
from apps.matches.conf import Side
from apps.matches.services.participation import build_participation
from apps.matches.tests.factories import NOW, make_match


def test_win_rate_of_no_games_is_zero():
    assert win_rate(0, 0) == 0.0
    assert win_rate(3, 4) == 0.75
    assert win_rate_pct(1, 4) == 25.0


def test_kda_guards_against_zero_deaths():
    assert kda(4, 0, 6) == 10.0
    assert kda(4, 2, 6) == 5.0


def test_safe_mean_of_nothing_is_zero():
    assert safe_mean([]) == 0.0
    assert safe_mean([1.0, 2.0, 3.0]) == 2.0


def test_streaks_start_from_the_most_recent_result():
    summary = streaks([False, False, True, True, True])

    assert summary == StreakSummary(longest_win_streak=3, longest_loss_streak=2, current_streak=-2)


def test_streaks_of_nothing():
    assert streaks([]) == StreakSummary()


def test_team_streaks_order_by_start_time_and_skip_unattributed():
    # Match 1 is the most recent by default; match 3 is unattributed.
    matches = [
        make_match(4, radiant_win=False),
        make_match(1, radiant_win=True),
        make_match(2, radiant_win=True),
        make_match(3, radiant_win=False),
    ]
    participations = {m.match_id: build_participation(m, Side.RADIANT) for m in matches if m.match_id != 3}

    assert ordered_results(matches, participations) == [True, True, False]
    assert team_streaks(matches, participations).current_streak == 2


def test_ordered_results_break_start_time_ties_by_match_id():
    matches = [make_match(i, radiant_win=i == 2, start_time=NOW - timedelta(days=1)) for i in (1, 2)]
    participations = {m.match_id: build_participation(m, Side.RADIANT) for m in matches}

    assert ordered_results(matches, participations) == [True, False]


def test_trend_needs_two_full_windows():
    assert trend([1.0, 1.0, 0.0], window=2, threshold=0.1) is Trend.STABLE
    assert trend([1.0, 1.0, 0.0, 0.0], window=2, threshold=0.1) is Trend.IMPROVING
    assert trend([0.0, 0.0, 1.0, 1.0], window=2, threshold=0.1) is Trend.DECLINING
    assert trend([1.0, 0.0, 0.0, 1.0], window=2, threshold=0.1) is Trend.STABLE


def test_trend_rejects_an_empty_window():
    with pytest.raises(ValueError, match="window"):
        trend([1.0], window=0, threshold=0.1)


def test_win_rate_and_kda_trends_use_their_own_thresholds():
    assert win_rate_trend([True] * 3 + [False] * 3, window=3) is Trend.IMPROVING
    assert kda_trend([3.2, 3.2, 3.0, 3.0], window=2) is Trend.STABLE
    assert kda_trend([4.0, 4.0, 3.0, 3.0], window=2) is Trend.IMPROVING


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (70.1, Tier.S),
        (70.0, Tier.A),
        (60.5, Tier.A),
        (55.0, Tier.B),
        (50.0, Tier.C),
        (40.0, Tier.D),
        (0.0, Tier.D),
    ],
)
def test_tier_cutoffs_are_exclusive(score, expected):
    assert tier(score) is expected


def test_high_performing_needs_games_and_win_rate():
    assert is_high_performing(5, 3)
    assert not is_high_performing(4, 4)
    assert not is_high_performing(10, 5)


def test_reducers_are_repeatable():
    results = [True, False, False, True, True, True]

    assert streaks(results) == streaks(results)
    assert win_rate_trend(results, window=3) == win_rate_trend(results, window=3)
