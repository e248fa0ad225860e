# apps/matches/tests/test_match_fetcher.py
import asyncio
from collections import Counter

import pytest

from apps.core.exceptions import FetchTimeoutError, ProviderError, ValidationError
from apps.core.services.retry import RetryPolicy
from apps.matches.conf import MatchFetcherConfig
from apps.matches.services.match_fetcher import MatchFetcher, new_match_cache
from apps.matches.services.normalizer import normalize_match
from apps.matches.tests.factories import raw_match


class FakeProvider:
    """Serves ``raw_match`` payloads; ``script`` queues per-ID behaviours consumed one call at a time."""

    def __init__(self, script=None, *, delay: float = 0.0):
        self.script = {k: list(v) for k, v in (script or {}).items()}
        self.delay = delay
        self.calls: Counter[int] = Counter()

    async def fetch_match(self, match_id: int):
        self.calls[match_id] += 1
        step = self.script.get(match_id, []).pop(0) if self.script.get(match_id) else None
        if step == "hang":
            await asyncio.sleep(10)
        elif isinstance(step, BaseException):
            raise step
        elif isinstance(step, dict):
            return step
        if self.delay:
            await asyncio.sleep(self.delay)
        return raw_match(match_id)


class FakeCatalog:
    def __init__(self, rows):
        self.rows = rows
        self.params = None

    async def fetch_player_matches(self, account_id, **params):
        self.params = params
        return self.rows


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def make_fetcher(sleeps):
    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    def factory(provider, *, cache=None, timeout_s: float = 0.2, max_attempts: int = 3):
        return MatchFetcher(
            provider,
            MatchFetcherConfig(timeout_s=timeout_s),
            cache=cache if cache is not None else new_match_cache(),
            retry=RetryPolicy(max_attempts=max_attempts, base_delay_s=1.0, max_delay_s=30.0),
            sleep=fake_sleep,
        )

    return factory


async def test_fetch_normalizes_and_caches(make_fetcher):
    provider = FakeProvider()
    fetcher = make_fetcher(provider)

    outcome = await fetcher.fetch_matches([1, 2])

    assert outcome.ok
    assert sorted(m.match_id for m in outcome.succeeded) == [1, 2]
    assert 1 in fetcher.cache
    assert 2 in fetcher.cache


async def test_cache_hit_issues_no_provider_call(make_fetcher):
    cache = new_match_cache()
    cache.put(5, normalize_match(raw_match(5)))
    provider = FakeProvider()

    outcome = await make_fetcher(provider, cache=cache).fetch_matches([5])

    assert [m.match_id for m in outcome.succeeded] == [5]
    assert provider.calls[5] == 0


async def test_concurrent_requests_for_one_id_share_one_call(make_fetcher):
    provider = FakeProvider(delay=0.01)
    fetcher = make_fetcher(provider)

    first, second = await asyncio.gather(fetcher.fetch_matches([7]), fetcher.fetch_matches([7, 7]))

    assert provider.calls[7] == 1
    assert first.succeeded[0] == second.succeeded[0]


async def test_cancelled_caller_does_not_fail_a_concurrent_fetch(make_fetcher):
    provider = FakeProvider(delay=0.05)
    fetcher = make_fetcher(provider)

    first = asyncio.create_task(fetcher.fetch_matches([1]))
    await asyncio.sleep(0.01)
    second = asyncio.create_task(fetcher.fetch_matches([1, 2]))
    await asyncio.sleep(0.01)
    first.cancel()

    outcome = await second

    assert outcome.ok
    assert sorted(m.match_id for m in outcome.succeeded) == [1, 2]
    assert provider.calls[1] == 1
    with pytest.raises(asyncio.CancelledError):
        await first


async def test_timeouts_then_success_ends_in_succeeded(make_fetcher, sleeps):
    provider = FakeProvider({9: ["hang", "hang"]})

    outcome = await make_fetcher(provider).fetch_matches([9])

    assert [m.match_id for m in outcome.succeeded] == [9]
    assert outcome.failed == []
    assert provider.calls[9] == 3
    assert sleeps == [1.0, 2.0]


async def test_timeout_on_every_attempt_ends_in_failed(make_fetcher, sleeps):
    provider = FakeProvider({9: ["hang", "hang", "hang"]})

    outcome = await make_fetcher(provider).fetch_matches([9])

    assert outcome.succeeded == []
    [failure] = outcome.failed
    assert failure.match_id == 9
    assert isinstance(failure.cause, TimeoutError)
    assert isinstance(failure.cause, FetchTimeoutError)
    assert failure.attempts == 3
    assert failure.retryable
    assert provider.calls[9] == 3
    assert sleeps == [1.0, 2.0]


async def test_provider_error_is_not_retried(make_fetcher, sleeps):
    provider = FakeProvider({4: [ProviderError(404, "/matches/4")]})

    outcome = await make_fetcher(provider).fetch_matches([4])

    [failure] = outcome.failed
    assert isinstance(failure.cause, ProviderError)
    assert failure.attempts == 1
    assert provider.calls[4] == 1
    assert sleeps == []


async def test_one_failure_never_aborts_siblings(make_fetcher):
    provider = FakeProvider({2: [ProviderError(500)]})
    fetcher = make_fetcher(provider)

    outcome = await fetcher.fetch_matches([1, 2, 3])

    assert sorted(m.match_id for m in outcome.succeeded) == [1, 3]
    assert outcome.failed_ids == [2]
    assert 2 not in fetcher.cache


async def test_malformed_payload_fails_without_retry(make_fetcher, sleeps):
    bad = raw_match(6)
    del bad["duration"]
    provider = FakeProvider({6: [bad]})

    outcome = await make_fetcher(provider).fetch_matches([6])

    [failure] = outcome.failed
    assert isinstance(failure.cause, ValidationError)
    assert failure.cause.field == "duration"
    assert provider.calls[6] == 1
    assert sleeps == []


async def test_invalid_ids_are_reported_without_a_call(make_fetcher):
    provider = FakeProvider()

    outcome = await make_fetcher(provider).fetch_matches([0, -3])

    assert sorted(outcome.failed_ids) == [-3, 0]
    assert all(f.attempts == 0 and isinstance(f.cause, ValidationError) for f in outcome.failed)
    assert sum(provider.calls.values()) == 0


async def test_force_refetches_but_cache_stays_add_only(make_fetcher):
    cache = new_match_cache()
    original = normalize_match(raw_match(8))
    cache.put(8, original)
    provider = FakeProvider({8: [raw_match(8, duration=3000)]})

    outcome = await make_fetcher(provider, cache=cache).fetch_matches([8], force=True)

    assert provider.calls[8] == 1
    assert outcome.succeeded[0].duration == 3000
    assert cache.get(8) is original


async def test_fetch_player_history_fetches_every_listed_match(make_fetcher):
    provider = FakeProvider()
    catalog = FakeCatalog([{"match_id": 11, "hero_id": 1}, {"match_id": 12, "hero_id": 2}, {"match_id": 11}])

    outcome = await make_fetcher(provider).fetch_player_history(catalog, 86745912, limit=20)

    assert sorted(m.match_id for m in outcome.succeeded) == [11, 12]
    assert catalog.params == {"limit": 20}


async def test_unexpected_error_is_reported_not_raised(make_fetcher, sleeps):
    provider = FakeProvider({3: [RuntimeError("provider bug")]})

    outcome = await make_fetcher(provider).fetch_matches([3, 4])

    assert [m.match_id for m in outcome.succeeded] == [4]
    [failure] = outcome.failed
    assert isinstance(failure.cause, RuntimeError)
    assert not failure.retryable
    assert sleeps == []
