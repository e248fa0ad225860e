# apps/core/tests/test_retry.py
import pytest

from apps.core.exceptions import FetchTimeoutError, NetworkError, ProviderError, ValidationError
from apps.core.services.retry import RetryPolicy
from config.settings import ProviderSettings, RetrySettings


def test_default_schedule_doubles_until_attempt_budget_is_spent():
    policy = RetryPolicy()

    assert policy.next_delay(1) == 1.0
    assert policy.next_delay(2) == 2.0
    assert policy.next_delay(3) is None
    assert policy.schedule() == [1.0, 2.0]


def test_schedule_is_monotonic_and_capped():
    policy = RetryPolicy(max_attempts=8, base_delay_s=1.0, max_delay_s=10.0)

    delays = policy.schedule()

    assert delays == [1.0, 2.0, 4.0, 8.0, 10.0, 10.0, 10.0]
    assert delays == sorted(delays)


def test_single_attempt_policy_never_retries():
    assert RetryPolicy(max_attempts=1).schedule() == []


@pytest.mark.parametrize("attempt", [0, -1])
def test_attempt_numbers_start_at_one(attempt):
    with pytest.raises(ValueError, match="start at 1"):
        RetryPolicy().next_delay(attempt)


def test_invalid_policy_is_rejected():
    with pytest.raises(ValueError, match="max_attempts"):
        RetryPolicy(max_attempts=0)
    with pytest.raises(ValueError, match="non-negative"):
        RetryPolicy(base_delay_s=-1)


def test_only_network_failures_are_retryable():
    assert RetryPolicy.is_retryable(NetworkError("reset"))
    assert RetryPolicy.is_retryable(FetchTimeoutError(1.0, match_id=7))
    assert not RetryPolicy.is_retryable(ProviderError(404))
    assert not RetryPolicy.is_retryable(ValidationError("duration", "missing"))


def test_from_settings_copies_retry_block():
    settings = ProviderSettings(retry=RetrySettings(max_attempts=5, base_delay_s=0.5, max_delay_s=3.0))

    policy = RetryPolicy.from_settings(settings)

    assert policy == RetryPolicy(max_attempts=5, base_delay_s=0.5, max_delay_s=3.0)
    assert policy.schedule() == [0.5, 1.0, 2.0, 3.0]
