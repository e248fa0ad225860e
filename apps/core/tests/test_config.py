# apps/core/tests/test_config.py
import pydantic
import pytest

from apps.core.services.opendota_client import ProviderConfig
from apps.core.services.retry import RetryPolicy
from apps.matches.conf import MatchFetcherConfig
from apps.matches.services.match_fetcher import MatchFetcher
from config.log import build_logging_config
from config.settings import ProviderSettings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = ProviderSettings()

    assert settings.base_url == "https://api.opendota.com/api"
    assert settings.timeout_s == 30.0
    assert settings.retry.max_attempts == 3
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DOTA_BASE_URL", "http://localhost:8080/api/")
    monkeypatch.setenv("DOTA_TIMEOUT_S", "5")
    monkeypatch.setenv("DOTA_RETRY__MAX_ATTEMPTS", "5")

    settings = get_settings()

    assert settings is get_settings()
    assert settings.timeout_s == 5.0
    assert RetryPolicy.from_settings(settings).max_attempts == 5
    assert ProviderConfig.from_settings(settings).base_url == "http://localhost:8080/api"


def test_fetcher_wiring_from_settings(monkeypatch):
    monkeypatch.setenv("DOTA_TIMEOUT_S", "12.5")

    fetcher = MatchFetcher.from_settings(object(), get_settings())

    assert fetcher.cfg.timeout_s == 12.5
    assert fetcher.retry.max_attempts == 3
    assert len(fetcher.cache) == 0


def test_logging_config_switches_renderer():
    plain = build_logging_config("DEBUG")
    json = build_logging_config("INFO", json=True)

    assert plain["handlers"]["console"]["formatter"] == "plain"
    assert json["handlers"]["console"]["formatter"] == "json"
    assert json["loggers"]["apps"]["level"] == "INFO"
    assert json["loggers"]["httpx"]["level"] == "WARNING"


def test_unknown_environment_keys_are_ignored(monkeypatch):
    monkeypatch.setenv("DOTA_DOTABUFF_URL", "https://www.dotabuff.com")

    settings = get_settings()

    assert set(settings.model_dump()) == {"base_url", "timeout_s", "retry", "log_level", "log_json"}


@pytest.mark.parametrize("timeout_s", [0, -1.5])
def test_fetcher_config_rejects_non_positive_timeout(timeout_s):
    with pytest.raises(pydantic.ValidationError):
        MatchFetcherConfig(timeout_s=timeout_s)


def test_fetcher_config_is_frozen():
    cfg = MatchFetcherConfig(timeout_s=1.0)

    with pytest.raises(pydantic.ValidationError):
        cfg.timeout_s = 2.0
