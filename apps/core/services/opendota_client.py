# apps/core/services/opendota_client.py
# ==============================================================================
"""
HTTP provider for raw OpenDota JSON. One call per resource; retries, caching
and timeouts on top of it belong to the fetch orchestrator.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

import httpx
import orjson
import structlog

from apps.core.conf import DEFAULT_TIMEOUT_S, ENDPOINTS, USER_AGENTS
from apps.core.exceptions import FetchTimeoutError, NetworkError, ProviderError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from config.settings import ProviderSettings

log = structlog.get_logger(__name__).bind(component="OpenDotaClient")


@dataclass(slots=True, frozen=True)
class ProviderConfig:
    base_url: str = "https://api.opendota.com/api"
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_settings(cls, settings: ProviderSettings) -> Self:
        return cls(settings.base_url.rstrip("/"), settings.timeout_s)


class OpenDotaClient:
    """
    1. Build the endpoint URL for a resource.
    2. HTTP-GET it with a rotated User-Agent.
    3. Map failures onto the pipeline error taxonomy.
    4. Decode the body with orjson.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        session: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or ProviderConfig()
        self._external_session = session
        self._session: httpx.AsyncClient | None = session

    # ------------------------------------------------------- context manager --
    async def __aenter__(self) -> Self:
        if self._session is None:
            self._session = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout_s,
                follow_redirects=True,
                headers={"User-Agent": random.choice(USER_AGENTS)},
            )
        return self

    async def __aexit__(self, *exc) -> None:
        if not self._external_session and self._session:
            await self._session.aclose()
            self._session = None

    # ------------------------------------------------------- public API -------
    async def fetch_match(self, match_id: int) -> Mapping[str, Any]:
        payload = await self._get(ENDPOINTS["match"].format(match_id=match_id))
        return self._expect_object(payload, ENDPOINTS["match"])

    async def fetch_heroes(self) -> list[Mapping[str, Any]]:
        payload = await self._get(ENDPOINTS["heroes"])
        return self._expect_list(payload, ENDPOINTS["heroes"])

    async def fetch_team(self, team_id: int) -> Mapping[str, Any]:
        payload = await self._get(ENDPOINTS["team"].format(team_id=team_id))
        return self._expect_object(payload, ENDPOINTS["team"])

    async def fetch_player_matches(self, account_id: int, **params: Any) -> list[Mapping[str, Any]]:
        path = ENDPOINTS["player_matches"].format(account_id=account_id)
        return self._expect_list(await self._get(path, params=params), path)

    async def fetch_player_heroes(self, account_id: int, **params: Any) -> list[Mapping[str, Any]]:
        path = ENDPOINTS["player_heroes"].format(account_id=account_id)
        return self._expect_list(await self._get(path, params=params), path)

    # ------------------------------------------------------- internals --------
    async def _get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        if self._session is None:
            msg = "session not ready; use 'async with OpenDotaClient()'"
            raise RuntimeError(msg)

        # Rotate UA on every request for extra entropy
        headers = {"User-Agent": random.choice(USER_AGENTS)}
        try:
            resp = await self._session.get(path, params=params or None, headers=headers)
        except httpx.TimeoutException as exc:
            log.warning("provider request timed out", path=path, err=str(exc))
            raise FetchTimeoutError(self._config.timeout_s) from exc
        except httpx.TransportError as exc:
            log.warning("provider transport error", path=path, err=str(exc))
            raise NetworkError(f"transport error for {path}: {exc}") from exc

        if resp.status_code >= 400:
            raise ProviderError(resp.status_code, str(resp.request.url))

        try:
            return orjson.loads(resp.content)
        except orjson.JSONDecodeError as exc:
            raise ProviderError(resp.status_code, f"{resp.request.url} (invalid JSON body)") from exc

    @staticmethod
    def _expect_object(payload: Any, path: str) -> Mapping[str, Any]:
        if not isinstance(payload, dict):
            msg = f"expected a JSON object from {path}, got {type(payload).__name__}"
            raise ValidationError("payload", msg)
        return payload

    @staticmethod
    def _expect_list(payload: Any, path: str) -> list[Mapping[str, Any]]:
        if not isinstance(payload, list):
            msg = f"expected a JSON array from {path}, got {type(payload).__name__}"
            raise ValidationError("payload", msg)
        return [row for row in payload if isinstance(row, dict)]
