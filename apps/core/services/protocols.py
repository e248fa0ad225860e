# apps/core/services/protocols.py
"""
Defines the structural contracts (Protocols) for services in the core app.

The fetch orchestrator only depends on these shapes, so the HTTP client can be
replaced by any object that hands back raw provider JSON.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class MatchProvider(Protocol):
    """
    Source of raw match payloads.

    Implementations raise ``ProviderError`` for HTTP status >= 400 and
    ``NetworkError`` for transport failures; the caller owns timeouts.
    """

    async def fetch_match(self, match_id: int) -> Mapping[str, Any]:
        """Return the provider's raw JSON object for one match."""
        ...


@runtime_checkable
class CatalogProvider(Protocol):
    """Source of raw hero, team and per-player rows."""

    async def fetch_heroes(self) -> list[Mapping[str, Any]]: ...

    async def fetch_team(self, team_id: int) -> Mapping[str, Any]: ...

    async def fetch_player_matches(self, account_id: int, **params: Any) -> list[Mapping[str, Any]]: ...

    async def fetch_player_heroes(self, account_id: int, **params: Any) -> list[Mapping[str, Any]]: ...
