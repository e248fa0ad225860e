# apps/core/services/__init__.py
# ================================================================================
"""
Core services: the async fan-out fetcher, retry policy and provider client.

Example:
    from apps.core.services import OpenDotaClient, RetryPolicy
"""

from .base_fetcher import BaseFetcher
from .opendota_client import OpenDotaClient, ProviderConfig
from .retry import RetryPolicy

__all__ = [
    "BaseFetcher",
    "OpenDotaClient",
    "ProviderConfig",
    "RetryPolicy",
]
