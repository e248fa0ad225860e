from .base import ProviderSettings, RetrySettings, get_settings

__all__ = ["ProviderSettings", "RetrySettings", "get_settings"]
