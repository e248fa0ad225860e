# apps/core/__init__.py
# ================================================================================
"""
Shared plumbing for every app: the error taxonomy, fetcher base class,
retry policy, provider protocols and the OpenDota HTTP client.
"""
