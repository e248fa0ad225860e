# apps/matches/__init__.py
# ================================================================================
"""
The 'matches' app fetches raw match payloads, normalizes them into immutable
``Match`` records, binds them to the tracked team and filters them.
"""
