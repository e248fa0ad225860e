# apps/heroes/__init__.py
# ================================================================================
"""The 'heroes' app: the hero catalogue and per-team hero statistics."""
