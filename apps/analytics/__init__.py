# apps/analytics/__init__.py
# ================================================================================
"""Pure statistical reducers shared by the heroes, teams and drafts apps."""
