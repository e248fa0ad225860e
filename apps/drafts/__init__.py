# apps/drafts/__init__.py
# ================================================================================
"""The 'drafts' app ranks a team's heroes into per-phase pick recommendations."""
