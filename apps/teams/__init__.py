# apps/teams/__init__.py
# ================================================================================
"""
The 'teams' app normalizes OpenDota and Dotabuff team payloads and summarizes
a team's performance over its match history.
"""
