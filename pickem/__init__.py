"""
Pick'em scoring engine - picks against the spread, weekly/season/best-finish leaderboards
"""

__version__ = "1.0.0"
