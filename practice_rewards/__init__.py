"""Rewards engine for the math practice app: XP, streaks, levels and achievements"""

__version__ = "1.0.0"
