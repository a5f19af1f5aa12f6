"""
Bots module - Automated hero players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy, FirstLegalPolicy: Baselines
- RandomBot: Seeded bot with a light action priority
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .random_bot import RandomBot

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "RandomBot",
]
