"""
For God - Hex-grid tactical board game rules engine.

A deterministic, turn-based engine for the multiplayer board game. It provides:
- Immutable game state snapshots
- Action dispatch with soft failures
- Legal action generation
- Combat, skills, monster AI, revelations and victory rules
- Bot players for simulation
"""

__version__ = "0.1.0"
