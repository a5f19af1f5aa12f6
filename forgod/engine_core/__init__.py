"""
Engine Core - Deterministic For God rules engine.

The engine is the runtime that:
1. Creates a GameState from a roster
2. Applies actions via GameEngine.execute_action()
3. Generates legal actions
4. Resolves combat, skills, monsters, revelations and victory
"""

from .hex import HexCoord
from .board import Board, HexTile, TileType, HeroClass, MoveCost
from .state import (
    GameState,
    PlayerState,
    MonsterState,
    GamePhase,
    HeroState,
    TurnPhase,
    Stat,
    Stats,
    Revelation,
    RevelationSource,
    MONSTER_TURN,
)
from .events import GameEvent, EventType
from .action import Action, ActionType, ActionPayload, ActionResult, ValidAction, ValidationResult
from .dice import DiceRoller, RandomDiceRoller, ScriptedDiceRoller
from .victory import VictoryResult, VictoryType, evaluate_victory
from .engine import GameEngine, PlayerSetup, create_game, execute_action
from .action_generator import ActionGenerator, legal_actions

__all__ = [
    "HexCoord",
    "Board",
    "HexTile",
    "TileType",
    "HeroClass",
    "MoveCost",
    "GameState",
    "PlayerState",
    "MonsterState",
    "GamePhase",
    "HeroState",
    "TurnPhase",
    "Stat",
    "Stats",
    "Revelation",
    "RevelationSource",
    "MONSTER_TURN",
    "GameEvent",
    "EventType",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ValidAction",
    "ValidationResult",
    "DiceRoller",
    "RandomDiceRoller",
    "ScriptedDiceRoller",
    "VictoryResult",
    "VictoryType",
    "evaluate_victory",
    "GameEngine",
    "PlayerSetup",
    "create_game",
    "execute_action",
    "ActionGenerator",
    "legal_actions",
]
