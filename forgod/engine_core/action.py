"""
Action System - Actions, payloads, and results.

GameAction is a closed set: every action type below has a factory on
Action. All state changes flow through GameEngine.execute_action().
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .hex import HexCoord
from .state import Stat
from .events import GameEvent


class ActionType(str, Enum):
    """Types of actions a player can take."""
    # Move phase
    ROLL_MOVE_DICE = "ROLL_MOVE_DICE"
    MOVE = "MOVE"
    END_MOVE_PHASE = "END_MOVE_PHASE"

    # Action phase
    BASIC_ATTACK = "BASIC_ATTACK"
    USE_SKILL = "USE_SKILL"
    ROLL_STAT_DICE = "ROLL_STAT_DICE"
    DRAW_DEMON_SWORD = "DRAW_DEMON_SWORD"
    END_TURN = "END_TURN"

    # Either phase
    COMPLETE_REVELATION = "COMPLETE_REVELATION"

    # Allowed off-turn
    APPLY_CORRUPT_DICE = "APPLY_CORRUPT_DICE"
    CHOOSE_HOLY = "CHOOSE_HOLY"


# Actions any living player may take outside their own turn.
NON_TURN_ACTIONS = frozenset({ActionType.APPLY_CORRUPT_DICE, ActionType.CHOOSE_HOLY})


@dataclass(frozen=True)
class ActionPayload:
    """
    Parameters for an action.

    Different action types read different fields; validation happens in
    the engine handlers.
    """
    position: HexCoord | None = None
    target_id: str | None = None
    skill_id: str | None = None
    stat: Stat | None = None
    revelation_id: str | None = None

    # Extra skill parameters (e.g. cooldown_skill_id for charge)
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Action:
    """A complete action to be applied to a game state."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def roll_move_dice(cls) -> Action:
        return cls(ActionType.ROLL_MOVE_DICE)

    @classmethod
    def move(cls, position: HexCoord) -> Action:
        return cls(ActionType.MOVE, ActionPayload(position=position))

    @classmethod
    def end_move_phase(cls) -> Action:
        return cls(ActionType.END_MOVE_PHASE)

    @classmethod
    def basic_attack(cls, target_id: str) -> Action:
        return cls(ActionType.BASIC_ATTACK, ActionPayload(target_id=target_id))

    @classmethod
    def use_skill(
        cls,
        skill_id: str,
        target_id: str | None = None,
        position: HexCoord | None = None,
        **params: Any,
    ) -> Action:
        """Factory for skill use. Extra keyword arguments become skill params."""
        return cls(
            ActionType.USE_SKILL,
            ActionPayload(skill_id=skill_id, target_id=target_id, position=position, params=params),
        )

    @classmethod
    def roll_stat_dice(cls, stat: Stat) -> Action:
        return cls(ActionType.ROLL_STAT_DICE, ActionPayload(stat=stat))

    @classmethod
    def end_turn(cls) -> Action:
        return cls(ActionType.END_TURN)

    @classmethod
    def complete_revelation(cls, revelation_id: str) -> Action:
        return cls(ActionType.COMPLETE_REVELATION, ActionPayload(revelation_id=revelation_id))

    @classmethod
    def apply_corrupt_dice(cls, stat: Stat) -> Action:
        return cls(ActionType.APPLY_CORRUPT_DICE, ActionPayload(stat=stat))

    @classmethod
    def choose_holy(cls) -> Action:
        return cls(ActionType.CHOOSE_HOLY)

    @classmethod
    def draw_demon_sword(cls) -> Action:
        return cls(ActionType.DRAW_DEMON_SWORD)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    A failed result carries the unchanged input state and no events.
    """
    success: bool
    new_state: Any | None = None  # GameState
    message: str = ""
    error_code: str | None = None
    events: list[GameEvent] = field(default_factory=list)

    @classmethod
    def failure(cls, state: Any, message: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, new_state=state, message=message, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        message: str = "",
        events: list[GameEvent] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, message=message, events=events or [])


@dataclass(frozen=True)
class ValidAction:
    """A legal action with a human-readable description."""
    action: Action
    description: str


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def invalid(cls, reason: str) -> ValidationResult:
        return cls(valid=False, reason=reason)
