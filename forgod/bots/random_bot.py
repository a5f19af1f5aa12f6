"""
Random Bot - Seeded bot that plays legal actions with a light priority.

The bot:
- Always assigns a pending corrupt die and completes revelations it can
- Rolls, then wanders until it decides to stop moving
- Prefers the demon sword, then attacks and skills, then stat upgrades
- Ends the turn only when nothing else is left

It never renounces corruption, so a corrupt hero stays corrupt.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import random

from .policy import BotPolicy, BotDecision
from ..engine_core.action import ActionType

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.action import ValidAction


# Tiers are tried in order; the first non-empty tier wins.
PRIORITY_TIERS: tuple[frozenset[ActionType], ...] = (
    frozenset({ActionType.APPLY_CORRUPT_DICE}),
    frozenset({ActionType.COMPLETE_REVELATION}),
    frozenset({ActionType.ROLL_MOVE_DICE}),
    frozenset({ActionType.DRAW_DEMON_SWORD}),
    frozenset({ActionType.BASIC_ATTACK, ActionType.USE_SKILL}),
    frozenset({ActionType.ROLL_STAT_DICE}),
    frozenset({ActionType.END_TURN}),
)


@dataclass
class RandomBot(BotPolicy):
    """
    Seeded random bot.

    Usage:
        bot = RandomBot(seed=7)
        decision = bot.select_action(state, "p1", engine.get_valid_actions(state, "p1"))
    """
    seed: int | None = None
    move_bias: float = 0.75
    rng: random.Random = None  # type: ignore

    def __post_init__(self):
        if self.rng is None:
            self.rng = random.Random(self.seed)

    def select_action(
        self,
        state: GameState,
        player_id: str,
        legal_actions: list[ValidAction],
    ) -> BotDecision:
        candidates = [va for va in legal_actions if va.action.action_type != ActionType.CHOOSE_HOLY]
        if not candidates:
            raise ValueError("No legal actions available")

        moves = [va for va in candidates if va.action.action_type == ActionType.MOVE]
        end_move = [va for va in candidates if va.action.action_type == ActionType.END_MOVE_PHASE]

        for tier in PRIORITY_TIERS[:3]:
            picked = self._pick(candidates, tier)
            if picked is not None:
                return picked

        if moves and self.rng.random() < self.move_bias:
            return self._decide(moves, "wander")
        if end_move:
            return self._decide(end_move, "stop moving")

        for tier in PRIORITY_TIERS[3:]:
            picked = self._pick(candidates, tier)
            if picked is not None:
                return picked

        return self._decide(candidates, "fallback")

    def _pick(self, candidates: list[ValidAction], tier: frozenset[ActionType]) -> BotDecision | None:
        options = [va for va in candidates if va.action.action_type in tier]
        if not options:
            return None
        return self._decide(options, "priority")

    def _decide(self, options: list[ValidAction], reason: str) -> BotDecision:
        choice = self.rng.choice(options)
        return BotDecision(
            action=choice.action,
            explanation=f"{choice.description} ({reason})",
            confidence=1.0 / len(options),
            evaluated_actions=len(options),
        )
