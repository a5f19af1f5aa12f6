"""
Bot Policy - Interface for bot decision-making.

A BotPolicy is handed the legal actions for one hero and returns a
BotDecision naming one of them.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.action import Action, ValidAction


@dataclass
class BotDecision:
    """
    One chosen action for one hero.

    Confidence is 1 / the number of options the final pick was drawn from.
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    # How many options were weighed, plus anything a policy wants to report
    evaluated_actions: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Picks one of the legal actions the engine offers a hero.

    Policies choose from the offered list and never construct actions.
    """

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        player_id: str,
        legal_actions: list[ValidAction],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            player_id: Hero the bot plays
            legal_actions: Legal actions for that hero

        Returns:
            BotDecision with the selected action
        """
        pass

    def get_name(self) -> str:
        """Name used in logs."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Uniform pick over every legal action, including renouncing corruption.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(
        self,
        state: GameState,
        player_id: str,
        legal_actions: list[ValidAction],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        choice = self.rng.choice(legal_actions)
        return BotDecision(
            action=choice.action,
            explanation=choice.description,
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """
    Takes the first legal action. Deterministic, for tests.
    """

    def select_action(
        self,
        state: GameState,
        player_id: str,
        legal_actions: list[ValidAction],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0].action,
            explanation=legal_actions[0].description,
            evaluated_actions=1,
        )
