"""
Simulation - Bot-driven game loop.

The loop:
1. Creates a game from a roster
2. Lets any hero holding an unassigned corrupt die assign it
3. Asks the bot on turn for an action and applies it
4. Repeats until the game is over or the step cap is hit

Used by the CLI and by tests as a smoke check over many random games.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable
import logging

from .bots import BotPolicy, RandomBot
from .config import EngineConfig
from .engine_core.engine import GameEngine, PlayerSetup
from .engine_core.events import GameEvent
from .engine_core.state import GameState, MONSTER_TURN


logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of a simulated game."""
    final_state: GameState
    steps: int
    events: list[GameEvent] = field(default_factory=list)
    rejected_actions: int = 0

    @property
    def finished(self) -> bool:
        return self.final_state.is_game_over

    @property
    def winner_id(self) -> str | None:
        return self.final_state.winner_id

    @property
    def victory_type(self) -> str | None:
        return self.final_state.victory_type

    @property
    def rounds(self) -> int:
        return self.final_state.round_number


@dataclass
class Simulation:
    """
    Runs one game between bots.

    Usage:
        sim = Simulation(engine=GameEngine(), max_steps=500)
        result = sim.run(roster)
        print(result.winner_id, result.victory_type)
    """
    engine: GameEngine = field(default_factory=GameEngine)
    bots: dict[str, BotPolicy] = field(default_factory=dict)
    max_steps: int = 2000
    seed: int | None = None

    @classmethod
    def from_config(cls, config: EngineConfig) -> Simulation:
        return cls(engine=GameEngine(config=config), max_steps=config.max_steps, seed=config.seed)

    def run(self, roster: Iterable[PlayerSetup]) -> SimulationResult:
        state = self.engine.create_game(roster)
        self._ensure_bots(state)

        steps = 0
        rejected = 0
        events: list[GameEvent] = []

        while not state.is_game_over and steps < self.max_steps:
            actor = self._next_actor(state)
            if actor is None:
                logger.warning("No hero can act in round %d; stopping", state.round_number)
                break

            legal = self.engine.get_valid_actions(state, actor)
            if not legal:
                logger.warning("No legal actions for %s; stopping", actor)
                break

            decision = self.bots[actor].select_action(state, actor, legal)
            result = self.engine.execute_action(state, decision.action, acting_player_id=actor)
            steps += 1
            if not result.success:
                rejected += 1
                logger.warning("Bot %s chose a rejected action: %s", actor, result.message)
                continue

            state = result.new_state
            events.extend(result.events)

        if state.is_game_over:
            logger.info(
                "Game %s won by %s (%s) after %d steps",
                state.game_id, state.winner_id, state.victory_type, steps,
            )
        else:
            logger.info("Game %s stopped after %d steps without a winner", state.game_id, steps)

        return SimulationResult(final_state=state, steps=steps, events=events, rejected_actions=rejected)

    def _ensure_bots(self, state: GameState) -> None:
        for index, player in enumerate(state.players):
            if player.player_id not in self.bots:
                seed = None if self.seed is None else self.seed + index
                self.bots[player.player_id] = RandomBot(seed=seed)

    @staticmethod
    def _next_actor(state: GameState) -> str | None:
        # Off-turn corrupt dice are assigned before the hero on turn acts.
        for player in state.players:
            if player.corrupt_dice is not None and player.corrupt_dice_target is None:
                return player.player_id
        entry = state.current_turn_entry
        if entry is None or entry == MONSTER_TURN:
            return None
        return entry


def simulate_game(
    roster: Iterable[PlayerSetup],
    config: EngineConfig | None = None,
) -> SimulationResult:
    """Convenience function to run one RandomBot game."""
    return Simulation.from_config(config or EngineConfig()).run(roster)
