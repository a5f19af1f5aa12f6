"""
Pytest fixtures for For God tests.
"""

import pytest

from ..engine_core.board import HeroClass
from ..engine_core.dice import ScriptedDiceRoller
from ..engine_core.engine import GameEngine, PlayerSetup
from ..engine_core.hex import HexCoord
from ..engine_core.state import GameState


# A plain tile well away from the heroes' villages.
SWORD_POSITION = HexCoord(4, 0)


@pytest.fixture
def dice() -> ScriptedDiceRoller:
    """Scripted dice; defaults to rolling 1s and picking index 0."""
    return ScriptedDiceRoller()


@pytest.fixture
def engine(dice: ScriptedDiceRoller) -> GameEngine:
    """Engine wired to the scripted dice."""
    return GameEngine(dice=dice)


@pytest.fixture
def roster() -> list[PlayerSetup]:
    """One hero of each class, warrior first."""
    return [
        PlayerSetup("w1", "Warrior", HeroClass.WARRIOR),
        PlayerSetup("r1", "Rogue", HeroClass.ROGUE),
        PlayerSetup("m1", "Mage", HeroClass.MAGE),
    ]


@pytest.fixture
def game(engine: GameEngine, roster: list[PlayerSetup]) -> GameState:
    """
    Three-player game at the start of round 1.

    Warrior at (0,-1), rogue at (0,1), mage at (1,-1). The rogue is on turn.
    """
    return engine.create_game(roster, demon_sword_position=SWORD_POSITION, game_id="test_game")


@pytest.fixture
def modify():
    """Return a helper that replaces fields on one player."""
    def _modify(state: GameState, player_id: str, /, **changes) -> GameState:
        player = state.get_player(player_id)
        return state.with_player(player._copy_with(**changes))
    return _modify


@pytest.fixture
def in_action_phase(modify):
    """Return a helper that puts a player in the action phase with movement spent."""
    from ..engine_core.state import TurnPhase

    def _in_action_phase(state: GameState, player_id: str) -> GameState:
        return modify(state, player_id, turn_phase=TurnPhase.ACTION, remaining_movement=0)
    return _in_action_phase
