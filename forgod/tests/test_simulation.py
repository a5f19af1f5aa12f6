"""
Tests for bot-driven simulation and the CLI.
"""

import json

import pytest

from ..cli import main
from ..config import EngineConfig
from ..engine_core.board import HeroClass
from ..engine_core.dice import RandomDiceRoller
from ..engine_core.engine import GameEngine, PlayerSetup
from ..engine_core.state import MONSTER_TURN
from ..simulation import Simulation, simulate_game


@pytest.fixture
def sim_roster():
    return [
        PlayerSetup("p1", "Warrior", HeroClass.WARRIOR),
        PlayerSetup("p2", "Rogue", HeroClass.ROGUE),
        PlayerSetup("p3", "Mage", HeroClass.MAGE),
    ]


class TestSimulation:
    """Smoke tests over random games."""

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_runs_to_end_or_cap(self, sim_roster, seed):
        """Games stop at a winner or the step cap, never in a broken state."""
        sim = Simulation(engine=GameEngine(dice=RandomDiceRoller(seed)), max_steps=400, seed=seed)
        result = sim.run(sim_roster)

        assert result.finished or result.steps == 400
        assert result.steps <= 400
        state = result.final_state
        assert state.round_turn_order[-1] == MONSTER_TURN
        for player in state.players:
            assert 0 <= player.health <= player.max_health
            assert player.is_dead == (player.health == 0)
        if result.finished:
            assert state.get_player(result.winner_id) is not None

    def test_seeded_runs_repeat(self, sim_roster):
        config = EngineConfig(seed=11, max_steps=150)
        first = Simulation.from_config(config).run(sim_roster)
        second = Simulation.from_config(config).run(sim_roster)

        assert first.steps == second.steps
        assert first.rounds == second.rounds
        assert [p.position for p in first.final_state.players] == [p.position for p in second.final_state.players]
        assert [p.health for p in first.final_state.players] == [p.health for p in second.final_state.players]

    def test_events_collected(self, sim_roster):
        result = simulate_game(sim_roster, EngineConfig(seed=5, max_steps=60))
        assert result.steps > 0
        assert result.events

    def test_single_player(self):
        result = simulate_game([PlayerSetup("solo", "Solo", HeroClass.MAGE)], EngineConfig(seed=9, max_steps=80))
        assert result.final_state.get_player("solo") is not None


class TestCli:
    """Tests for the command line."""

    def test_board_to_file(self, tmp_path, capsys):
        output = tmp_path / "board.json"
        main(["board", "-o", str(output)])

        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["tiles"]) == 265
        assert "265 tiles" in capsys.readouterr().out

    def test_board_to_stdout(self, capsys):
        main(["board"])
        data = json.loads(capsys.readouterr().out)
        assert data["tiles"][0]["coord"] == {"q": -9, "r": 0}

    def test_simulate(self, capsys):
        main(["simulate", "--seed", "3", "--max-steps", "40"])
        out = capsys.readouterr().out
        assert "Steps: 40" in out or "Winner:" in out
        assert "Heroes:" in out

    def test_simulate_bad_class(self, capsys):
        with pytest.raises(SystemExit):
            main(["simulate", "--players", "paladin"])
        assert "hero classes" in capsys.readouterr().out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
