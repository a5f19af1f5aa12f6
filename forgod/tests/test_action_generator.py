"""
Tests for legal action enumeration.
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import legal_actions
from ..engine_core.hex import HexCoord
from ..engine_core.state import GamePhase, HeroState, Stats
from ..engine_core.definitions.revelations import REVELATIONS_BY_ID


def types_of(valid_actions):
    return [va.action.action_type for va in valid_actions]


class TestMovePhase:
    """Tests for move phase actions."""

    def test_roll_first(self, engine, game):
        """Before rolling, rolling is the only turn action."""
        actions = engine.get_valid_actions(game)
        assert types_of(actions) == [ActionType.ROLL_MOVE_DICE]

    def test_moves_after_roll(self, engine, game):
        """Every affordable neighbor plus ending the move phase."""
        state = engine.execute_action(game, Action.roll_move_dice()).new_state
        actions = engine.get_valid_actions(state)

        moves = [va.action.payload.position for va in actions if va.action.action_type == ActionType.MOVE]
        # All six neighbors of the rogue village cost 3; 4 movement was rolled
        assert len(moves) == 6
        assert HexCoord(0, 0) in moves
        assert types_of(actions)[-1] == ActionType.END_MOVE_PHASE

    def test_temple_hidden_from_corrupt(self, engine, game, modify):
        state = modify(game, "r1", state=HeroState.CORRUPT, corrupt_dice=1, corrupt_dice_target=None)
        state = engine.execute_action(state, Action.roll_move_dice()).new_state
        moves = [va.action.payload.position for va in engine.get_valid_actions(state)
                 if va.action.action_type == ActionType.MOVE]
        assert HexCoord(0, 0) not in moves

    def test_no_movement_left(self, engine, game, modify):
        """With nothing left only ending the move phase remains."""
        state = modify(game, "r1", remaining_movement=0)
        assert types_of(engine.get_valid_actions(state)) == [ActionType.END_MOVE_PHASE]


class TestActionPhase:
    """Tests for action phase actions."""

    def test_attacks_and_end_turn(self, engine, game, modify, in_action_phase):
        state = in_action_phase(modify(game, "w1", position=HexCoord(1, 1)), "r1")
        actions = engine.get_valid_actions(state)

        attacks = [va.action.payload.target_id for va in actions if va.action.action_type == ActionType.BASIC_ATTACK]
        assert attacks == ["w1"]
        assert ActionType.USE_SKILL in types_of(actions)
        assert types_of(actions)[-1] == ActionType.END_TURN

    def test_hidden_heroes_not_offered(self, engine, game, modify, in_action_phase):
        state = modify(game, "w1", position=HexCoord(1, 1), is_stealthed=True)
        actions = engine.get_valid_actions(in_action_phase(state, "r1"))
        assert ActionType.BASIC_ATTACK not in types_of(actions)

    def test_stat_upgrades_with_essence(self, engine, game, modify, in_action_phase):
        state = in_action_phase(modify(game, "r1", monster_essence=2), "r1")
        actions = engine.get_valid_actions(state)
        assert types_of(actions).count(ActionType.ROLL_STAT_DICE) == 3

    def test_meteor_offered_on_occupied_tiles(self, engine, game, modify, in_action_phase):
        """Meteor is only listed where something other than the caster stands."""
        state = in_action_phase(modify(game, "m1", stats=Stats(intelligence=(3, 3))), "m1")
        state = state._copy_with(current_turn_index=state.round_turn_order.index("m1"))
        targets = [
            va.action.payload.position for va in engine.get_valid_actions(state)
            if va.action.action_type == ActionType.USE_SKILL and va.action.payload.skill_id == "mage-meteor"
        ]

        assert HexCoord(0, -1) in targets
        assert HexCoord(6, 3) in targets
        assert HexCoord(1, -1) not in targets
        assert HexCoord(2, -1) not in targets

    def test_every_generated_action_succeeds(self, engine, game, modify, in_action_phase):
        """The generator never offers an action the engine rejects."""
        state = modify(game, "w1", position=HexCoord(1, 1))
        state = in_action_phase(modify(state, "r1", monster_essence=2), "r1")
        for valid in engine.get_valid_actions(state):
            result = engine.execute_action(state, valid.action)
            assert result.success, f"{valid.description}: {result.message}"

    def test_revelation_offered(self, engine, game, modify):
        state = modify(game, "r1", revelations=(REVELATIONS_BY_ID["demon-5"],))
        actions = engine.get_valid_actions(state)
        assert ActionType.COMPLETE_REVELATION in types_of(actions)


class TestOffTurn:
    """Tests for players who are not on turn."""

    def test_holy_hero_has_nothing(self, engine, game):
        assert engine.get_valid_actions(game, "w1") == []

    def test_corrupt_hero_off_turn(self, game, modify):
        """Apply the die to any stat, or renounce."""
        state = modify(game, "m1", state=HeroState.CORRUPT, corrupt_dice=2)
        actions = legal_actions(state, "m1")
        assert types_of(actions) == [ActionType.APPLY_CORRUPT_DICE] * 3 + [ActionType.CHOOSE_HOLY]

    def test_game_over(self, engine, game):
        state = game._copy_with(phase=GamePhase.GAME_OVER)
        assert engine.get_valid_actions(state) == []

    def test_unknown_player(self, engine, game):
        assert engine.get_valid_actions(game, "nobody") == []
