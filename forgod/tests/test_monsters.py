"""
Tests for the monster phase.
"""

from ..engine_core.dice import ScriptedDiceRoller
from ..engine_core.events import EventType
from ..engine_core.hex import HexCoord
from ..engine_core.monsters import adjacent_heroes, monster_dice_sum, run_monster_phase
from ..engine_core.state import HeroState


def roll(*values):
    """Scripted roller for one monster phase."""
    return ScriptedDiceRoller(rolls=values)


class TestMonsterDice:
    """Tests for the shared dice roll."""

    def test_dice_sorted(self, game):
        """The six monster dice are stored ascending."""
        state, events = run_monster_phase(game, roll(6, 1, 5, 2, 4, 3))
        assert state.monster_dice == (1, 2, 3, 4, 5, 6)
        assert events[0].event_type == EventType.MONSTER_DICE_ROLLED

    def test_dice_sum_uses_indices(self, game):
        """Each monster sums its own dice indices."""
        state = game._copy_with(monster_dice=(1, 2, 3, 4, 5, 6))
        assert monster_dice_sum(state.monster_dice, state.get_monster("troll")) == 7
        assert monster_dice_sum(state.monster_dice, state.get_monster("harpy")) == 6
        assert monster_dice_sum(state.monster_dice, state.get_monster("balrog")) == 21


class TestDefaultAttack:
    """Tests for the default monster attack."""

    def test_hits_adjacent_hero(self, game, modify):
        """The balrog hits an adjacent hero for its dice sum."""
        state = modify(game, "r1", position=HexCoord(0, 7))
        state, events = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))

        assert state.get_player("r1").health == 14
        attacks = [e for e in events if e.event_type == EventType.PLAYER_ATTACKED]
        assert len(attacks) == 1
        assert attacks[0].attacker_id == "balrog"
        assert attacks[0].amount == 6

    def test_target_by_dice_sum(self, game, modify):
        """Target index is dice_sum mod the number of adjacent heroes."""
        state = modify(game, "w1", position=HexCoord(1, 7))
        state = modify(state, "r1", position=HexCoord(0, 7))
        assert [p.player_id for p in adjacent_heroes(state, state.get_monster("balrog"))] == ["w1", "r1"]

        even, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))
        assert even.get_player("w1").health == 24
        assert even.get_player("r1").health == 20

        odd, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 2))
        assert odd.get_player("w1").health == 30
        assert odd.get_player("r1").health == 13

    def test_stealthed_hero_untouched(self, game, modify):
        """A hidden target is not attacked."""
        state = modify(game, "r1", position=HexCoord(0, 7), is_stealthed=True)
        state, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))
        assert state.get_player("r1").health == 20

    def test_demon_sword_holder_untouched(self, game, modify):
        """Monsters leave the demon sword holder alone."""
        state = modify(game, "r1", position=HexCoord(0, 7), has_demon_sword=True)
        state, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))
        assert state.get_player("r1").health == 20

    def test_iron_stance(self, game, modify):
        """Iron stance reduces monster damage too."""
        state = modify(game, "w1", position=HexCoord(1, 7), iron_stance_active=True)
        state, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))
        assert state.get_player("w1").health == 26

    def test_dead_monster_does_nothing(self, game, modify):
        """Dead monsters skip the phase."""
        harpy = game.get_monster("harpy")
        state = game.with_monster(harpy._copy_with(health=0, is_dead=True))
        state = modify(state, "r1", position=HexCoord(7, -2))
        state, _ = run_monster_phase(state, roll(3, 3, 3, 3, 3, 3))
        assert state.get_player("r1").health == 20


class TestMonsterVariants:
    """Tests for each monster's twist."""

    def test_troll_spares_corrupt_on_even(self, game, modify):
        """Corrupt heroes are only hit on an odd sum."""
        state = modify(game, "r1", position=HexCoord(-5, 8), state=HeroState.CORRUPT, corrupt_dice=1)

        even, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))
        assert even.get_player("r1").health == 20

        odd, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 2))
        assert odd.get_player("r1").health == 17

    def test_troll_hits_holy_on_even(self, game, modify):
        state = modify(game, "r1", position=HexCoord(-5, 8))
        state, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))
        assert state.get_player("r1").health == 18

    def test_hydra_needs_fifteen(self, game, modify):
        """Below 15 the hydra does nothing."""
        state = modify(game, "w1", position=HexCoord(-6, -2))
        state, _ = run_monster_phase(state, roll(3, 3, 3, 3, 3, 3))
        assert state.get_player("w1").health == 30

    def test_hydra_heals_double(self, game, modify):
        """The hydra heals twice its damage, up to max health."""
        hydra = game.get_monster("hydra")
        state = game.with_monster(hydra._copy_with(health=10))
        state = modify(state, "w1", position=HexCoord(-6, -2))
        state, _ = run_monster_phase(state, roll(6, 6, 6, 6, 6, 6))

        assert state.get_player("w1").health == 6
        assert state.get_monster("hydra").health == 40

    def test_harpy_pushes(self, game, modify):
        """On 7 or more the harpy pushes its target away."""
        state = modify(game, "r1", position=HexCoord(7, -2))
        state, events = run_monster_phase(state, roll(3, 3, 3, 3, 3, 3))

        rogue = state.get_player("r1")
        assert rogue.health == 11
        assert rogue.position == HexCoord(7, -1)
        assert EventType.PLAYER_MOVED in [e.event_type for e in events]

    def test_harpy_no_push_on_low_roll(self, game, modify):
        state = modify(game, "r1", position=HexCoord(7, -2))
        state, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))
        assert state.get_player("r1").position == HexCoord(7, -2)
        assert state.get_player("r1").health == 17

    def test_grindylow_binds(self, game, modify):
        """On 7 or more the grindylow binds its target."""
        state = modify(game, "r1", position=HexCoord(-6, 3))
        state, _ = run_monster_phase(state, roll(4, 4, 4, 4, 4, 4))
        rogue = state.get_player("r1")
        assert rogue.health == 12
        assert rogue.is_bound

    def test_round_buffs(self, game):
        """Golem on exactly 12 and lich on 15+ set their round buffs."""
        state, _ = run_monster_phase(game, roll(6, 6, 6, 6, 6, 6))
        assert state.monster_round_buffs.golem_basic_attack_immune
        assert state.monster_round_buffs.meteor_immune

        state, _ = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))
        assert not state.monster_round_buffs.golem_basic_attack_immune
        assert not state.monster_round_buffs.meteor_immune

    def test_balrog_respawns(self, game):
        """A dead balrog returns at full health and relights the fire."""
        balrog = game.get_monster("balrog")
        state = game.with_monster(balrog._copy_with(health=0, is_dead=True)).with_buffs(fire_tile_disabled=True)
        state, events = run_monster_phase(state, roll(1, 1, 1, 1, 1, 1))

        assert state.get_monster("balrog").health == 60
        assert not state.get_monster("balrog").is_dead
        assert not state.monster_round_buffs.fire_tile_disabled
        assert events[-1].event_type == EventType.MONSTER_RESPAWNED

    def test_revived_balrog_waits_a_phase(self, game, modify):
        """A balrog that comes back does not attack in the phase it returns."""
        balrog = game.get_monster("balrog")
        state = game.with_monster(balrog._copy_with(health=0, is_dead=True)).with_buffs(fire_tile_disabled=True)
        state = modify(state, "r1", position=HexCoord(0, 7))
        state, events = run_monster_phase(state, roll(3, 3, 3, 3, 3, 3))

        assert state.get_player("r1").health == 20
        assert not [e for e in events if e.event_type == EventType.PLAYER_ATTACKED]
        assert not state.get_monster("balrog").is_dead

        state, _ = run_monster_phase(state, roll(3, 3, 3, 3, 3, 3))
        assert state.get_player("r1").health == 2
