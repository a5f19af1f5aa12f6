"""
Tests for the skill system.

Default heroes: warrior w1 at (0,-1), rogue r1 at (0,1), mage m1 at (1,-1).
Every stat starts at 2, so the per-turn skill budget is 2.
"""

import pytest

from ..engine_core.dice import ScriptedDiceRoller
from ..engine_core.events import EventType
from ..engine_core.hex import HexCoord
from ..engine_core.skills import can_use_skill, use_skill
from ..engine_core.state import CloneInfo, Stats
from ..engine_core.definitions.skills import SKILLS, SKILLS_BY_ID, skills_for_class
from ..engine_core.board import HeroClass


@pytest.fixture
def roller():
    return ScriptedDiceRoller()


class TestSkillTable:
    """Tests for the static skill data."""

    def test_five_per_class(self):
        """Each class has five skills."""
        assert len(SKILLS) == 15
        for hero_class in HeroClass:
            assert len(skills_for_class(hero_class)) == 5

    def test_costs_and_cooldowns(self):
        """Spot check cost/cooldown pairs."""
        assert (SKILLS_BY_ID["warrior-charge"].cost, SKILLS_BY_ID["warrior-charge"].cooldown) == (1, 1)
        assert (SKILLS_BY_ID["rogue-shuriken"].cost, SKILLS_BY_ID["rogue-shuriken"].cooldown) == (3, 3)
        assert (SKILLS_BY_ID["mage-meteor"].cost, SKILLS_BY_ID["mage-meteor"].cooldown) == (4, 3)


class TestCanUseSkill:
    """Tests for skill validation order."""

    def test_unknown_skill(self, game):
        ok, reason = can_use_skill(game, "w1", "warrior-fireball")
        assert not ok
        assert "Unknown skill" in reason

    def test_wrong_class(self, game):
        """Heroes only use their own class's skills."""
        ok, reason = can_use_skill(game, "r1", "warrior-charge")
        assert not ok
        assert "not a rogue skill" in reason

    def test_cooldown(self, game, modify):
        """Skills on cooldown are refused."""
        state = modify(game, "w1", skill_cooldowns={"warrior-power-strike": 2})
        ok, reason = can_use_skill(state, "w1", "warrior-power-strike")
        assert not ok
        assert "cooldown" in reason

    def test_budget(self, game):
        """Cost above the remaining intelligence budget is refused."""
        ok, reason = can_use_skill(game, "w1", "warrior-sword-wave")
        assert not ok
        assert "intelligence" in reason

    def test_budget_accumulates(self, game, modify):
        """Costs already spent this turn count against the budget."""
        state = modify(game, "w1", used_skill_cost=1)
        assert can_use_skill(state, "w1", "warrior-charge")[0]
        assert not can_use_skill(state, "w1", "warrior-power-strike")[0]


class TestWarriorSkills:
    """Tests for warrior skills."""

    def test_power_strike(self, game, modify, roller):
        """Double strength to an adjacent target, then cost and cooldown."""
        state = modify(game, "r1", position=HexCoord(1, -2))
        result = use_skill(state, "w1", "warrior-power-strike", roller, target_id="r1")

        assert result.success
        assert result.state.get_player("r1").health == 16
        warrior = result.state.get_player("w1")
        assert warrior.cooldown("warrior-power-strike") == 3
        assert warrior.used_skill_cost == 2

    def test_power_strike_needs_adjacent(self, game, roller):
        """Targets out of reach are refused and nothing is paid."""
        result = use_skill(game, "w1", "warrior-power-strike", roller, target_id="r1")
        assert not result.success
        assert result.state is game

    def test_stealthed_target_refused(self, game, modify, roller):
        """Hidden heroes cannot be targeted."""
        state = modify(game, "r1", position=HexCoord(1, -2), is_stealthed=True)
        result = use_skill(state, "w1", "warrior-power-strike", roller, target_id="r1")
        assert not result.success
        assert "hidden" in result.message

    def test_charge(self, game, modify, roller):
        """Charge lands on the free tile nearest the caster and cuts a cooldown."""
        state = modify(game, "r1", position=HexCoord(2, -2))
        state = modify(state, "w1", skill_cooldowns={"warrior-power-strike": 2})
        result = use_skill(state, "w1", "warrior-charge", roller, target_id="r1")

        assert result.success
        warrior = result.state.get_player("w1")
        assert warrior.position == HexCoord(1, -2)
        assert warrior.cooldown("warrior-power-strike") == 1
        assert warrior.cooldown("warrior-charge") == 1
        assert result.events[0].event_type == EventType.PLAYER_MOVED

    def test_charge_needs_distance_two(self, game, modify, roller):
        state = modify(game, "r1", position=HexCoord(1, -2))
        result = use_skill(state, "w1", "warrior-charge", roller, target_id="r1")
        assert not result.success

    def test_throw(self, game, modify, roller):
        """Throw moves an adjacent hero up to two tiles."""
        state = modify(game, "r1", position=HexCoord(1, -2))
        result = use_skill(
            state, "w1", "warrior-throw", roller, target_id="r1", position=HexCoord(2, -3),
        )
        assert result.success
        assert result.state.get_player("r1").position == HexCoord(2, -3)

    def test_throw_into_mountain(self, game, modify, roller):
        """Throwing into a mountain deals strength damage instead."""
        state = modify(game, "r1", position=HexCoord(1, -2))
        result = use_skill(
            state, "w1", "warrior-throw", roller, target_id="r1", position=HexCoord(0, -3),
        )
        assert result.success
        rogue = result.state.get_player("r1")
        assert rogue.position == HexCoord(1, -2)
        assert rogue.health == 18

    def test_iron_stance(self, game, roller):
        result = use_skill(game, "w1", "warrior-iron-stance", roller)
        assert result.success
        assert result.state.get_player("w1").iron_stance_active

    def test_sword_wave_hits_line(self, game, modify, roller):
        """Sword wave hits every unit on the three tiles in a direction."""
        state = modify(game, "w1", stats=Stats(intelligence=(2, 1)))
        state = modify(state, "r1", position=HexCoord(3, -1))
        result = use_skill(state, "w1", "warrior-sword-wave", roller, position=HexCoord(1, -1))

        assert result.success
        assert result.state.get_player("m1").health == 18
        assert result.state.get_player("r1").health == 18
        attacked = [e for e in result.events if e.event_type == EventType.PLAYER_ATTACKED]
        assert len(attacked) == 2

    def test_sword_wave_without_target_fails(self, game, modify, roller):
        """An empty line is refused and no cooldown is set."""
        state = modify(game, "w1", stats=Stats(intelligence=(2, 1)))
        result = use_skill(state, "w1", "warrior-sword-wave", roller, position=HexCoord(-1, -1))
        assert not result.success
        assert result.state.get_player("w1").cooldown("warrior-sword-wave") == 0


class TestRogueSkills:
    """Tests for rogue skills."""

    def test_poison(self, game, roller):
        result = use_skill(game, "r1", "rogue-poison", roller)
        assert result.success
        assert result.state.get_player("r1").poison_active

    def test_shadow_trap(self, game, roller):
        """Traps go on the caster's tile or an adjacent one."""
        result = use_skill(game, "r1", "rogue-shadow-trap", roller, position=HexCoord(1, 1))
        assert result.success
        assert result.state.get_player("r1").traps == (HexCoord(1, 1),)

    def test_shadow_trap_range(self, game, roller):
        result = use_skill(game, "r1", "rogue-shadow-trap", roller, position=HexCoord(3, 1))
        assert not result.success

    def test_shadow_trap_keeps_last_three(self, game, modify, roller):
        """A fourth trap pushes out the oldest."""
        old = (HexCoord(0, 2), HexCoord(-1, 2), HexCoord(-1, 1))
        state = modify(game, "r1", traps=old)
        result = use_skill(state, "r1", "rogue-shadow-trap", roller, position=HexCoord(1, 1))
        assert result.state.get_player("r1").traps == old[1:] + (HexCoord(1, 1),)

    def test_backstab(self, game, modify, roller):
        """Backstab steps behind the target, then strikes."""
        state = modify(game, "w1", position=HexCoord(1, 1))
        result = use_skill(state, "r1", "rogue-backstab", roller, target_id="w1")

        assert result.success
        assert result.state.get_player("r1").position == HexCoord(2, 1)
        assert result.state.get_player("w1").health == 28
        assert result.events[0].event_type == EventType.PLAYER_MOVED

    def test_stealth(self, game, roller):
        result = use_skill(game, "r1", "rogue-stealth", roller)
        assert result.success
        assert result.state.get_player("r1").is_stealthed

    def test_shuriken_doubles_at_range(self, game, modify, roller):
        """Shuriken deals double dexterity two or more tiles out."""
        state = modify(game, "r1", stats=Stats(intelligence=(2, 1)))
        state = modify(state, "w1", position=HexCoord(2, 1))
        result = use_skill(state, "r1", "rogue-shuriken", roller, position=HexCoord(1, 1))

        assert result.success
        assert result.state.get_player("w1").health == 26

    def test_shuriken_hits_first_only(self, game, modify, roller):
        """Only the first unit in line is hit."""
        state = modify(game, "r1", stats=Stats(intelligence=(2, 1)))
        state = modify(state, "w1", position=HexCoord(2, 1))
        state = modify(state, "m1", position=HexCoord(1, 1))
        result = use_skill(state, "r1", "rogue-shuriken", roller, position=HexCoord(2, 1))

        assert result.success
        assert result.state.get_player("m1").health == 18
        assert result.state.get_player("w1").health == 30


class TestMageSkills:
    """Tests for mage skills."""

    @pytest.fixture
    def clever(self, game, modify):
        """Mage with intelligence 6 so two skills fit in a turn."""
        return modify(game, "m1", stats=Stats(intelligence=(3, 3)))

    def test_enhance_once(self, game, modify, roller):
        """Enhance is refused while already enhanced."""
        state = modify(game, "m1", is_enhanced=True)
        assert not use_skill(state, "m1", "mage-enhance", roller).success

    def test_magic_arrow(self, game, modify, roller):
        """Intelligence damage to a hero two tiles away."""
        state = modify(game, "r1", position=HexCoord(1, 1))
        result = use_skill(state, "m1", "mage-magic-arrow", roller, target_id="r1")
        assert result.success
        assert result.state.get_player("r1").health == 18

    def test_magic_arrow_monster_range(self, game, modify, roller):
        """Monsters must be adjacent."""
        state = modify(game, "m1", position=HexCoord(6, 1))
        result = use_skill(state, "m1", "mage-magic-arrow", roller, target_id="lich")
        assert not result.success

    def test_enhanced_arrow_doubles_and_consumes(self, clever, modify, roller):
        """Enhance doubles the next mage skill and is then used up."""
        state = modify(clever, "r1", position=HexCoord(1, 1))
        state = use_skill(state, "m1", "mage-enhance", roller).state
        result = use_skill(state, "m1", "mage-magic-arrow", roller, target_id="r1")

        assert result.success
        assert result.state.get_player("r1").health == 8
        assert not result.state.get_player("m1").is_enhanced

    def test_clone(self, game, roller):
        """Clone is left on the caster's tile."""
        result = use_skill(game, "m1", "mage-clone", roller)
        assert result.success
        assert result.state.clone_of("m1") == CloneInfo("m1", HexCoord(1, -1))

    def test_enhanced_clone_swaps(self, clever, modify, roller):
        """An enhanced clone swaps the mage with the existing clone."""
        state = clever._copy_with(clones=(CloneInfo("m1", HexCoord(3, -2)),))
        state = modify(state, "m1", is_enhanced=True)
        result = use_skill(state, "m1", "mage-clone", roller)

        assert result.success
        assert result.state.get_player("m1").position == HexCoord(3, -2)
        assert result.state.clone_of("m1").position == HexCoord(1, -1)

    def test_burst(self, clever, modify, roller):
        """Burst hits every adjacent unit."""
        state = modify(clever, "w1", position=HexCoord(1, -2))
        state = modify(state, "r1", position=HexCoord(2, -1))
        result = use_skill(state, "m1", "mage-burst", roller)

        assert result.success
        assert result.state.get_player("w1").health == 24
        assert result.state.get_player("r1").health == 14

    def test_burst_with_nothing_adjacent(self, clever, modify, roller):
        """An empty burst still costs intelligence and starts the cooldown."""
        state = modify(clever, "w1", position=HexCoord(-3, 0))
        result = use_skill(state, "m1", "mage-burst", roller)

        assert result.success
        assert result.events == []
        mage = result.state.get_player("m1")
        assert mage.used_skill_cost == 3
        assert mage.skill_cooldowns["mage-burst"] == 2

    def test_meteor_on_empty_tile(self, clever, roller):
        result = use_skill(clever, "m1", "mage-meteor", roller, position=HexCoord(4, 0))

        assert result.success
        assert result.events == []
        mage = result.state.get_player("m1")
        assert mage.used_skill_cost == 4
        assert mage.skill_cooldowns["mage-meteor"] == 3

    def test_meteor_off_board(self, clever, roller):
        assert not use_skill(clever, "m1", "mage-meteor", roller, position=HexCoord(30, 0)).success
        assert not use_skill(clever, "m1", "mage-meteor", roller).success

    def test_meteor_monsters_immune(self, clever, roller):
        """While the lich's buff holds, meteor lands but leaves monsters alone."""
        state = clever.with_buffs(meteor_immune=True)
        result = use_skill(state, "m1", "mage-meteor", roller, position=HexCoord(6, 3))

        assert result.success
        assert result.state.get_monster("lich").health == 30
        assert result.state.get_player("m1").monster_essence == 0
        assert result.state.get_player("m1").skill_cooldowns["mage-meteor"] == 3

    def test_meteor_hits_caster(self, clever, roller):
        """A mage standing on the tile takes the hit too."""
        before = clever.get_player("m1").health
        result = use_skill(clever, "m1", "mage-meteor", roller, position=HexCoord(1, -1))

        assert result.success
        assert result.state.get_player("m1").health == before - 6

    def test_meteor_hits_monster(self, clever, roller):
        """Meteor reaches any tile on the board."""
        result = use_skill(clever, "m1", "mage-meteor", roller, position=HexCoord(6, 3))
        assert result.success
        assert result.state.get_monster("lich").health == 24
        assert result.state.get_player("m1").monster_essence == 6
