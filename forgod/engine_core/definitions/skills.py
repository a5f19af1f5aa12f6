"""
Skill table - Static cost and cooldown data for all 15 class skills.

Cost is paid from the per-turn intelligence budget. Cooldown is set after
a successful use and decays by one at every round end.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..board import HeroClass


class SkillTargeting(str, Enum):
    """What a skill needs from the caller."""
    NONE = "none"          # self-targeted
    UNIT = "unit"          # target_id (hero or monster)
    HERO = "hero"          # target_id (hero only)
    POSITION = "position"  # position
    HERO_AND_POSITION = "hero_and_position"


@dataclass(frozen=True)
class SkillDefinition:
    id: str
    name: str
    hero_class: HeroClass
    cost: int
    cooldown: int
    targeting: SkillTargeting
    description: str = ""


SKILLS: tuple[SkillDefinition, ...] = (
    # Warrior
    SkillDefinition(
        id="warrior-charge",
        name="Charge",
        hero_class=HeroClass.WARRIOR,
        cost=1,
        cooldown=1,
        targeting=SkillTargeting.UNIT,
        description="Close in on a target two tiles away. Reduce another skill's cooldown by 1.",
    ),
    SkillDefinition(
        id="warrior-power-strike",
        name="Power Strike",
        hero_class=HeroClass.WARRIOR,
        cost=2,
        cooldown=3,
        targeting=SkillTargeting.UNIT,
        description="Hit an adjacent target for twice your strength.",
    ),
    SkillDefinition(
        id="warrior-throw",
        name="Throw",
        hero_class=HeroClass.WARRIOR,
        cost=2,
        cooldown=3,
        targeting=SkillTargeting.HERO_AND_POSITION,
        description="Throw an adjacent hero up to two tiles. Throwing into a mountain deals strength damage.",
    ),
    SkillDefinition(
        id="warrior-iron-stance",
        name="Iron Stance",
        hero_class=HeroClass.WARRIOR,
        cost=2,
        cooldown=3,
        targeting=SkillTargeting.NONE,
        description="Until your next turn, reduce all damage taken by your strength.",
    ),
    SkillDefinition(
        id="warrior-sword-wave",
        name="Sword Wave",
        hero_class=HeroClass.WARRIOR,
        cost=3,
        cooldown=3,
        targeting=SkillTargeting.POSITION,
        description="Deal strength damage to everything on the three tiles in front of you.",
    ),
    # Rogue
    SkillDefinition(
        id="rogue-poison",
        name="Poison",
        hero_class=HeroClass.ROGUE,
        cost=1,
        cooldown=1,
        targeting=SkillTargeting.NONE,
        description="Your next basic attack adds your dexterity.",
    ),
    SkillDefinition(
        id="rogue-shadow-trap",
        name="Shadow Trap",
        hero_class=HeroClass.ROGUE,
        cost=1,
        cooldown=2,
        targeting=SkillTargeting.POSITION,
        description="Set a trap (max 3). A hero stepping on it takes dexterity damage and you vanish.",
    ),
    SkillDefinition(
        id="rogue-backstab",
        name="Backstab",
        hero_class=HeroClass.ROGUE,
        cost=2,
        cooldown=2,
        targeting=SkillTargeting.HERO,
        description="Step behind an adjacent hero and deal dexterity damage.",
    ),
    SkillDefinition(
        id="rogue-stealth",
        name="Stealth",
        hero_class=HeroClass.ROGUE,
        cost=2,
        cooldown=3,
        targeting=SkillTargeting.NONE,
        description="Cannot be targeted until you attack.",
    ),
    SkillDefinition(
        id="rogue-shuriken",
        name="Shuriken",
        hero_class=HeroClass.ROGUE,
        cost=3,
        cooldown=3,
        targeting=SkillTargeting.POSITION,
        description="Dexterity damage to the first target in a line, doubled at range 2 or more. Mountains block it.",
    ),
    # Mage
    SkillDefinition(
        id="mage-enhance",
        name="Enhance",
        hero_class=HeroClass.MAGE,
        cost=2,
        cooldown=0,
        targeting=SkillTargeting.NONE,
        description="Empower your next skill.",
    ),
    SkillDefinition(
        id="mage-magic-arrow",
        name="Magic Arrow",
        hero_class=HeroClass.MAGE,
        cost=2,
        cooldown=1,
        targeting=SkillTargeting.UNIT,
        description="Intelligence damage. Range 2 against heroes, 1 against monsters.",
    ),
    SkillDefinition(
        id="mage-clone",
        name="Clone",
        hero_class=HeroClass.MAGE,
        cost=2,
        cooldown=2,
        targeting=SkillTargeting.NONE,
        description="Leave a clone on your tile. Enhanced: swap places with your clone.",
    ),
    SkillDefinition(
        id="mage-burst",
        name="Burst",
        hero_class=HeroClass.MAGE,
        cost=3,
        cooldown=2,
        targeting=SkillTargeting.NONE,
        description="Intelligence damage to everything adjacent to you.",
    ),
    SkillDefinition(
        id="mage-meteor",
        name="Meteor",
        hero_class=HeroClass.MAGE,
        cost=4,
        cooldown=3,
        targeting=SkillTargeting.POSITION,
        description="Intelligence damage to everything on any tile. Enhanced: double damage.",
    ),
)

SKILLS_BY_ID: dict[str, SkillDefinition] = {s.id: s for s in SKILLS}


def get_skill(skill_id: str) -> SkillDefinition | None:
    return SKILLS_BY_ID.get(skill_id)


def skills_for_class(hero_class: HeroClass) -> list[SkillDefinition]:
    return [s for s in SKILLS if s.hero_class == hero_class]
