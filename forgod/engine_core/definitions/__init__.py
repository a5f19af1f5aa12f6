"""
Static game definitions - read-only data shared by the engine and clients.
"""

from .monsters import MonsterDefinition, MONSTERS, MONSTERS_BY_ID, END_MONSTER_ID
from .skills import SkillDefinition, SkillTargeting, SKILLS, SKILLS_BY_ID, get_skill, skills_for_class
from .revelations import REVELATIONS, REVELATIONS_BY_ID
from .heroes import CLASS_HEALTH_TABLE, DEATH_RESPAWN_TURNS, max_health_for
from .board import (
    BoardBuilder,
    GAME_BOARD,
    STARTING_POSITIONS,
    TEMPLE_POSITION,
    CASTLE_POSITION,
    build_game_board,
    starting_position,
)

__all__ = [
    "MonsterDefinition",
    "MONSTERS",
    "MONSTERS_BY_ID",
    "END_MONSTER_ID",
    "SkillDefinition",
    "SkillTargeting",
    "SKILLS",
    "SKILLS_BY_ID",
    "get_skill",
    "skills_for_class",
    "REVELATIONS",
    "REVELATIONS_BY_ID",
    "CLASS_HEALTH_TABLE",
    "DEATH_RESPAWN_TURNS",
    "max_health_for",
    "BoardBuilder",
    "GAME_BOARD",
    "STARTING_POSITIONS",
    "TEMPLE_POSITION",
    "CASTLE_POSITION",
    "build_game_board",
    "starting_position",
]
