"""
Hero constants - Class health table and tile effect numbers.
"""

from __future__ import annotations

from ..board import HeroClass


INITIAL_HEALTH = 20
DEATH_RESPAWN_TURNS = 3
MIN_LEVEL = 2
MAX_LEVEL = 12

VILLAGE_SELF_CLASS_HEAL = 10
VILLAGE_OTHER_CLASS_HEAL = 5
FIRE_BASE_DAMAGE = 10

MAX_CORRUPT_DICE = 6
MAX_TRAPS = 3


def _by_bands(bands: list[tuple[range, int]]) -> dict[int, int]:
    table = {}
    for levels, health in bands:
        for level in levels:
            table[level] = health
    return table


# Level = highest stat total, corrupt die excluded.
CLASS_HEALTH_TABLE: dict[HeroClass, dict[int, int]] = {
    HeroClass.MAGE: _by_bands([
        (range(2, 8), 20),
        (range(8, 11), 30),
        (range(11, 12), 40),
        (range(12, 13), 50),
    ]),
    HeroClass.ROGUE: _by_bands([
        (range(2, 5), 20),
        (range(5, 8), 30),
        (range(8, 11), 40),
        (range(11, 13), 50),
    ]),
    HeroClass.WARRIOR: _by_bands([
        (range(2, 8), 30),
        (range(8, 11), 40),
        (range(11, 13), 50),
    ]),
}


def max_health_for(hero_class: HeroClass, level: int) -> int:
    """Maximum health for a class at a level; level is clamped to 2..12."""
    clamped = max(MIN_LEVEL, min(MAX_LEVEL, level))
    return CLASS_HEALTH_TABLE[hero_class].get(clamped, INITIAL_HEALTH)
