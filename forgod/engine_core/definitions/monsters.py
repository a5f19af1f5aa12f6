"""
Monster definitions.

Each monster sits on a fixed tile and draws on a fixed subset of the six
sorted monster dice rolled at the start of every monster phase.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..hex import HexCoord


@dataclass(frozen=True)
class MonsterDefinition:
    id: str
    name: str
    position: HexCoord
    max_health: int
    dice_indices: tuple[int, ...]
    description: str = ""


MONSTERS: tuple[MonsterDefinition, ...] = (
    MonsterDefinition(
        id="harpy",
        name="Harpy",
        position=HexCoord(7, -3),
        max_health=20,
        dice_indices=(0, 1, 2),
        description="On a dice sum of 7 or more, pushes its target one tile away after the hit.",
    ),
    MonsterDefinition(
        id="grindylow",
        name="Grindylow",
        position=HexCoord(-7, 3),
        max_health=25,
        dice_indices=(1, 3),
        description="On a dice sum of 7 or more, binds its target for the next move.",
    ),
    MonsterDefinition(
        id="lich",
        name="Lich",
        position=HexCoord(6, 3),
        max_health=30,
        dice_indices=(3, 4, 5),
        description="On a dice sum of 15 or more, monsters ignore meteors this round.",
    ),
    MonsterDefinition(
        id="troll",
        name="Troll",
        position=HexCoord(-6, 8),
        max_health=35,
        dice_indices=(0, 5),
        description="Attacks corrupt heroes only on an odd dice sum.",
    ),
    MonsterDefinition(
        id="hydra",
        name="Hydra",
        position=HexCoord(-7, -2),
        max_health=40,
        dice_indices=(0, 1, 4, 5),
        description="Attacks only on a dice sum of 15 or more and heals twice the damage dealt.",
    ),
    MonsterDefinition(
        id="golem",
        name="Golem",
        position=HexCoord(7, -8),
        max_health=50,
        dice_indices=(4, 5),
        description="On a dice sum of exactly 12, ignores basic attacks this round.",
    ),
    MonsterDefinition(
        id="balrog",
        name="Balrog",
        position=HexCoord(0, 8),
        max_health=60,
        dice_indices=(0, 1, 2, 3, 4, 5),
        description="While dead the fire tiles go out. Respawns at the next monster phase.",
    ),
)

MONSTERS_BY_ID: dict[str, MonsterDefinition] = {m.id: m for m in MONSTERS}

END_MONSTER_ID = "balrog"
