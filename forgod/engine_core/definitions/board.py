"""
Board layout - The fixed game board and hero starting villages.
"""

from __future__ import annotations

from ..board import Board, HexTile, TileType, HeroClass
from ..hex import HexCoord, coords_in_range, round_half_up
from .monsters import MONSTERS_BY_ID


class BoardBuilder:
    """
    Fluent builder for board layouts.

    Setters only touch tiles that already exist, so deleted tiles stay
    deleted no matter what is painted over them later.
    """

    def __init__(self):
        self._tiles: dict[HexCoord, HexTile] = {}

    def create_base(self, radius: int, tile_type: TileType = TileType.PLAIN) -> BoardBuilder:
        for coord in coords_in_range(HexCoord(0, 0), radius):
            self._tiles[coord] = HexTile(coord=coord, type=tile_type)
        return self

    def set_tile(
        self,
        q: int,
        r: int,
        tile_type: TileType,
        village_class: HeroClass | None = None,
    ) -> BoardBuilder:
        coord = HexCoord(q, r)
        if coord in self._tiles:
            self._tiles[coord] = HexTile(coord=coord, type=tile_type, village_class=village_class)
        return self

    def set_tiles(self, coords: list[tuple[int, int]], tile_type: TileType) -> BoardBuilder:
        for q, r in coords:
            self.set_tile(q, r, tile_type)
        return self

    def set_line(self, q1: int, r1: int, q2: int, r2: int, tile_type: TileType) -> BoardBuilder:
        for q, r in self._line(q1, r1, q2, r2):
            self.set_tile(q, r, tile_type)
        return self

    def set_village(self, q: int, r: int, hero_class: HeroClass) -> BoardBuilder:
        return self.set_tile(q, r, TileType.VILLAGE, village_class=hero_class)

    def set_monster(self, q: int, r: int, monster_id: str) -> BoardBuilder:
        monster = MONSTERS_BY_ID.get(monster_id)
        coord = HexCoord(q, r)
        if monster is None or coord not in self._tiles:
            return self
        self._tiles[coord] = HexTile(
            coord=coord,
            type=TileType.MONSTER,
            monster_id=monster.id,
            monster_name=monster.name,
        )
        return self

    def delete_tiles(self, coords: list[tuple[int, int]]) -> BoardBuilder:
        for q, r in coords:
            self._tiles.pop(HexCoord(q, r), None)
        return self

    def build(self) -> Board:
        return Board(self._tiles.values())

    @staticmethod
    def _line(q1: int, r1: int, q2: int, r2: int) -> list[tuple[int, int]]:
        # Axes are rounded independently, not snapped with hex_round.
        steps = max(abs(q2 - q1), abs(r2 - r1), abs((q1 + r1) - (q2 + r2)))
        points = []
        for i in range(steps + 1):
            t = 0 if steps == 0 else i / steps
            points.append((round_half_up(q1 + (q2 - q1) * t), round_half_up(r1 + (r2 - r1) * t)))
        return points


def build_game_board() -> Board:
    """The fixed radius-9 game board."""
    return (
        BoardBuilder()
        .create_base(9, TileType.PLAIN)
        .set_tile(0, 0, TileType.TEMPLE)

        # Villages around the temple
        .set_village(0, -1, HeroClass.WARRIOR)
        .set_village(-1, 0, HeroClass.WARRIOR)
        .set_village(-1, -1, HeroClass.WARRIOR)
        .set_village(1, -1, HeroClass.MAGE)
        .set_village(1, 0, HeroClass.MAGE)
        .set_village(2, -1, HeroClass.MAGE)
        .set_village(0, 1, HeroClass.ROGUE)
        .set_village(-1, 1, HeroClass.ROGUE)
        .set_village(-1, 2, HeroClass.ROGUE)

        # Mountains
        .set_line(-2, -4, 1, -6, TileType.MOUNTAIN)
        .set_line(-2, -7, -4, -5, TileType.MOUNTAIN)
        .set_line(0, -3, 1, -4, TileType.MOUNTAIN)
        .set_line(4, -9, 2, -9, TileType.MOUNTAIN)
        .set_line(5, -7, 7, -7, TileType.MOUNTAIN)
        .set_tiles([(5, -6), (6, -6)], TileType.MOUNTAIN)
        .set_line(-9, 8, -7, 9, TileType.MOUNTAIN)
        .set_line(-5, 9, -2, 9, TileType.MOUNTAIN)
        .set_tile(-9, 9, TileType.MOUNTAIN)
        .set_line(7, 1, 9, -1, TileType.MOUNTAIN)
        .set_tiles([(8, 1), (9, 0)], TileType.MOUNTAIN)
        .set_line(-2, 5, 3, 1, TileType.MOUNTAIN)

        # Lakes
        .set_line(-9, 0, -9, 7, TileType.LAKE)
        .set_line(-8, 0, -8, 6, TileType.LAKE)
        .set_line(-5, 0, -5, 1, TileType.LAKE)
        .set_tile(-7, 4, TileType.LAKE)
        .set_tiles(
            [(-5, -4), (-4, -4), (-5, -3), (-6, -3), (-7, 0), (-5, -2), (-4, 0), (-4, 1)],
            TileType.LAKE,
        )
        .set_tiles([(5, -3), (5, -2), (6, -4), (6, -3)], TileType.LAKE)

        # Hills
        .set_line(-8, 7, -2, 7, TileType.HILL)
        .set_line(-7, 8, -2, 8, TileType.HILL)
        .set_line(-6, 5, -3, 5, TileType.HILL)
        .set_tile(-5, 5, TileType.MOUNTAIN)
        .set_tile(2, 2, TileType.HILL)
        .set_tiles([(-6, 9), (-7, 6)], TileType.HILL)
        .set_tiles([(2, -4), (3, -4), (3, -5), (4, -5)], TileType.HILL)
        .set_tiles([(8, -4), (8, -3), (9, -6), (9, -5), (9, -4)], TileType.LAKE)
        .set_tiles([(3, 5), (2, 6), (3, 6), (2, 7)], TileType.MOUNTAIN)

        # Swamps
        .set_tiles(
            [(-8, -1), (-7, -1), (-6, -2), (-6, -1), (-6, 0), (-6, 1), (-6, 2), (-6, 3), (-7, 1), (-7, 2)],
            TileType.SWAMP,
        )
        .set_tiles([(7, 0), (8, -1), (8, -2), (9, -2), (9, -3)], TileType.LAKE)
        .set_tiles([(4, -4), (5, -4), (5, -5), (6, -5)], TileType.SWAMP)

        # Fire
        .set_tiles([(-1, 7), (0, 6), (1, 6)], TileType.FIRE)
        .set_tiles([(-2, -6), (-2, -5), (2, -7), (3, -8)], TileType.FIRE)

        .delete_tiles([(-1, 9), (0, 9), (1, 8), (-1, -8), (0, -9), (1, -9)])

        .set_tile(0, -8, TileType.CASTLE)

        .set_monster(-7, -2, "hydra")
        .set_monster(-7, 3, "grindylow")
        .set_monster(-6, 8, "troll")
        .set_monster(7, -8, "golem")
        .set_monster(7, -3, "harpy")
        .set_monster(0, 8, "balrog")
        .set_monster(6, 3, "lich")
        .build()
    )


GAME_BOARD: Board = build_game_board()

TEMPLE_POSITION = HexCoord(0, 0)
CASTLE_POSITION = HexCoord(0, -8)

# Village tiles adjacent to the temple, in placement order per class.
STARTING_POSITIONS: dict[HeroClass, tuple[HexCoord, ...]] = {
    HeroClass.WARRIOR: (HexCoord(0, -1), HexCoord(-1, 0)),
    HeroClass.MAGE: (HexCoord(1, -1), HexCoord(1, 0)),
    HeroClass.ROGUE: (HexCoord(0, 1), HexCoord(-1, 1)),
}


def starting_position(hero_class: HeroClass, index: int = 0) -> HexCoord:
    """Starting village for the index-th hero of a class; extra heroes share the last one."""
    positions = STARTING_POSITIONS[hero_class]
    return positions[min(index, len(positions) - 1)]
