"""
Board model - Static hex tiles and terrain movement costs.

The board is a coordinate-keyed map that is never mutated after
construction. It serializes to a flat list of tiles and back.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union

from .hex import HexCoord


class TileType(str, Enum):
    PLAIN = "plain"
    VILLAGE = "village"
    MOUNTAIN = "mountain"
    LAKE = "lake"
    HILL = "hill"
    SWAMP = "swamp"
    FIRE = "fire"
    TEMPLE = "temple"
    CASTLE = "castle"
    MONSTER = "monster"


class HeroClass(str, Enum):
    WARRIOR = "warrior"
    ROGUE = "rogue"
    MAGE = "mage"


class MoveCost(str, Enum):
    """Non-numeric movement costs."""
    ALL = "all"          # consumes all remaining movement
    BLOCKED = "blocked"  # cannot be entered


TileCost = Union[int, MoveCost]


TERRAIN_MOVEMENT_COST: dict[TileType, TileCost] = {
    TileType.PLAIN: 3,
    TileType.VILLAGE: 3,
    TileType.MOUNTAIN: MoveCost.BLOCKED,
    TileType.LAKE: MoveCost.BLOCKED,
    TileType.HILL: MoveCost.ALL,
    TileType.SWAMP: 5,
    TileType.FIRE: 3,
    TileType.TEMPLE: 3,
    TileType.CASTLE: 3,
    TileType.MONSTER: MoveCost.BLOCKED,
}


@dataclass(frozen=True)
class HexTile:
    """A single board tile."""
    coord: HexCoord
    type: TileType
    village_class: HeroClass | None = None
    monster_id: str | None = None
    monster_name: str | None = None

    @property
    def is_blocked(self) -> bool:
        return TERRAIN_MOVEMENT_COST[self.type] == MoveCost.BLOCKED

    def with_type(self, tile_type: TileType, **extra) -> HexTile:
        return HexTile(
            coord=self.coord,
            type=tile_type,
            village_class=extra.get("village_class"),
            monster_id=extra.get("monster_id"),
            monster_name=extra.get("monster_name"),
        )


def movement_cost(tile: HexTile, is_corrupt: bool = False, has_demon_sword: bool = False) -> TileCost:
    """
    Cost for a hero to enter a tile.

    Corrupt heroes cannot enter the temple unless they carry the demon sword.
    """
    if tile.type == TileType.TEMPLE and is_corrupt and not has_demon_sword:
        return MoveCost.BLOCKED
    return TERRAIN_MOVEMENT_COST[tile.type]


class Board:
    """
    Read-only coordinate -> tile map.

    Use Board.serialize() / Board.deserialize() for the flat-array form.
    """

    def __init__(self, tiles: Iterable[HexTile]):
        self._tiles: dict[HexCoord, HexTile] = {tile.coord: tile for tile in tiles}

    def get(self, coord: HexCoord) -> HexTile | None:
        return self._tiles.get(coord)

    def __contains__(self, coord: object) -> bool:
        return coord in self._tiles

    def __iter__(self) -> Iterator[HexTile]:
        return iter(self._tiles.values())

    def __len__(self) -> int:
        return len(self._tiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._tiles == other._tiles

    def __hash__(self) -> int:
        return hash(frozenset(self._tiles.items()))

    def coords(self) -> list[HexCoord]:
        return list(self._tiles.keys())

    def tiles_of_type(self, tile_type: TileType) -> list[HexTile]:
        return [t for t in self._tiles.values() if t.type == tile_type]

    def is_type(self, coord: HexCoord, tile_type: TileType) -> bool:
        tile = self._tiles.get(coord)
        return tile is not None and tile.type == tile_type

    def is_enterable(self, coord: HexCoord) -> bool:
        """On the board and not mountain, lake or monster."""
        tile = self._tiles.get(coord)
        return tile is not None and not tile.is_blocked

    def serialize(self) -> list[HexTile]:
        """Flat tile list in coordinate order."""
        return [self._tiles[c] for c in sorted(self._tiles)]

    @classmethod
    def deserialize(cls, tiles: Iterable[HexTile]) -> Board:
        return cls(tiles)

    def as_dict(self) -> dict[str, HexTile]:
        """Map keyed by "q,r" strings."""
        return {coord.key: tile for coord, tile in self._tiles.items()}
