"""
Hex geometry - Axial coordinate math for the game board.

Coordinates are axial (q, r) on a flat-top grid. The implicit third cube
axis is s = -q - r.

All functions are pure and stateless.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterator
import heapq
import math


@dataclass(frozen=True, order=True)
class HexCoord:
    """An axial hex coordinate."""
    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    @property
    def key(self) -> str:
        """String key used by the flat board serialization."""
        return f"{self.q},{self.r}"

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    def scale(self, factor: int) -> HexCoord:
        return HexCoord(self.q * factor, self.r * factor)

    @classmethod
    def from_key(cls, key: str) -> HexCoord:
        q, r = key.split(",")
        return cls(int(q), int(r))


# Direction order matters: it is the tie-break for every "first free
# neighbor" search in the engine.
HEX_DIRECTIONS: tuple[HexCoord, ...] = (
    HexCoord(1, 0),
    HexCoord(1, -1),
    HexCoord(0, -1),
    HexCoord(-1, 0),
    HexCoord(-1, 1),
    HexCoord(0, 1),
)


def round_half_up(value: float) -> int:
    """Round halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def neighbor(coord: HexCoord, direction: int) -> HexCoord:
    return coord + HEX_DIRECTIONS[direction % 6]


def neighbors(coord: HexCoord) -> list[HexCoord]:
    return [coord + d for d in HEX_DIRECTIONS]


def distance(a: HexCoord, b: HexCoord) -> int:
    dq = a.q - b.q
    dr = a.r - b.r
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def is_adjacent(a: HexCoord, b: HexCoord) -> bool:
    return distance(a, b) == 1


def direction_between(a: HexCoord, b: HexCoord) -> int | None:
    """
    Index of the axis direction pointing from a toward b.

    Only defined when b lies on one of the six straight lines through a.
    """
    dist = distance(a, b)
    if dist == 0:
        return None
    delta = b - a
    for index, direction in enumerate(HEX_DIRECTIONS):
        if direction.scale(dist) == delta:
            return index
    return None


def coords_in_range(center: HexCoord, radius: int) -> list[HexCoord]:
    """All coordinates within radius of center, center included."""
    results = []
    for q in range(-radius, radius + 1):
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
            results.append(HexCoord(center.q + q, center.r + r))
    return results


def ring(center: HexCoord, radius: int) -> list[HexCoord]:
    """Coordinates at exactly radius from center."""
    if radius == 0:
        return [center]
    results = []
    current = center + HEX_DIRECTIONS[0].scale(radius)
    for side in range(6):
        for _ in range(radius):
            results.append(current)
            current = neighbor(current, side + 2)
    return results


def hex_round(q: float, r: float) -> HexCoord:
    """
    Round fractional axial coordinates to the containing hex.

    The axis with the largest rounding error is rebuilt from the other two.
    Ties prefer q, then r.
    """
    s = -q - r
    rq = round_half_up(q)
    rr = round_half_up(r)
    rs = round_half_up(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff >= r_diff and q_diff >= s_diff:
        rq = -rr - rs
    elif r_diff >= s_diff:
        rr = -rq - rs

    return HexCoord(rq, rr)


def line_between(a: HexCoord, b: HexCoord) -> list[HexCoord]:
    """Hexes on the straight line from a to b, both ends included."""
    dist = distance(a, b)
    if dist == 0:
        return [a]
    results = []
    for i in range(dist + 1):
        t = i / dist
        results.append(hex_round(a.q + (b.q - a.q) * t, a.r + (b.r - a.r) * t))
    return results


def walk(start: HexCoord, direction: int, steps: int) -> Iterator[HexCoord]:
    """Yield the coordinates one, two, ... steps away along a direction."""
    current = start
    for _ in range(steps):
        current = neighbor(current, direction)
        yield current


def reachable(
    start: HexCoord,
    budget: int,
    cost_fn: Callable[[HexCoord], int | None],
) -> dict[HexCoord, int]:
    """
    Every coordinate reachable from start within budget.

    cost_fn(coord) returns the cost to enter coord, or None when it cannot
    be entered. Returns a map of coordinate to the cheapest total cost.
    """
    best: dict[HexCoord, int] = {start: 0}
    frontier: list[tuple[int, int, int]] = [(0, start.q, start.r)]

    while frontier:
        spent, q, r = heapq.heappop(frontier)
        current = HexCoord(q, r)
        if spent > best.get(current, spent):
            continue
        for nxt in neighbors(current):
            step = cost_fn(nxt)
            if step is None:
                continue
            total = spent + step
            if total > budget:
                continue
            if total < best.get(nxt, budget + 1):
                best[nxt] = total
                heapq.heappush(frontier, (total, nxt.q, nxt.r))

    return best
