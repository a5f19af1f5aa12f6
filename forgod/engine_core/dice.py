"""
Dice - Injectable randomness for the engine.

The engine never touches a global RNG. Everything random goes through a
DiceRoller: die rolls for movement, stat upgrades and monsters, and
uniform picks for deck draws and the demon sword placement.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable
import logging
import random


logger = logging.getLogger(__name__)


class DiceRoller(ABC):
    """Source of randomness for the engine."""

    @abstractmethod
    def roll_1d6(self) -> int:
        """Roll one six-sided die."""
        pass

    @abstractmethod
    def pick_index(self, size: int) -> int:
        """Uniformly pick an index in range(size). size is always > 0."""
        pass

    def roll_2d6(self) -> tuple[int, int]:
        return (self.roll_1d6(), self.roll_1d6())

    def roll_many(self, count: int) -> list[int]:
        return [self.roll_1d6() for _ in range(count)]


class RandomDiceRoller(DiceRoller):
    """Production roller backed by random.Random."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def roll_1d6(self) -> int:
        return self._rng.randint(1, 6)

    def pick_index(self, size: int) -> int:
        return self._rng.randrange(size)


class ScriptedDiceRoller(DiceRoller):
    """
    Replays scripted values, for tests and replays.

    Rolls and picks are separate queues so a scripted movement roll is not
    consumed by a deck draw. When a queue runs dry the default is used.
    """

    def __init__(
        self,
        rolls: Iterable[int] = (),
        picks: Iterable[int] = (),
        default_roll: int = 1,
        default_pick: int = 0,
    ):
        self._rolls = list(rolls)
        self._picks = list(picks)
        self.default_roll = default_roll
        self.default_pick = default_pick

    def push_rolls(self, *rolls: int):
        self._rolls.extend(rolls)

    def push_picks(self, *picks: int):
        self._picks.extend(picks)

    @property
    def pending_rolls(self) -> int:
        return len(self._rolls)

    def roll_1d6(self) -> int:
        if self._rolls:
            return self._rolls.pop(0)
        logger.debug("Scripted rolls exhausted, using default %d", self.default_roll)
        return self.default_roll

    def pick_index(self, size: int) -> int:
        value = self._picks.pop(0) if self._picks else self.default_pick
        return min(max(value, 0), size - 1)
