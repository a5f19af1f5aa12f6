"""
Game State - Immutable snapshots of a For God game.

Design principles:
- Immutable: every transition returns a new snapshot (frozen dataclasses,
  tuples for collections)
- Death is a status flag with a respawn countdown, never removal
- Derived values (stat totals, level) are computed, not stored
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .board import Board, HeroClass
from .hex import HexCoord


MONSTER_TURN = "monster"


class GamePhase(str, Enum):
    """High-level game phases."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


class HeroState(str, Enum):
    HOLY = "holy"
    CORRUPT = "corrupt"


class TurnPhase(str, Enum):
    MOVE = "move"
    ACTION = "action"


class Stat(str, Enum):
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    INTELLIGENCE = "intelligence"


class RevelationSource(str, Enum):
    ANGEL = "angel"
    DEMON = "demon"


class RevelationTrigger(str, Enum):
    """How a revelation gets completed."""
    TASK = "task"              # player completes it with an action
    EVENT = "event"            # completed automatically by a combat event
    PROTECTION = "protection"  # completed by the death-prevention guard


@dataclass(frozen=True)
class RevelationReward:
    devil_score: int = 0
    faith_score: int = 0
    corrupt_score: int = 0
    extra_revelations: int = 0


@dataclass(frozen=True)
class Revelation:
    """
    A goal card.

    Cards are values: the same instance moves from the deck to a hand and
    then to the completed list.
    """
    id: str
    name: str
    source: RevelationSource
    task: str
    reward: RevelationReward
    is_game_end: bool = False
    trigger: RevelationTrigger = RevelationTrigger.TASK
    sacrifice_cost: int = 0


@dataclass(frozen=True)
class Stats:
    """Each stat is a pair of die faces."""
    strength: tuple[int, int] = (1, 1)
    dexterity: tuple[int, int] = (1, 1)
    intelligence: tuple[int, int] = (1, 1)

    def dice(self, stat: Stat) -> tuple[int, int]:
        return getattr(self, stat.value)

    def total(self, stat: Stat) -> int:
        return sum(self.dice(stat))

    def with_dice(self, stat: Stat, dice: tuple[int, int]) -> Stats:
        return replace(self, **{stat.value: dice})


@dataclass(frozen=True)
class PlayerState:
    """State for a single hero."""
    player_id: str
    name: str
    hero_class: HeroClass
    position: HexCoord
    health: int
    max_health: int
    state: HeroState = HeroState.HOLY
    stats: Stats = field(default_factory=Stats)

    corrupt_dice: int | None = None
    corrupt_dice_target: Stat | None = None

    monster_essence: int = 0
    sacrifices: int = 0
    sacrifice_partners: tuple[str, ...] = ()
    devil_score: int = 0
    faith_score: int = 0

    is_dead: bool = False
    death_turns_remaining: int = 0

    skill_cooldowns: dict[str, int] = field(default_factory=dict)
    used_skill_cost: int = 0

    turn_phase: TurnPhase = TurnPhase.MOVE
    remaining_movement: int | None = None
    leftover_movement: int = 0
    has_used_basic_attack: bool = False

    # Transient flags
    is_stealthed: bool = False
    iron_stance_active: bool = False
    poison_active: bool = False
    is_enhanced: bool = False
    is_bound: bool = False
    has_demon_sword: bool = False
    knows_demon_sword_position: bool = False

    traps: tuple[HexCoord, ...] = ()
    revelations: tuple[Revelation, ...] = ()
    completed_revelations: tuple[Revelation, ...] = ()

    @property
    def is_corrupt(self) -> bool:
        return self.state == HeroState.CORRUPT

    @property
    def is_holy(self) -> bool:
        return self.state == HeroState.HOLY

    @property
    def is_alive(self) -> bool:
        return not self.is_dead

    @property
    def level(self) -> int:
        """Highest stat total, ignoring the corrupt die."""
        return max(self.stats.total(stat) for stat in Stat)

    def stat_total(self, stat: Stat) -> int:
        total = self.stats.total(stat)
        if self.corrupt_dice is not None and self.corrupt_dice_target == stat:
            total += self.corrupt_dice
        return total

    @property
    def strength(self) -> int:
        return self.stat_total(Stat.STRENGTH)

    @property
    def dexterity(self) -> int:
        return self.stat_total(Stat.DEXTERITY)

    @property
    def intelligence(self) -> int:
        return self.stat_total(Stat.INTELLIGENCE)

    def cooldown(self, skill_id: str) -> int:
        return self.skill_cooldowns.get(skill_id, 0)

    def has_revelation(self, revelation_id: str) -> bool:
        return any(r.id == revelation_id for r in self.revelations)

    def get_revelation(self, revelation_id: str) -> Revelation | None:
        for revelation in self.revelations:
            if revelation.id == revelation_id:
                return revelation
        return None

    def _copy_with(self, **kwargs: Any) -> PlayerState:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class MonsterState:
    """Runtime state of a monster. Position and dice indices never change."""
    monster_id: str
    name: str
    position: HexCoord
    health: int
    max_health: int
    dice_indices: tuple[int, ...]
    is_dead: bool = False

    @property
    def is_alive(self) -> bool:
        return not self.is_dead

    def _copy_with(self, **kwargs: Any) -> MonsterState:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class MonsterRoundBuffs:
    """Set during a monster phase, effective until the next one starts."""
    golem_basic_attack_immune: bool = False
    meteor_immune: bool = False
    fire_tile_disabled: bool = False


@dataclass(frozen=True)
class CloneInfo:
    """A mage's clone on the board."""
    owner_id: str
    position: HexCoord


@dataclass(frozen=True)
class GameState:
    """
    Complete game snapshot.

    Turn order entries are player ids or MONSTER_TURN.
    """
    game_id: str
    players: tuple[PlayerState, ...]
    monsters: tuple[MonsterState, ...]
    board: Board
    round_number: int = 1
    round_turn_order: tuple[str, ...] = ()
    current_turn_index: int = 0
    monster_dice: tuple[int, ...] = (1, 1, 1, 1, 1, 1)
    revelation_deck: tuple[Revelation, ...] = ()
    demon_sword_position: HexCoord | None = None
    monster_round_buffs: MonsterRoundBuffs = field(default_factory=MonsterRoundBuffs)
    clones: tuple[CloneInfo, ...] = ()

    phase: GamePhase = GamePhase.PLAYING
    winner_id: str | None = None
    victory_type: str | None = None

    @property
    def current_turn_entry(self) -> str | None:
        if 0 <= self.current_turn_index < len(self.round_turn_order):
            return self.round_turn_order[self.current_turn_index]
        return None

    @property
    def current_player(self) -> PlayerState | None:
        entry = self.current_turn_entry
        if entry is None or entry == MONSTER_TURN:
            return None
        return self.get_player(entry)

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def get_player(self, player_id: str) -> PlayerState | None:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_monster(self, monster_id: str) -> MonsterState | None:
        for monster in self.monsters:
            if monster.monster_id == monster_id:
                return monster
        return None

    def living_players(self) -> list[PlayerState]:
        return [p for p in self.players if not p.is_dead]

    def players_at(self, coord: HexCoord) -> list[PlayerState]:
        return [p for p in self.players if not p.is_dead and p.position == coord]

    def monster_at(self, coord: HexCoord) -> MonsterState | None:
        for monster in self.monsters:
            if not monster.is_dead and monster.position == coord:
                return monster
        return None

    def is_occupied(self, coord: HexCoord) -> bool:
        return bool(self.players_at(coord)) or self.monster_at(coord) is not None

    def clone_of(self, owner_id: str) -> CloneInfo | None:
        for clone in self.clones:
            if clone.owner_id == owner_id:
                return clone
        return None

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def with_monster(self, monster: MonsterState) -> GameState:
        """Return new state with updated monster."""
        new_monsters = tuple(
            monster if m.monster_id == monster.monster_id else m
            for m in self.monsters
        )
        return self._copy_with(monsters=new_monsters)

    def with_buffs(self, **kwargs: Any) -> GameState:
        return self._copy_with(monster_round_buffs=replace(self.monster_round_buffs, **kwargs))

    def _copy_with(self, **kwargs: Any) -> GameState:
        return replace(self, **kwargs)
