"""
Game events - Observational log entries emitted by state transitions.

Events describe what happened; they are never replayed to rebuild state.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .hex import HexCoord


class EventType(str, Enum):
    PLAYER_MOVED = "PLAYER_MOVED"
    PLAYER_ATTACKED = "PLAYER_ATTACKED"
    PLAYER_DIED = "PLAYER_DIED"
    PLAYER_RESPAWNED = "PLAYER_RESPAWNED"
    PLAYER_HEALED = "PLAYER_HEALED"
    MONSTER_ATTACKED = "MONSTER_ATTACKED"
    MONSTER_DIED = "MONSTER_DIED"
    MONSTER_RESPAWNED = "MONSTER_RESPAWNED"
    MONSTER_DICE_ROLLED = "MONSTER_DICE_ROLLED"
    TRAP_TRIGGERED = "TRAP_TRIGGERED"
    REVELATION_DRAWN = "REVELATION_DRAWN"
    REVELATION_COMPLETED = "REVELATION_COMPLETED"
    STAT_UPGRADED = "STAT_UPGRADED"
    MOVE_DICE_ROLLED = "MOVE_DICE_ROLLED"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class GameEvent:
    """
    A single event.

    Only the fields relevant to the event type are set.
    """
    event_type: EventType
    player_id: str | None = None
    target_id: str | None = None
    attacker_id: str | None = None
    monster_id: str | None = None
    amount: int | None = None
    from_position: HexCoord | None = None
    to_position: HexCoord | None = None
    revelation_id: str | None = None
    stat: str | None = None
    dice: tuple[int, ...] | None = None
    winner_id: str | None = None
    victory_type: str | None = None

    @classmethod
    def player_moved(cls, player_id: str, from_position: HexCoord, to_position: HexCoord) -> GameEvent:
        return cls(
            EventType.PLAYER_MOVED,
            player_id=player_id,
            from_position=from_position,
            to_position=to_position,
        )

    @classmethod
    def player_attacked(cls, attacker_id: str, target_id: str, damage: int) -> GameEvent:
        return cls(EventType.PLAYER_ATTACKED, attacker_id=attacker_id, target_id=target_id, amount=damage)

    @classmethod
    def player_died(cls, player_id: str, attacker_id: str | None = None) -> GameEvent:
        return cls(EventType.PLAYER_DIED, player_id=player_id, attacker_id=attacker_id)

    @classmethod
    def player_respawned(cls, player_id: str, position: HexCoord) -> GameEvent:
        return cls(EventType.PLAYER_RESPAWNED, player_id=player_id, to_position=position)

    @classmethod
    def player_healed(cls, player_id: str, amount: int) -> GameEvent:
        return cls(EventType.PLAYER_HEALED, player_id=player_id, amount=amount)

    @classmethod
    def monster_attacked(cls, attacker_id: str, monster_id: str, damage: int) -> GameEvent:
        return cls(EventType.MONSTER_ATTACKED, attacker_id=attacker_id, monster_id=monster_id, amount=damage)

    @classmethod
    def monster_died(cls, monster_id: str, killer_id: str | None) -> GameEvent:
        return cls(EventType.MONSTER_DIED, monster_id=monster_id, attacker_id=killer_id)

    @classmethod
    def monster_respawned(cls, monster_id: str) -> GameEvent:
        return cls(EventType.MONSTER_RESPAWNED, monster_id=monster_id)

    @classmethod
    def monster_dice_rolled(cls, dice: tuple[int, ...]) -> GameEvent:
        return cls(EventType.MONSTER_DICE_ROLLED, dice=dice)

    @classmethod
    def trap_triggered(cls, owner_id: str, target_id: str, position: HexCoord, damage: int) -> GameEvent:
        return cls(
            EventType.TRAP_TRIGGERED,
            attacker_id=owner_id,
            target_id=target_id,
            to_position=position,
            amount=damage,
        )

    @classmethod
    def revelation_drawn(cls, player_id: str, revelation_id: str) -> GameEvent:
        return cls(EventType.REVELATION_DRAWN, player_id=player_id, revelation_id=revelation_id)

    @classmethod
    def revelation_completed(cls, player_id: str, revelation_id: str) -> GameEvent:
        return cls(EventType.REVELATION_COMPLETED, player_id=player_id, revelation_id=revelation_id)

    @classmethod
    def stat_upgraded(cls, player_id: str, stat: str, new_total: int) -> GameEvent:
        return cls(EventType.STAT_UPGRADED, player_id=player_id, stat=stat, amount=new_total)

    @classmethod
    def move_dice_rolled(cls, player_id: str, dice: tuple[int, ...], movement: int) -> GameEvent:
        return cls(EventType.MOVE_DICE_ROLLED, player_id=player_id, dice=dice, amount=movement)

    @classmethod
    def game_over(cls, winner_id: str, victory_type: str) -> GameEvent:
        return cls(EventType.GAME_OVER, winner_id=winner_id, victory_type=victory_type)
