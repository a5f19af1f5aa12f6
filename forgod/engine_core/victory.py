"""
Victory Evaluator - Detects the first satisfied victory trigger.

Players are checked in array order, which is also the tie-break. The
player who triggers a victory is not necessarily the winner: demon king
and angel victories go to the best net score.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .board import TileType
from .state import GameState, PlayerState
from .definitions.heroes import MAX_CORRUPT_DICE


class VictoryType(str, Enum):
    DEMON_KING = "demon_king"
    ANGEL = "angel"
    REVELATION = "revelation"


ANGEL_FAITH_THRESHOLD = 5


@dataclass(frozen=True)
class VictoryResult:
    has_winner: bool
    victory_type: VictoryType | None = None
    trigger_player_id: str | None = None
    winner_id: str | None = None

    @classmethod
    def none(cls) -> VictoryResult:
        return cls(has_winner=False)


def _best_by(state: GameState, score: Callable[[PlayerState], int]) -> str:
    # Only a strictly better score replaces the current best.
    best = state.players[0]
    for player in state.players[1:]:
        if score(player) > score(best):
            best = player
    return best.player_id


def _is_demon_king(state: GameState, player: PlayerState) -> bool:
    return (
        player.is_corrupt
        and player.corrupt_dice == MAX_CORRUPT_DICE
        and state.board.is_type(player.position, TileType.CASTLE)
    )


def _is_angel(state: GameState, player: PlayerState) -> bool:
    return (
        player.is_holy
        and player.faith_score >= ANGEL_FAITH_THRESHOLD
        and state.board.is_type(player.position, TileType.CASTLE)
    )


def _has_game_end_revelation(player: PlayerState) -> bool:
    return any(r.is_game_end for r in player.completed_revelations)


def evaluate_victory(state: GameState) -> VictoryResult:
    """
    Return the first satisfied trigger, or no winner.

    Trigger priority is demon king, angel, revelation, per player in
    array order.
    """
    for player in state.players:
        if player.is_dead:
            continue

        if _is_demon_king(state, player):
            return VictoryResult(
                has_winner=True,
                victory_type=VictoryType.DEMON_KING,
                trigger_player_id=player.player_id,
                winner_id=_best_by(state, lambda p: p.devil_score - p.faith_score),
            )

        if _is_angel(state, player):
            return VictoryResult(
                has_winner=True,
                victory_type=VictoryType.ANGEL,
                trigger_player_id=player.player_id,
                winner_id=_best_by(state, lambda p: p.faith_score - p.devil_score),
            )

        if _has_game_end_revelation(player):
            return VictoryResult(
                has_winner=True,
                victory_type=VictoryType.REVELATION,
                trigger_player_id=player.player_id,
                winner_id=player.player_id,
            )

    return VictoryResult.none()
