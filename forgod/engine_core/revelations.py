"""
Revelation System - Goal cards: drawing, completing and rewards.

The deck is part of GameState; drawing removes a card from the shared deck
and returns a new state.

Cards complete in one of three ways:
1. TASK cards through the COMPLETE_REVELATION action, after the task
   predicate is re-checked
2. EVENT cards automatically, the moment a matching combat event happens
3. The PROTECTION card (angel-7) when its holder would die to a corrupt hero
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from .board import TileType
from .dice import DiceRoller
from .events import GameEvent
from .state import (
    GamePhase,
    GameState,
    HeroState,
    PlayerState,
    Revelation,
    RevelationSource,
    RevelationTrigger,
)
from .definitions.heroes import MAX_CORRUPT_DICE
from .definitions.monsters import END_MONSTER_ID


logger = logging.getLogger(__name__)

REVELATION_VICTORY = "revelation"
ANGEL_PROTECTION_ID = "angel-7"


@dataclass(frozen=True)
class CombatObservation:
    """What happened in a single hero attack, as seen by event cards."""
    attacker_id: str
    target_id: str
    target_is_monster: bool
    target_died: bool
    attacker_was_holy: bool
    target_on_village: bool = False
    target_is_partner: bool = False


@dataclass
class RevelationResult:
    success: bool
    state: GameState
    message: str = ""
    events: list[GameEvent] = field(default_factory=list)


@dataclass
class ProtectionResult:
    protected: bool
    state: GameState
    events: list[GameEvent] = field(default_factory=list)


# =============================================================================
# Task predicates
# =============================================================================

def _on_tile(state: GameState, player: PlayerState, tile_type: TileType) -> bool:
    return state.board.is_type(player.position, tile_type)


def _at_temple(state: GameState, player: PlayerState) -> bool:
    return _on_tile(state, player, TileType.TEMPLE)


def _at_castle(state: GameState, player: PlayerState) -> bool:
    return _on_tile(state, player, TileType.CASTLE)


def _faithful_at_castle(state: GameState, player: PlayerState) -> bool:
    return player.faith_score >= 5 and _at_castle(state, player)


def _highest_level(state: GameState, player: PlayerState) -> bool:
    return player.level >= max(p.level for p in state.players)


def _proven_corrupt(state: GameState, player: PlayerState) -> bool:
    return (player.corrupt_dice or 0) >= 3


def _holds_sword(state: GameState, player: PlayerState) -> bool:
    return player.has_demon_sword


TaskPredicate = Callable[[GameState, PlayerState], bool]

TASK_PREDICATES: dict[str, TaskPredicate] = {
    "angel-1": _at_temple,
    "angel-2": _at_temple,
    "angel-3": _at_temple,
    "angel-4": _at_temple,
    "angel-8": _at_temple,
    "angel-9": _faithful_at_castle,
    "demon-1": _at_castle,
    "demon-2": _at_castle,
    "demon-3": _at_castle,
    "demon-5": _highest_level,
    "demon-9": _proven_corrupt,
    "demon-10": _holds_sword,
}


# =============================================================================
# Event predicates
# =============================================================================

EventPredicate = Callable[[CombatObservation], bool]

EVENT_PREDICATES: dict[str, EventPredicate] = {
    "angel-5": lambda o: o.target_is_monster and o.target_id == END_MONSTER_ID,
    "angel-6": lambda o: (
        o.target_is_monster and o.target_id == END_MONSTER_ID and o.target_died and o.attacker_was_holy
    ),
    "demon-4": lambda o: not o.target_is_monster and o.attacker_was_holy,
    "demon-6": lambda o: not o.target_is_monster and o.target_on_village,
    "demon-7": lambda o: not o.target_is_monster and o.target_is_partner,
    "demon-8": lambda o: not o.target_is_monster and o.target_died and o.attacker_was_holy,
}


# =============================================================================
# Deck operations
# =============================================================================

def draw_revelation(
    state: GameState,
    player_id: str,
    source: RevelationSource | None,
    dice: DiceRoller,
) -> tuple[GameState, Revelation | None]:
    """
    Move a uniformly random card of the given source from the deck to a hand.

    source=None draws from the whole deck. An empty match draws nothing.
    """
    player = state.get_player(player_id)
    if player is None:
        return state, None

    matching = [
        i for i, card in enumerate(state.revelation_deck)
        if source is None or card.source == source
    ]
    if not matching:
        return state, None

    index = matching[dice.pick_index(len(matching))]
    card = state.revelation_deck[index]
    deck = state.revelation_deck[:index] + state.revelation_deck[index + 1:]
    player = player._copy_with(revelations=player.revelations + (card,))
    logger.debug("%s drew %s", player_id, card.id)
    return state._copy_with(revelation_deck=deck).with_player(player), card


def draw_revelations(
    state: GameState,
    player_id: str,
    source: RevelationSource | None,
    count: int,
    dice: DiceRoller,
) -> tuple[GameState, list[GameEvent]]:
    events = []
    for _ in range(count):
        state, card = draw_revelation(state, player_id, source, dice)
        if card is None:
            break
        events.append(GameEvent.revelation_drawn(player_id, card.id))
    return state, events


def can_complete_revelation(state: GameState, player: PlayerState, card: Revelation) -> bool:
    """Whether a task card's predicate and sacrifice cost are met right now."""
    if card.trigger != RevelationTrigger.TASK:
        return False
    predicate = TASK_PREDICATES.get(card.id)
    if predicate is None or not predicate(state, player):
        return False
    return player.sacrifices >= card.sacrifice_cost


def complete_revelation(
    state: GameState,
    player_id: str,
    revelation_id: str,
    dice: DiceRoller,
) -> RevelationResult:
    """Complete a task card from the player's hand."""
    player = state.get_player(player_id)
    if player is None:
        return RevelationResult(False, state, f"Unknown player: {player_id}")

    card = player.get_revelation(revelation_id)
    if card is None:
        return RevelationResult(False, state, f"{revelation_id} is not in hand")
    if card.trigger != RevelationTrigger.TASK:
        return RevelationResult(False, state, f"{card.name} completes automatically")
    if not can_complete_revelation(state, player, card):
        return RevelationResult(False, state, f"Task not completed: {card.task}")

    if card.sacrifice_cost:
        state = state.with_player(player._copy_with(sacrifices=player.sacrifices - card.sacrifice_cost))

    state, events = _finish(state, player_id, card, dice)
    return RevelationResult(True, state, f"Completed {card.name}", events)


def _finish(
    state: GameState,
    player_id: str,
    card: Revelation,
    dice: DiceRoller,
) -> tuple[GameState, list[GameEvent]]:
    """Move a card to the completed list and pay its reward."""
    player = state.get_player(player_id)
    hand = tuple(r for r in player.revelations if r.id != card.id)
    reward = card.reward

    changes = dict(
        revelations=hand,
        completed_revelations=player.completed_revelations + (card,),
        devil_score=player.devil_score + reward.devil_score,
        faith_score=player.faith_score + reward.faith_score,
    )
    if reward.corrupt_score:
        changes["state"] = HeroState.CORRUPT
        changes["corrupt_dice"] = min(MAX_CORRUPT_DICE, (player.corrupt_dice or 0) + reward.corrupt_score)

    state = state.with_player(player._copy_with(**changes))
    events = [GameEvent.revelation_completed(player_id, card.id)]
    logger.info("%s completed revelation %s", player_id, card.id)

    if card.is_game_end:
        state = state._copy_with(
            phase=GamePhase.GAME_OVER,
            winner_id=player_id,
            victory_type=REVELATION_VICTORY,
        )
        events.append(GameEvent.game_over(player_id, REVELATION_VICTORY))
        return state, events

    if reward.extra_revelations:
        state, drawn = draw_revelations(state, player_id, card.source, reward.extra_revelations, dice)
        events.extend(drawn)

    return state, events


# =============================================================================
# Automatic completion
# =============================================================================

def process_event_revelations(
    state: GameState,
    observation: CombatObservation,
    dice: DiceRoller,
) -> tuple[GameState, list[GameEvent]]:
    """Complete every event card in the attacker's hand that the attack satisfies."""
    attacker = state.get_player(observation.attacker_id)
    if attacker is None:
        return state, []

    events: list[GameEvent] = []
    for card in attacker.revelations:
        if card.trigger != RevelationTrigger.EVENT:
            continue
        predicate = EVENT_PREDICATES.get(card.id)
        if predicate is None or not predicate(observation):
            continue
        state, card_events = _finish(state, observation.attacker_id, card, dice)
        events.extend(card_events)
        if state.is_game_over:
            break
    return state, events


def check_angel7_protection(
    state: GameState,
    target_id: str,
    attacker_id: str,
    damage: int,
    dice: DiceRoller,
) -> ProtectionResult:
    """
    Guard against a fatal hit from a corrupt hero.

    Must run before the damage is applied. When it fires the target is
    left on 1 health and the card completes.
    """
    target = state.get_player(target_id)
    attacker = state.get_player(attacker_id)
    if target is None or attacker is None or target.is_dead:
        return ProtectionResult(False, state)
    if not attacker.is_corrupt or damage < target.health:
        return ProtectionResult(False, state)

    card = target.get_revelation(ANGEL_PROTECTION_ID)
    if card is None:
        return ProtectionResult(False, state)

    events = [GameEvent.player_attacked(attacker_id, target_id, target.health - 1)]
    state = state.with_player(target._copy_with(health=1))
    state, card_events = _finish(state, target_id, card, dice)
    logger.info("%s saved by angel's protection", target_id)
    return ProtectionResult(True, state, events + card_events)
