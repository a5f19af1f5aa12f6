"""
Monster Phase - Once-per-round monster dice and per-monster effects.

Each monster id maps to a pure resolver:
    (monster, dice_sum, adjacent_heroes, state) -> MonsterEffectResult

The default resolver attacks adjacent_heroes[dice_sum % len] for dice_sum
damage. Variants compose the default with their own twist.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from .board import MoveCost, movement_cost
from .combat import apply_damage_to_player, reduce_by_iron_stance
from .dice import DiceRoller
from .events import GameEvent
from .hex import distance
from .state import GameState, MonsterState, PlayerState
from .definitions.monsters import END_MONSTER_ID


logger = logging.getLogger(__name__)

MONSTER_DICE_COUNT = 6


@dataclass
class MonsterEffectResult:
    state: GameState
    events: list[GameEvent] = field(default_factory=list)
    target_id: str | None = None
    damage: int = 0


MonsterEffect = Callable[[MonsterState, int, list[PlayerState], GameState], MonsterEffectResult]


def adjacent_heroes(state: GameState, monster: MonsterState) -> list[PlayerState]:
    """Living heroes next to a monster, in player order."""
    return [p for p in state.players if not p.is_dead and distance(p.position, monster.position) == 1]


def monster_dice_sum(dice: tuple[int, ...], monster: MonsterState) -> int:
    return sum(dice[i] for i in monster.dice_indices)


def _pick_target(dice_sum: int, adjacent: list[PlayerState]) -> PlayerState | None:
    if not adjacent:
        return None
    return adjacent[dice_sum % len(adjacent)]


def _default_attack(
    monster: MonsterState,
    dice_sum: int,
    adjacent: list[PlayerState],
    state: GameState,
    skip: Callable[[PlayerState], bool] | None = None,
) -> MonsterEffectResult:
    target = _pick_target(dice_sum, adjacent)
    if target is None:
        return MonsterEffectResult(state)
    if target.is_stealthed or target.has_demon_sword:
        return MonsterEffectResult(state)
    if skip is not None and skip(target):
        return MonsterEffectResult(state)

    damage = reduce_by_iron_stance(state, target.player_id, dice_sum)
    state, events = apply_damage_to_player(state, target.player_id, damage, monster.monster_id)
    return MonsterEffectResult(state, events, target.player_id, damage)


def _troll(monster, dice_sum, adjacent, state) -> MonsterEffectResult:
    # Corrupt heroes are only attacked on an odd sum.
    return _default_attack(
        monster, dice_sum, adjacent, state,
        skip=lambda target: target.is_corrupt and dice_sum % 2 == 0,
    )


def _hydra(monster, dice_sum, adjacent, state) -> MonsterEffectResult:
    if dice_sum < 15:
        return MonsterEffectResult(state)
    result = _default_attack(monster, dice_sum, adjacent, state)
    if result.damage > 0:
        hydra = result.state.get_monster(monster.monster_id)
        healed = min(hydra.max_health, hydra.health + result.damage * 2)
        result.state = result.state.with_monster(hydra._copy_with(health=healed))
    return result


def _harpy(monster, dice_sum, adjacent, state) -> MonsterEffectResult:
    result = _default_attack(monster, dice_sum, adjacent, state)
    if dice_sum < 7 or result.target_id is None:
        return result

    target = result.state.get_player(result.target_id)
    if target is None or target.is_dead:
        return result
    pushed_to = target.position + (target.position - monster.position)
    tile = result.state.board.get(pushed_to)
    if tile is None or result.state.is_occupied(pushed_to):
        return result
    if movement_cost(tile, target.is_corrupt, target.has_demon_sword) == MoveCost.BLOCKED:
        return result

    result.state = result.state.with_player(target._copy_with(position=pushed_to))
    result.events.append(GameEvent.player_moved(target.player_id, target.position, pushed_to))
    return result


def _grindylow(monster, dice_sum, adjacent, state) -> MonsterEffectResult:
    result = _default_attack(monster, dice_sum, adjacent, state)
    if dice_sum < 7 or result.target_id is None:
        return result
    target = result.state.get_player(result.target_id)
    if target is not None and not target.is_dead:
        result.state = result.state.with_player(target._copy_with(is_bound=True))
    return result


def _golem(monster, dice_sum, adjacent, state) -> MonsterEffectResult:
    if dice_sum == 12:
        state = state.with_buffs(golem_basic_attack_immune=True)
    return _default_attack(monster, dice_sum, adjacent, state)


def _lich(monster, dice_sum, adjacent, state) -> MonsterEffectResult:
    if dice_sum >= 15:
        state = state.with_buffs(meteor_immune=True)
    return _default_attack(monster, dice_sum, adjacent, state)


MONSTER_EFFECTS: dict[str, MonsterEffect] = {
    "harpy": _harpy,
    "grindylow": _grindylow,
    "lich": _lich,
    "troll": _troll,
    "hydra": _hydra,
    "golem": _golem,
    "balrog": _default_attack,
}


def _respawn_end_monster(state: GameState) -> tuple[GameState, list[GameEvent]]:
    """Bring a dead end monster back once the phase has resolved."""
    balrog = state.get_monster(END_MONSTER_ID)
    if balrog is None or not balrog.is_dead:
        return state, []

    state = state.with_monster(balrog._copy_with(health=balrog.max_health, is_dead=False))
    state = state.with_buffs(fire_tile_disabled=False)
    logger.info("%s respawned", END_MONSTER_ID)
    return state, [GameEvent.monster_respawned(END_MONSTER_ID)]


def run_monster_phase(state: GameState, dice: DiceRoller) -> tuple[GameState, list[GameEvent]]:
    """Roll the monster dice and resolve every living monster in table order."""
    state = state.with_buffs(golem_basic_attack_immune=False, meteor_immune=False)
    events: list[GameEvent] = []

    roll = tuple(sorted(dice.roll_many(MONSTER_DICE_COUNT)))
    state = state._copy_with(monster_dice=roll)
    events.append(GameEvent.monster_dice_rolled(roll))
    logger.debug("Monster dice: %s", roll)

    for monster_id in [m.monster_id for m in state.monsters]:
        monster = state.get_monster(monster_id)
        if monster is None or monster.is_dead:
            continue
        effect = MONSTER_EFFECTS.get(monster_id, _default_attack)
        dice_sum = monster_dice_sum(roll, monster)
        result = effect(monster, dice_sum, adjacent_heroes(state, monster), state)
        state = result.state
        events.extend(result.events)

    state, respawned = _respawn_end_monster(state)
    events.extend(respawned)
    return state, events
