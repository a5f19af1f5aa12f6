"""
Combat Resolver - Damage, rewards, healing and tile damage.

Every function takes a GameState and returns a new one. Unknown ids are
no-ops that return the state unchanged.

The strike_* functions are the full attack paths used by basic attacks
and skills. The apply_* functions are the primitives they compose.
"""

from __future__ import annotations
import logging
import math

from .board import TileType
from .dice import DiceRoller
from .events import GameEvent
from .hex import distance
from .state import GameState, HeroState
from .definitions.heroes import (
    DEATH_RESPAWN_TURNS,
    FIRE_BASE_DAMAGE,
    MAX_CORRUPT_DICE,
    VILLAGE_OTHER_CLASS_HEAL,
    VILLAGE_SELF_CLASS_HEAL,
)
from .definitions.monsters import END_MONSTER_ID
from .revelations import CombatObservation, check_angel7_protection, process_event_revelations


logger = logging.getLogger(__name__)


def apply_damage_to_player(
    state: GameState,
    target_id: str,
    amount: int,
    attacker_id: str | None = None,
) -> tuple[GameState, list[GameEvent]]:
    """
    Subtract health, flooring at 0.

    Reaching 0 marks the hero dead and starts the respawn countdown.
    """
    target = state.get_player(target_id)
    if target is None or target.is_dead:
        return state, []

    amount = max(0, amount)
    new_health = max(0, target.health - amount)
    events: list[GameEvent] = []
    if attacker_id is not None:
        events.append(GameEvent.player_attacked(attacker_id, target_id, amount))

    if new_health == 0:
        target = target._copy_with(
            health=0,
            is_dead=True,
            death_turns_remaining=DEATH_RESPAWN_TURNS,
            is_stealthed=False,
            iron_stance_active=False,
            poison_active=False,
            is_enhanced=False,
            is_bound=False,
        )
        events.append(GameEvent.player_died(target_id, attacker_id))
        logger.debug("%s died (attacker=%s)", target_id, attacker_id)
    else:
        target = target._copy_with(health=new_health)

    return state.with_player(target), events


def apply_damage_to_monster(
    state: GameState,
    monster_id: str,
    amount: int,
    attacker_id: str,
) -> tuple[GameState, list[GameEvent]]:
    """
    Damage a monster and pay the attacker essence.

    Essence is capped by the health the monster had before the hit.
    """
    monster = state.get_monster(monster_id)
    if monster is None or monster.is_dead:
        return state, []

    amount = max(0, amount)
    essence = min(amount, monster.health)
    new_health = max(0, monster.health - amount)
    events = [GameEvent.monster_attacked(attacker_id, monster_id, amount)]

    attacker = state.get_player(attacker_id)
    if attacker is not None and essence > 0:
        state = state.with_player(attacker._copy_with(monster_essence=attacker.monster_essence + essence))

    monster = monster._copy_with(health=new_health, is_dead=new_health == 0)
    state = state.with_monster(monster)

    if monster.is_dead:
        events.append(GameEvent.monster_died(monster_id, attacker_id))
        logger.info("%s slain by %s", monster_id, attacker_id)
        if monster_id == END_MONSTER_ID:
            state = state.with_buffs(fire_tile_disabled=True)
        state = distribute_sacrifices(state, monster_id, attacker_id)

    return state, events


def distribute_sacrifices(state: GameState, monster_id: str, killer_id: str) -> GameState:
    """
    Split the sacrifice pool of a slain monster.

    pool = max_health // 10. The killer takes ceil(pool / 2). The rest is
    split evenly between living heroes adjacent to the monster; whatever
    does not divide evenly is lost.
    """
    monster = state.get_monster(monster_id)
    killer = state.get_player(killer_id)
    if monster is None or killer is None:
        return state

    pool = monster.max_health // 10
    killer_share = math.ceil(pool / 2)
    remainder = pool - killer_share

    helpers = [
        p for p in state.players
        if p.player_id != killer_id and not p.is_dead and distance(p.position, monster.position) == 1
    ]
    helper_share = remainder // len(helpers) if helpers else 0

    state = state.with_player(killer._copy_with(sacrifices=killer.sacrifices + killer_share))
    if helper_share == 0:
        return state

    sharers = [killer_id] + [p.player_id for p in helpers]
    for player_id in sharers:
        player = state.get_player(player_id)
        partners = tuple(dict.fromkeys(
            player.sacrifice_partners + tuple(pid for pid in sharers if pid != player_id)
        ))
        gained = helper_share if player_id != killer_id else 0
        state = state.with_player(player._copy_with(
            sacrifices=player.sacrifices + gained,
            sacrifice_partners=partners,
        ))
    return state


def heal_at_village(state: GameState, player_id: str) -> tuple[GameState, int]:
    """
    Heal a hero standing on a village.

    Returns the new state and the amount actually healed.
    """
    player = state.get_player(player_id)
    if player is None or player.is_dead:
        return state, 0
    tile = state.board.get(player.position)
    if tile is None or tile.type != TileType.VILLAGE:
        return state, 0

    heal = VILLAGE_SELF_CLASS_HEAL if tile.village_class == player.hero_class else VILLAGE_OTHER_CLASS_HEAL
    new_health = min(player.max_health, player.health + heal)
    healed = new_health - player.health
    if healed == 0:
        return state, 0
    return state.with_player(player._copy_with(health=new_health)), healed


def apply_fire_tile_damage(state: GameState, player_id: str) -> tuple[GameState, list[GameEvent]]:
    """Burn a holy hero standing on a fire tile. Corrupt heroes are immune."""
    player = state.get_player(player_id)
    if player is None or player.is_dead:
        return state, []
    if not state.board.is_type(player.position, TileType.FIRE):
        return state, []
    if state.monster_round_buffs.fire_tile_disabled or player.is_corrupt:
        return state, []

    damage = max(0, FIRE_BASE_DAMAGE - (player.corrupt_dice or 0))
    if damage == 0:
        return state, []
    return apply_damage_to_player(state, player_id, damage)


def apply_kill_corruption(state: GameState, attacker_id: str) -> GameState:
    """A hero who kills another hero turns corrupt, or grows the corrupt die."""
    attacker = state.get_player(attacker_id)
    if attacker is None:
        return state
    if attacker.is_holy:
        attacker = attacker._copy_with(state=HeroState.CORRUPT, corrupt_dice=1)
    else:
        attacker = attacker._copy_with(
            corrupt_dice=min(MAX_CORRUPT_DICE, (attacker.corrupt_dice or 0) + 1),
        )
    return state.with_player(attacker)


def reduce_by_iron_stance(state: GameState, target_id: str, amount: int) -> int:
    target = state.get_player(target_id)
    if target is None or not target.iron_stance_active:
        return amount
    return max(0, amount - target.strength)


def reveal(state: GameState, player_id: str) -> GameState:
    """Attacking breaks stealth."""
    player = state.get_player(player_id)
    if player is None or not player.is_stealthed:
        return state
    return state.with_player(player._copy_with(is_stealthed=False))


def strike_player(
    state: GameState,
    attacker_id: str,
    target_id: str,
    damage: int,
    dice: DiceRoller,
) -> tuple[GameState, list[GameEvent]]:
    """
    A hero attacks another hero.

    Order: iron stance, angel's protection, damage, kill corruption, then
    event revelations for the attacker.
    """
    attacker = state.get_player(attacker_id)
    target = state.get_player(target_id)
    if attacker is None or target is None or target.is_dead:
        return state, []

    state = reveal(state, attacker_id)
    damage = reduce_by_iron_stance(state, target_id, damage)
    tile = state.board.get(target.position)
    observation_base = dict(
        attacker_id=attacker_id,
        target_id=target_id,
        target_is_monster=False,
        attacker_was_holy=attacker.is_holy,
        target_on_village=tile is not None and tile.type == TileType.VILLAGE,
        target_is_partner=target_id in attacker.sacrifice_partners,
    )

    guard = check_angel7_protection(state, target_id, attacker_id, damage, dice)
    if guard.protected:
        state, events = guard.state, guard.events
        died = False
    else:
        state, events = apply_damage_to_player(state, target_id, damage, attacker_id)
        died = state.get_player(target_id).is_dead
        if died:
            state = apply_kill_corruption(state, attacker_id)

    if state.is_game_over:
        return state, events

    observation = CombatObservation(target_died=died, **observation_base)
    state, revelation_events = process_event_revelations(state, observation, dice)
    return state, events + revelation_events


def strike_monster(
    state: GameState,
    attacker_id: str,
    monster_id: str,
    damage: int,
    dice: DiceRoller,
) -> tuple[GameState, list[GameEvent]]:
    """A hero attacks a monster."""
    attacker = state.get_player(attacker_id)
    monster = state.get_monster(monster_id)
    if attacker is None or monster is None or monster.is_dead:
        return state, []

    state = reveal(state, attacker_id)
    state, events = apply_damage_to_monster(state, monster_id, damage, attacker_id)
    observation = CombatObservation(
        attacker_id=attacker_id,
        target_id=monster_id,
        target_is_monster=True,
        target_died=state.get_monster(monster_id).is_dead,
        attacker_was_holy=attacker.is_holy,
    )
    state, revelation_events = process_event_revelations(state, observation, dice)
    return state, events + revelation_events
