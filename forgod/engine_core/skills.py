"""
Skill System - Validation, per-skill handlers and the shared post-step.

Each skill id maps to a handler taking a SkillContext and returning a
SkillResult. Handlers only resolve their own geometry and damage. Cost and
cooldown bookkeeping happens once, in use_skill(), from the skill table.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable
import logging

from .board import HeroClass, MoveCost, TileType, movement_cost
from .dice import DiceRoller
from .events import GameEvent
from .hex import HexCoord, direction_between, distance, neighbors, walk
from .state import CloneInfo, GameState, MonsterState, PlayerState
from .combat import apply_damage_to_player, strike_monster, strike_player
from .definitions.heroes import MAX_TRAPS
from .definitions.skills import SKILLS_BY_ID, SkillDefinition, skills_for_class


logger = logging.getLogger(__name__)

LINE_RANGE = 3


@dataclass
class SkillContext:
    state: GameState
    player: PlayerState
    skill: SkillDefinition
    dice: DiceRoller
    target_id: str | None = None
    position: HexCoord | None = None
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class SkillResult:
    success: bool
    state: GameState
    message: str = ""
    events: list[GameEvent] = field(default_factory=list)

    @classmethod
    def failure(cls, state: GameState, message: str) -> SkillResult:
        return cls(False, state, message)


SkillHandler = Callable[[SkillContext], SkillResult]


def can_use_skill(state: GameState, player_id: str, skill_id: str) -> tuple[bool, str | None]:
    """
    Check, in order: skill exists, class matches, off cooldown, budget.

    Returns (ok, reason).
    """
    player = state.get_player(player_id)
    if player is None:
        return False, f"Unknown player: {player_id}"
    skill = SKILLS_BY_ID.get(skill_id)
    if skill is None:
        return False, f"Unknown skill: {skill_id}"
    if skill.hero_class != player.hero_class:
        return False, f"{skill.name} is not a {player.hero_class.value} skill"
    if player.cooldown(skill_id) > 0:
        return False, f"{skill.name} is on cooldown ({player.cooldown(skill_id)})"
    if player.used_skill_cost + skill.cost > player.intelligence:
        return False, (
            f"Not enough intelligence for {skill.name} "
            f"({player.used_skill_cost} + {skill.cost} > {player.intelligence})"
        )
    return True, None


def use_skill(
    state: GameState,
    player_id: str,
    skill_id: str,
    dice: DiceRoller,
    target_id: str | None = None,
    position: HexCoord | None = None,
    params: dict[str, Any] | None = None,
) -> SkillResult:
    """Validate, run the handler, then apply cost and cooldown."""
    ok, reason = can_use_skill(state, player_id, skill_id)
    if not ok:
        return SkillResult.failure(state, reason)

    skill = SKILLS_BY_ID[skill_id]
    handler = SKILL_HANDLERS.get(skill_id)
    if handler is None:
        return SkillResult.failure(state, f"No handler for skill: {skill_id}")

    ctx = SkillContext(
        state=state,
        player=state.get_player(player_id),
        skill=skill,
        dice=dice,
        target_id=target_id,
        position=position,
        params=params or {},
    )
    result = handler(ctx)
    if not result.success:
        return SkillResult.failure(state, result.message)

    result.state = _after_skill(result.state, player_id, skill)
    logger.debug("%s used %s", player_id, skill_id)
    return result


def _after_skill(state: GameState, player_id: str, skill: SkillDefinition) -> GameState:
    player = state.get_player(player_id)
    if player is None:
        return state
    cooldowns = dict(player.skill_cooldowns)
    cooldowns[skill.id] = skill.cooldown
    changes: dict[str, Any] = dict(
        skill_cooldowns=cooldowns,
        used_skill_cost=player.used_skill_cost + skill.cost,
    )
    if skill.hero_class == HeroClass.MAGE and skill.id != "mage-enhance":
        changes["is_enhanced"] = False
    return state.with_player(player._copy_with(**changes))


# =============================================================================
# Targeting helpers
# =============================================================================

def _find_unit(state: GameState, unit_id: str | None) -> PlayerState | MonsterState | None:
    if unit_id is None:
        return None
    unit = state.get_player(unit_id) or state.get_monster(unit_id)
    if unit is None or unit.is_dead:
        return None
    return unit


def _targetable_hero(ctx: SkillContext) -> tuple[PlayerState | None, str | None]:
    target = ctx.state.get_player(ctx.target_id) if ctx.target_id else None
    if target is None or target.is_dead:
        return None, "Target hero not found"
    if target.player_id == ctx.player.player_id:
        return None, "Cannot target yourself"
    if target.is_stealthed:
        return None, f"{target.name} is hidden"
    return target, None


def _targetable_unit(ctx: SkillContext) -> tuple[PlayerState | MonsterState | None, str | None]:
    unit = _find_unit(ctx.state, ctx.target_id)
    if unit is None:
        return None, "Target not found"
    if isinstance(unit, PlayerState):
        return _targetable_hero(ctx)
    return unit, None


def _strike(ctx: SkillContext, state: GameState, unit, damage: int) -> tuple[GameState, list[GameEvent]]:
    if isinstance(unit, MonsterState):
        return strike_monster(state, ctx.player.player_id, unit.monster_id, damage, ctx.dice)
    return strike_player(state, ctx.player.player_id, unit.player_id, damage, ctx.dice)


def _strike_all(ctx: SkillContext, units: list, damage: int) -> SkillResult:
    state = ctx.state
    events: list[GameEvent] = []
    for unit in units:
        state, hit_events = _strike(ctx, state, unit, damage)
        events.extend(hit_events)
        if state.is_game_over:
            break
    return SkillResult(True, state, f"{ctx.skill.name} hit {len(units)} target(s)", events)


def _heroes_at(ctx: SkillContext, coord: HexCoord) -> list[PlayerState]:
    return [
        p for p in ctx.state.players_at(coord)
        if p.player_id != ctx.player.player_id and not p.is_stealthed
    ]


def _units_at(ctx: SkillContext, coord: HexCoord, include_monsters: bool = True) -> list:
    units: list = list(_heroes_at(ctx, coord))
    monster = ctx.state.monster_at(coord)
    if include_monsters and monster is not None:
        units.append(monster)
    return units


def _can_stand(state: GameState, coord: HexCoord, hero: PlayerState) -> bool:
    """Enterable by this hero and not occupied."""
    tile = state.board.get(coord)
    if tile is None:
        return False
    if movement_cost(tile, hero.is_corrupt, hero.has_demon_sword) == MoveCost.BLOCKED:
        return False
    return not state.is_occupied(coord)


def _move(state: GameState, player: PlayerState, to: HexCoord) -> tuple[GameState, GameEvent]:
    event = GameEvent.player_moved(player.player_id, player.position, to)
    return state.with_player(player._copy_with(position=to)), event


def _line_direction(ctx: SkillContext) -> int | None:
    if ctx.position is None:
        return None
    return direction_between(ctx.player.position, ctx.position)


def _line_tiles(ctx: SkillContext, direction: int) -> list[HexCoord]:
    """Tiles along a direction, stopping before a mountain or the board edge."""
    tiles = []
    for coord in walk(ctx.player.position, direction, LINE_RANGE):
        tile = ctx.state.board.get(coord)
        if tile is None or tile.type == TileType.MOUNTAIN:
            break
        tiles.append(coord)
    return tiles


# =============================================================================
# Warrior
# =============================================================================

def _charge(ctx: SkillContext) -> SkillResult:
    target, error = _targetable_unit(ctx)
    if target is None:
        return SkillResult.failure(ctx.state, error)
    if distance(ctx.player.position, target.position) != 2:
        return SkillResult.failure(ctx.state, "Charge needs a target exactly 2 tiles away")

    landing = [c for c in neighbors(target.position) if _can_stand(ctx.state, c, ctx.player)]
    if not landing:
        return SkillResult.failure(ctx.state, "No free tile next to the target")
    landing.sort(key=lambda c: distance(ctx.player.position, c))

    reduce_id = ctx.params.get("cooldown_skill_id")
    own_skills = [s.id for s in skills_for_class(ctx.player.hero_class) if s.id != ctx.skill.id]
    if reduce_id is not None and reduce_id not in own_skills:
        return SkillResult.failure(ctx.state, f"Cannot reduce cooldown of {reduce_id}")
    if reduce_id is None:
        reduce_id = next((s for s in own_skills if ctx.player.cooldown(s) > 0), None)

    cooldowns = dict(ctx.player.skill_cooldowns)
    if reduce_id is not None and cooldowns.get(reduce_id, 0) > 0:
        cooldowns[reduce_id] -= 1

    player = ctx.player._copy_with(skill_cooldowns=cooldowns)
    state, event = _move(ctx.state, player, landing[0])
    return SkillResult(True, state, f"Charged to {landing[0].key}", [event])


def _power_strike(ctx: SkillContext) -> SkillResult:
    target, error = _targetable_unit(ctx)
    if target is None:
        return SkillResult.failure(ctx.state, error)
    if distance(ctx.player.position, target.position) != 1:
        return SkillResult.failure(ctx.state, "Power Strike needs an adjacent target")
    return _strike_all(ctx, [target], ctx.player.strength * 2)


def _throw(ctx: SkillContext) -> SkillResult:
    target, error = _targetable_hero(ctx)
    if target is None:
        return SkillResult.failure(ctx.state, error)
    if distance(ctx.player.position, target.position) != 1:
        return SkillResult.failure(ctx.state, "Throw needs an adjacent hero")
    if ctx.position is None or ctx.position == target.position:
        return SkillResult.failure(ctx.state, "Throw needs a destination")
    if distance(ctx.player.position, ctx.position) > 2:
        return SkillResult.failure(ctx.state, "Destination is too far")

    tile = ctx.state.board.get(ctx.position)
    if tile is None:
        return SkillResult.failure(ctx.state, "Destination is off the board")
    if tile.type == TileType.MOUNTAIN:
        return _strike_all(ctx, [target], ctx.player.strength)
    if not _can_stand(ctx.state, ctx.position, target):
        return SkillResult.failure(ctx.state, "Cannot throw there")

    state, event = _move(ctx.state, target, ctx.position)
    return SkillResult(True, state, f"Threw {target.name}", [event])


def _iron_stance(ctx: SkillContext) -> SkillResult:
    state = ctx.state.with_player(ctx.player._copy_with(iron_stance_active=True))
    return SkillResult(True, state, "Iron Stance active")


def _sword_wave(ctx: SkillContext) -> SkillResult:
    direction = _line_direction(ctx)
    if direction is None:
        return SkillResult.failure(ctx.state, "Sword Wave needs a direction")
    units = [u for coord in _line_tiles(ctx, direction) for u in _units_at(ctx, coord)]
    if not units:
        return SkillResult.failure(ctx.state, "No target in that direction")
    return _strike_all(ctx, units, ctx.player.strength)


# =============================================================================
# Rogue
# =============================================================================

def _poison(ctx: SkillContext) -> SkillResult:
    state = ctx.state.with_player(ctx.player._copy_with(poison_active=True))
    return SkillResult(True, state, "Blade poisoned")


def _shadow_trap(ctx: SkillContext) -> SkillResult:
    position = ctx.position or ctx.player.position
    if distance(ctx.player.position, position) > 1:
        return SkillResult.failure(ctx.state, "Traps go on your tile or an adjacent one")
    if not ctx.state.board.is_enterable(position):
        return SkillResult.failure(ctx.state, "Cannot set a trap there")
    if position in ctx.player.traps:
        return SkillResult.failure(ctx.state, "There is already a trap there")

    traps = (ctx.player.traps + (position,))[-MAX_TRAPS:]
    state = ctx.state.with_player(ctx.player._copy_with(traps=traps))
    return SkillResult(True, state, f"Trap set at {position.key}")


def _backstab(ctx: SkillContext) -> SkillResult:
    target, error = _targetable_hero(ctx)
    if target is None:
        return SkillResult.failure(ctx.state, error)
    if distance(ctx.player.position, target.position) != 1:
        return SkillResult.failure(ctx.state, "Backstab needs an adjacent hero")

    behind = target.position + (target.position - ctx.player.position)
    if not _can_stand(ctx.state, behind, ctx.player):
        return SkillResult.failure(ctx.state, "Cannot get behind the target")

    state, event = _move(ctx.state, ctx.player, behind)
    ctx.state = state
    result = _strike_all(ctx, [target], ctx.player.dexterity)
    result.events.insert(0, event)
    return result


def _stealth(ctx: SkillContext) -> SkillResult:
    state = ctx.state.with_player(ctx.player._copy_with(is_stealthed=True))
    return SkillResult(True, state, "Vanished")


def _shuriken(ctx: SkillContext) -> SkillResult:
    direction = _line_direction(ctx)
    if direction is None:
        return SkillResult.failure(ctx.state, "Shuriken needs a direction")
    for step, coord in enumerate(_line_tiles(ctx, direction), start=1):
        units = _units_at(ctx, coord)
        if units:
            damage = ctx.player.dexterity * (2 if step >= 2 else 1)
            return _strike_all(ctx, units[:1], damage)
    return SkillResult.failure(ctx.state, "No target in that direction")


# =============================================================================
# Mage
# =============================================================================

def _enhance(ctx: SkillContext) -> SkillResult:
    if ctx.player.is_enhanced:
        return SkillResult.failure(ctx.state, "Already enhanced")
    state = ctx.state.with_player(ctx.player._copy_with(is_enhanced=True))
    return SkillResult(True, state, "Next skill enhanced")


def _power(ctx: SkillContext) -> int:
    return ctx.player.intelligence * (2 if ctx.player.is_enhanced else 1)


def _magic_arrow(ctx: SkillContext) -> SkillResult:
    target, error = _targetable_unit(ctx)
    if target is None:
        return SkillResult.failure(ctx.state, error)

    reach = 1 if isinstance(target, MonsterState) else 2
    origins = [ctx.player.position]
    clone = ctx.state.clone_of(ctx.player.player_id)
    if ctx.player.is_enhanced and clone is not None:
        origins.append(clone.position)
    if min(distance(o, target.position) for o in origins) > reach:
        return SkillResult.failure(ctx.state, "Target out of range")
    return _strike_all(ctx, [target], _power(ctx))


def _clone(ctx: SkillContext) -> SkillResult:
    existing = ctx.state.clone_of(ctx.player.player_id)
    others = tuple(c for c in ctx.state.clones if c.owner_id != ctx.player.player_id)

    if ctx.player.is_enhanced and existing is not None:
        swapped = CloneInfo(ctx.player.player_id, ctx.player.position)
        state, event = _move(ctx.state, ctx.player, existing.position)
        return SkillResult(True, state._copy_with(clones=others + (swapped,)), "Swapped with clone", [event])

    clone = CloneInfo(ctx.player.player_id, ctx.player.position)
    return SkillResult(True, ctx.state._copy_with(clones=others + (clone,)), "Clone created")


def _burst(ctx: SkillContext) -> SkillResult:
    units = [u for coord in neighbors(ctx.player.position) for u in _units_at(ctx, coord)]
    return _strike_all(ctx, units, _power(ctx))


def _meteor(ctx: SkillContext) -> SkillResult:
    if ctx.position is None or ctx.position not in ctx.state.board:
        return SkillResult.failure(ctx.state, "Meteor needs a tile on the board")
    immune = ctx.state.monster_round_buffs.meteor_immune
    units = _units_at(ctx, ctx.position, include_monsters=not immune)
    damage = _power(ctx)
    result = _strike_all(ctx, units, damage)

    # The caster is caught in their own blast.
    caster_id = ctx.player.player_id
    if ctx.player.position == ctx.position and not result.state.is_game_over:
        result.state, hit_events = apply_damage_to_player(result.state, caster_id, damage, caster_id)
        result.events.extend(hit_events)
    return result


SKILL_HANDLERS: dict[str, SkillHandler] = {
    "warrior-charge": _charge,
    "warrior-power-strike": _power_strike,
    "warrior-throw": _throw,
    "warrior-iron-stance": _iron_stance,
    "warrior-sword-wave": _sword_wave,
    "rogue-poison": _poison,
    "rogue-shadow-trap": _shadow_trap,
    "rogue-backstab": _backstab,
    "rogue-stealth": _stealth,
    "rogue-shuriken": _shuriken,
    "mage-enhance": _enhance,
    "mage-magic-arrow": _magic_arrow,
    "mage-clone": _clone,
    "mage-burst": _burst,
    "mage-meteor": _meteor,
}
