"""
Game Engine - Turn/phase state machine and action dispatch.

The engine is the single entry point for state transitions:
    execute_action(state, action) -> ActionResult

Design principles:
- Pure with respect to state: input snapshots are never mutated
- Rule violations fail softly with the unchanged state and no events
- Randomness comes only from the injected DiceRoller
- Victory is re-evaluated after every successful action
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterable
import logging
import uuid

from ..config import EngineConfig
from ..errors import GameSetupError
from .action_generator import ActionGenerator
from .action import Action, ActionResult, ActionType, NON_TURN_ACTIONS, ValidAction, ValidationResult
from .board import HeroClass, MoveCost, TileType, movement_cost
from .combat import apply_fire_tile_damage, heal_at_village, strike_monster, strike_player
from .dice import DiceRoller, RandomDiceRoller
from .events import GameEvent
from .hex import HexCoord, distance
from .monsters import run_monster_phase
from .revelations import complete_revelation, draw_revelation, draw_revelations
from .skills import use_skill
from .state import (
    GamePhase,
    GameState,
    HeroState,
    MONSTER_TURN,
    MonsterState,
    PlayerState,
    RevelationSource,
    Stat,
    Stats,
    TurnPhase,
)
from .victory import evaluate_victory
from .definitions.board import GAME_BOARD, starting_position
from .definitions.heroes import max_health_for
from .definitions.monsters import MONSTERS
from .definitions.revelations import REVELATIONS


logger = logging.getLogger(__name__)

# Enough to skip every dead player and run several empty rounds while
# everyone waits to respawn.
MAX_ADVANCE_STEPS = 64


@dataclass(frozen=True)
class PlayerSetup:
    """Roster entry for create_game()."""
    player_id: str
    name: str
    hero_class: HeroClass


Handler = Callable[[GameState, PlayerState, Action], ActionResult]


@dataclass
class GameEngine:
    """
    Orchestrates a game.

    Stateless apart from its dice and config - all game state is in
    GameState.
    """
    dice: DiceRoller | None = None
    config: EngineConfig = field(default_factory=EngineConfig)

    def __post_init__(self):
        if self.dice is None:
            self.dice = RandomDiceRoller(self.config.seed)

    # =========================================================================
    # Setup
    # =========================================================================

    def create_game(
        self,
        players: Iterable[PlayerSetup],
        demon_sword_position: HexCoord | None = None,
        game_id: str | None = None,
    ) -> GameState:
        """
        Create a new game.

        Heroes start on their class villages; the first rogue (if any) acts
        first, then the rest in roster order, then the monsters.
        """
        roster = list(players)
        self._validate_roster(roster)

        board = GAME_BOARD
        class_counts: dict[HeroClass, int] = {}
        player_states = []
        for setup in roster:
            index = class_counts.get(setup.hero_class, 0)
            class_counts[setup.hero_class] = index + 1
            stats = Stats()
            max_health = max_health_for(setup.hero_class, max(stats.total(s) for s in Stat))
            player_states.append(PlayerState(
                player_id=setup.player_id,
                name=setup.name,
                hero_class=setup.hero_class,
                position=starting_position(setup.hero_class, index),
                health=max_health,
                max_health=max_health,
                stats=stats,
            ))

        monsters = tuple(
            MonsterState(
                monster_id=m.id,
                name=m.name,
                position=m.position,
                health=m.max_health,
                max_health=m.max_health,
                dice_indices=m.dice_indices,
            )
            for m in MONSTERS
        )

        if demon_sword_position is None:
            candidates = sorted(t.coord for t in board if not t.is_blocked)
            demon_sword_position = candidates[self.dice.pick_index(len(candidates))]
        elif not board.is_enterable(demon_sword_position):
            raise GameSetupError(f"Demon sword cannot be placed on {demon_sword_position.key}")

        state = GameState(
            game_id=game_id or str(uuid.uuid4()),
            players=tuple(player_states),
            monsters=monsters,
            board=board,
            round_number=1,
            round_turn_order=self._initial_turn_order(roster),
            current_turn_index=0,
            monster_dice=(1,) * 6,
            revelation_deck=REVELATIONS,
            demon_sword_position=demon_sword_position,
        )

        for setup in roster:
            for _ in range(self.config.starting_revelations):
                source = self._random_source()
                state, _card = draw_revelation(state, setup.player_id, source, self.dice)

        logger.info("Created game %s with %d players", state.game_id, len(roster))
        return state

    def _validate_roster(self, roster: list[PlayerSetup]):
        if not roster:
            raise GameSetupError("A game needs at least one player")
        if len(roster) > self.config.max_players:
            raise GameSetupError(f"At most {self.config.max_players} players")
        ids = [p.player_id for p in roster]
        if len(set(ids)) != len(ids):
            raise GameSetupError("Player ids must be unique")
        if MONSTER_TURN in ids:
            raise GameSetupError(f"'{MONSTER_TURN}' is reserved")
        for setup in roster:
            if not isinstance(setup.hero_class, HeroClass):
                raise GameSetupError(f"Unknown hero class: {setup.hero_class}")

    @staticmethod
    def _initial_turn_order(roster: list[PlayerSetup]) -> tuple[str, ...]:
        first_rogue = next((p.player_id for p in roster if p.hero_class == HeroClass.ROGUE), None)
        order = [first_rogue] if first_rogue else []
        order.extend(p.player_id for p in roster if p.player_id != first_rogue)
        return tuple(order) + (MONSTER_TURN,)

    def _random_source(self) -> RevelationSource:
        sources = list(RevelationSource)
        return sources[self.dice.pick_index(len(sources))]

    # =========================================================================
    # Queries
    # =========================================================================

    @staticmethod
    def get_current_turn_entry(state: GameState) -> str | None:
        return state.current_turn_entry

    @staticmethod
    def get_current_player(state: GameState) -> PlayerState | None:
        return state.current_player

    def get_valid_actions(self, state: GameState, player_id: str | None = None) -> list[ValidAction]:
        return ActionGenerator().generate(state, player_id)

    def validate_action(
        self,
        state: GameState,
        action: Action,
        acting_player_id: str | None = None,
    ) -> ValidationResult:
        """
        Lightweight pre-check: game over, turn ownership, alive status.

        Full legality is checked by each handler.
        """
        if state.is_game_over:
            return ValidationResult.invalid("Game is over")

        entry = state.current_turn_entry
        acting_id = acting_player_id or entry

        if action.action_type in NON_TURN_ACTIONS:
            if acting_id is None or state.get_player(acting_id) is None:
                return ValidationResult.invalid("Unknown player")
            return ValidationResult.ok()

        if entry is None or entry == MONSTER_TURN:
            return ValidationResult.invalid("It is the monsters' turn")
        if acting_id != entry:
            return ValidationResult.invalid("Not your turn")
        player = state.get_player(entry)
        if player is None:
            return ValidationResult.invalid("Unknown player")
        if player.is_dead:
            return ValidationResult.invalid(f"{player.name} is dead")
        return ValidationResult.ok()

    # =========================================================================
    # Dispatch
    # =========================================================================

    def execute_action(
        self,
        state: GameState,
        action: Action,
        acting_player_id: str | None = None,
    ) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state and events, or a failure
        carrying the unchanged state.
        """
        validation = self.validate_action(state, action, acting_player_id)
        if not validation.valid:
            return ActionResult.failure(state, validation.reason, error_code="INVALID_ACTION")

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                state,
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        player = state.get_player(acting_player_id or state.current_turn_entry)
        logger.debug("%s -> %s", player.player_id, action.action_type.value)
        try:
            result = handler(state, player, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(state, str(e), error_code="HANDLER_ERROR")

        if not result.success:
            return ActionResult.failure(state, result.message, error_code=result.error_code or "RULE_VIOLATION")

        result = self._check_victory(result)
        if not result.new_state.is_game_over:
            result = self._skip_dead_current_player(result)
        return result

    def _skip_dead_current_player(self, result: ActionResult) -> ActionResult:
        # A hero who dies on their own turn forfeits the rest of it.
        state = result.new_state
        current = state.current_player
        if current is None or not current.is_dead:
            return result
        logger.debug("%s died on their own turn", current.player_id)
        state, events = self._advance_turn(self._close_turn(state, current.player_id))
        result.new_state = state
        result.events.extend(events)
        return self._check_victory(result)

    def _get_handler(self, action_type: ActionType) -> Handler | None:
        handlers: dict[ActionType, Handler] = {
            ActionType.ROLL_MOVE_DICE: self._handle_roll_move_dice,
            ActionType.MOVE: self._handle_move,
            ActionType.END_MOVE_PHASE: self._handle_end_move_phase,
            ActionType.BASIC_ATTACK: self._handle_basic_attack,
            ActionType.USE_SKILL: self._handle_use_skill,
            ActionType.ROLL_STAT_DICE: self._handle_roll_stat_dice,
            ActionType.DRAW_DEMON_SWORD: self._handle_draw_demon_sword,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.COMPLETE_REVELATION: self._handle_complete_revelation,
            ActionType.APPLY_CORRUPT_DICE: self._handle_apply_corrupt_dice,
            ActionType.CHOOSE_HOLY: self._handle_choose_holy,
        }
        return handlers.get(action_type)

    def _check_victory(self, result: ActionResult) -> ActionResult:
        state = result.new_state
        if state.is_game_over:
            return result
        victory = evaluate_victory(state)
        if not victory.has_winner:
            return result

        result.new_state = state._copy_with(
            phase=GamePhase.GAME_OVER,
            winner_id=victory.winner_id,
            victory_type=victory.victory_type.value,
        )
        result.events.append(GameEvent.game_over(victory.winner_id, victory.victory_type.value))
        logger.info(
            "Game %s over: %s victory triggered by %s, winner %s",
            state.game_id, victory.victory_type.value, victory.trigger_player_id, victory.winner_id,
        )
        return result

    # =========================================================================
    # Move phase
    # =========================================================================

    def _handle_roll_move_dice(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        if player.turn_phase != TurnPhase.MOVE:
            return ActionResult.failure(state, "Movement can only be rolled in the move phase")
        if player.remaining_movement is not None:
            return ActionResult.failure(state, "Movement already rolled this turn")

        if player.is_bound:
            roll: tuple[int, ...] = ()
            movement = 0
            player = player._copy_with(is_bound=False)
        else:
            roll = self.dice.roll_2d6()
            movement = sum(roll) + player.dexterity

        new_state = state.with_player(player._copy_with(remaining_movement=movement))
        event = GameEvent.move_dice_rolled(player.player_id, roll, movement)
        return ActionResult.success_with_state(new_state, f"Rolled {movement} movement", [event])

    def _handle_move(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        target = action.payload.position
        if player.turn_phase != TurnPhase.MOVE:
            return ActionResult.failure(state, "Not in the move phase")
        if player.remaining_movement is None:
            return ActionResult.failure(state, "Roll movement first")
        if player.remaining_movement <= 0:
            return ActionResult.failure(state, "No movement left")
        if target is None or distance(player.position, target) != 1:
            return ActionResult.failure(state, "Can only move to an adjacent tile")

        tile = state.board.get(target)
        if tile is None:
            return ActionResult.failure(state, "That tile is not on the board")

        cost = movement_cost(tile, player.is_corrupt, player.has_demon_sword)
        if cost == MoveCost.BLOCKED:
            if tile.type == TileType.TEMPLE:
                return ActionResult.failure(state, "Corrupt heroes cannot enter the temple")
            return ActionResult.failure(state, f"Cannot enter {tile.type.value}")

        if cost == MoveCost.ALL:
            remaining = 0
            phase = TurnPhase.ACTION
        else:
            if cost > player.remaining_movement:
                return ActionResult.failure(
                    state, f"Not enough movement ({player.remaining_movement} < {cost})"
                )
            remaining = player.remaining_movement - cost
            phase = TurnPhase.MOVE

        moved = player._copy_with(position=target, remaining_movement=remaining, turn_phase=phase)
        if tile.type == TileType.CASTLE and moved.is_corrupt:
            moved = moved._copy_with(knows_demon_sword_position=True)

        new_state = state.with_player(moved)
        events = [GameEvent.player_moved(player.player_id, player.position, target)]

        new_state, fire_events = apply_fire_tile_damage(new_state, player.player_id)
        events.extend(fire_events)
        new_state, trap_events = self._spring_traps(new_state, player.player_id, target)
        events.extend(trap_events)

        return ActionResult.success_with_state(new_state, f"Moved to {target.key}", events)

    def _spring_traps(self, state: GameState, player_id: str, coord: HexCoord) -> tuple[GameState, list[GameEvent]]:
        events: list[GameEvent] = []
        for owner in state.players:
            if owner.player_id == player_id or coord not in owner.traps:
                continue
            victim = state.get_player(player_id)
            if victim is None or victim.is_dead:
                break
            damage = owner.dexterity
            events.append(GameEvent.trap_triggered(owner.player_id, player_id, coord, damage))
            state, hit_events = strike_player(state, owner.player_id, player_id, damage, self.dice)
            events.extend(hit_events)
            owner = state.get_player(owner.player_id)
            state = state.with_player(owner._copy_with(
                traps=tuple(t for t in owner.traps if t != coord),
                is_stealthed=True,
            ))
        return state, events

    def _handle_end_move_phase(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        if player.turn_phase != TurnPhase.MOVE:
            return ActionResult.failure(state, "Not in the move phase")
        if player.remaining_movement is None:
            return ActionResult.failure(state, "Roll movement first")
        new_state = state.with_player(player._copy_with(turn_phase=TurnPhase.ACTION))
        return ActionResult.success_with_state(new_state, "Move phase ended")

    # =========================================================================
    # Action phase
    # =========================================================================

    def _handle_basic_attack(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        if player.turn_phase != TurnPhase.ACTION:
            return ActionResult.failure(state, "Attacks happen in the action phase")
        if player.has_used_basic_attack:
            return ActionResult.failure(state, "Already attacked this turn")

        target_id = action.payload.target_id
        target_player = state.get_player(target_id) if target_id else None
        target_monster = state.get_monster(target_id) if target_id else None
        target = target_player or target_monster
        if target is None or target.is_dead:
            return ActionResult.failure(state, "Target not found")
        if target_player is not None and target_player.player_id == player.player_id:
            return ActionResult.failure(state, "Cannot attack yourself")
        if distance(player.position, target.position) != 1:
            return ActionResult.failure(state, "Target is not adjacent")

        if target_monster is not None:
            if player.has_demon_sword:
                return ActionResult.failure(state, "The demon sword will not strike monsters")
            if target_monster.monster_id == "golem" and state.monster_round_buffs.golem_basic_attack_immune:
                return ActionResult.failure(state, "The golem shrugs off basic attacks this round")
        elif target_player.is_stealthed:
            return ActionResult.failure(state, f"{target_player.name} is hidden")

        damage = player.strength + (player.dexterity if player.poison_active else 0)
        state = state.with_player(player._copy_with(has_used_basic_attack=True, poison_active=False))

        if target_monster is not None:
            new_state, events = strike_monster(state, player.player_id, target_monster.monster_id, damage, self.dice)
        else:
            new_state, events = strike_player(state, player.player_id, target_player.player_id, damage, self.dice)
        return ActionResult.success_with_state(new_state, f"Hit {target.name} for {damage}", events)

    def _handle_use_skill(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        if player.turn_phase != TurnPhase.ACTION:
            return ActionResult.failure(state, "Skills are used in the action phase")
        payload = action.payload
        if payload.skill_id is None:
            return ActionResult.failure(state, "No skill given")

        result = use_skill(
            state,
            player.player_id,
            payload.skill_id,
            self.dice,
            target_id=payload.target_id,
            position=payload.position,
            params=payload.params,
        )
        if not result.success:
            return ActionResult.failure(state, result.message)
        return ActionResult.success_with_state(result.state, result.message, result.events)

    def _handle_roll_stat_dice(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        if player.turn_phase != TurnPhase.ACTION:
            return ActionResult.failure(state, "Stats are upgraded in the action phase")
        stat = action.payload.stat
        if stat is None:
            return ActionResult.failure(state, "No stat given")

        cost = player.level
        if player.monster_essence < cost:
            return ActionResult.failure(state, f"Need {cost} essence, have {player.monster_essence}")

        player = player._copy_with(monster_essence=player.monster_essence - cost)
        dice = player.stats.dice(stat)
        low = 0 if dice[0] <= dice[1] else 1
        roll = self.dice.roll_1d6()

        if roll <= dice[low]:
            new_state = state.with_player(player)
            return ActionResult.success_with_state(new_state, f"Rolled {roll}, {stat.value} unchanged")

        new_dice = (roll, dice[1]) if low == 0 else (dice[0], roll)
        upgraded = player._copy_with(stats=player.stats.with_dice(stat, new_dice))
        new_max = max_health_for(upgraded.hero_class, upgraded.level)
        delta = new_max - player.max_health
        upgraded = upgraded._copy_with(
            max_health=new_max,
            health=max(0, min(new_max, upgraded.health + delta)),
        )

        new_state = state.with_player(upgraded)
        event = GameEvent.stat_upgraded(player.player_id, stat.value, upgraded.stat_total(stat))
        return ActionResult.success_with_state(new_state, f"Rolled {roll}, {stat.value} upgraded", [event])

    def _handle_draw_demon_sword(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        if not player.is_corrupt:
            return ActionResult.failure(state, "Only the corrupt can draw the demon sword")
        if not player.knows_demon_sword_position:
            return ActionResult.failure(state, "You do not know where the sword lies")
        if state.demon_sword_position is None:
            return ActionResult.failure(state, "The demon sword is already taken")
        if player.position != state.demon_sword_position:
            return ActionResult.failure(state, "The demon sword is not here")

        new_state = state.with_player(player._copy_with(has_demon_sword=True))
        new_state = new_state._copy_with(demon_sword_position=None)
        return ActionResult.success_with_state(new_state, "Drew the demon sword")

    def _handle_complete_revelation(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        revelation_id = action.payload.revelation_id
        if revelation_id is None:
            return ActionResult.failure(state, "No revelation given")
        result = complete_revelation(state, player.player_id, revelation_id, self.dice)
        if not result.success:
            return ActionResult.failure(state, result.message)
        return ActionResult.success_with_state(result.state, result.message, result.events)

    def _handle_apply_corrupt_dice(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        stat = action.payload.stat
        if player.corrupt_dice is None:
            return ActionResult.failure(state, "No corrupt die to apply")
        if player.corrupt_dice_target is not None:
            return ActionResult.failure(state, "Corrupt die already applied")
        if stat is None:
            return ActionResult.failure(state, "No stat given")
        new_state = state.with_player(player._copy_with(corrupt_dice_target=stat))
        return ActionResult.success_with_state(new_state, f"Corrupt die applied to {stat.value}")

    def _handle_choose_holy(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        if not player.is_corrupt:
            return ActionResult.failure(state, "Already holy")
        new_state = state.with_player(player._copy_with(
            state=HeroState.HOLY,
            corrupt_dice=None,
            corrupt_dice_target=None,
        ))
        return ActionResult.success_with_state(new_state, f"{player.name} returns to the light")

    # =========================================================================
    # Turn and round flow
    # =========================================================================

    def _handle_end_turn(self, state: GameState, player: PlayerState, action: Action) -> ActionResult:
        if player.turn_phase == TurnPhase.MOVE:
            return ActionResult.failure(state, "Finish the move phase first")

        events: list[GameEvent] = []
        state, healed = heal_at_village(state, player.player_id)
        if healed:
            events.append(GameEvent.player_healed(player.player_id, healed))

        state = self._close_turn(state, player.player_id)
        state, turn_events = self._advance_turn(state)
        events.extend(turn_events)
        return ActionResult.success_with_state(state, "Turn ended", events)

    @staticmethod
    def _close_turn(state: GameState, player_id: str) -> GameState:
        """Bank leftover movement and reset per-turn counters."""
        player = state.get_player(player_id)
        return state.with_player(player._copy_with(
            leftover_movement=player.remaining_movement or 0,
            remaining_movement=None,
            turn_phase=TurnPhase.MOVE,
            used_skill_cost=0,
            has_used_basic_attack=False,
        ))

    def _advance_turn(self, state: GameState) -> tuple[GameState, list[GameEvent]]:
        """Move to the next living player, running round ends on the way."""
        events: list[GameEvent] = []
        index = state.current_turn_index + 1

        for _ in range(MAX_ADVANCE_STEPS):
            order = state.round_turn_order
            entry = order[index] if index < len(order) else MONSTER_TURN
            if entry == MONSTER_TURN:
                state = state._copy_with(current_turn_index=min(index, len(order) - 1))
                state, round_events = self._end_round(state)
                events.extend(round_events)
                index = 0
                continue

            player = state.get_player(entry)
            if player is not None and not player.is_dead:
                state = state._copy_with(current_turn_index=index)
                return self._begin_turn(state, player), events
            index += 1

        logger.warning("Game %s: no living player found after %d steps", state.game_id, MAX_ADVANCE_STEPS)
        return state, events

    def _begin_turn(self, state: GameState, player: PlayerState) -> GameState:
        return state.with_player(player._copy_with(
            iron_stance_active=False,
            turn_phase=TurnPhase.MOVE,
            remaining_movement=None,
        ))

    def _end_round(self, state: GameState) -> tuple[GameState, list[GameEvent]]:
        """Monster phase, respawns, cooldown decay and next round's order."""
        state, events = run_monster_phase(state, self.dice)

        for player_id in [p.player_id for p in state.players]:
            player = state.get_player(player_id)
            if not player.is_dead:
                continue
            turns = max(0, player.death_turns_remaining - 1)
            if turns > 0:
                state = state.with_player(player._copy_with(death_turns_remaining=turns))
                continue

            position = starting_position(player.hero_class, 0)
            state = state.with_player(player._copy_with(
                is_dead=False,
                death_turns_remaining=0,
                health=player.max_health // 2,
                position=position,
                turn_phase=TurnPhase.MOVE,
                remaining_movement=None,
            ))
            events.append(GameEvent.player_respawned(player_id, position))
            state, drawn = draw_revelations(state, player_id, self._random_source(), 1, self.dice)
            events.extend(drawn)

        state = state._copy_with(players=tuple(
            p._copy_with(skill_cooldowns={k: max(0, v - 1) for k, v in p.skill_cooldowns.items()})
            for p in state.players
        ))

        living = [p for p in state.players if not p.is_dead]
        living.sort(key=lambda p: p.leftover_movement, reverse=True)
        order = tuple(p.player_id for p in living) + (MONSTER_TURN,)

        state = state._copy_with(
            round_turn_order=order,
            current_turn_index=0,
            round_number=state.round_number + 1,
        )
        logger.info("Game %s: round %d begins, order %s", state.game_id, state.round_number, order)
        return state, events


def create_game(
    players: Iterable[PlayerSetup],
    demon_sword_position: HexCoord | None = None,
    dice: DiceRoller | None = None,
) -> GameState:
    """Convenience function to create a game with a throwaway engine."""
    return GameEngine(dice=dice).create_game(players, demon_sword_position)


def execute_action(
    state: GameState,
    action: Action,
    dice: DiceRoller | None = None,
    acting_player_id: str | None = None,
) -> ActionResult:
    """Convenience function to apply an action."""
    return GameEngine(dice=dice).execute_action(state, action, acting_player_id)
