"""
Action Generator - Enumerates legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to show available actions
3. GameEngine.get_valid_actions()

Design: Generates fully-specified Action objects with descriptions.
Skill targets are found by dry-running the skill against a scratch dice
roller, so the generator can never disagree with the skill handlers.
"""

from __future__ import annotations

from .action import Action, ValidAction
from .board import MoveCost, movement_cost
from .dice import ScriptedDiceRoller
from .hex import HexCoord, coords_in_range, distance, neighbors
from .revelations import can_complete_revelation
from .skills import can_use_skill, use_skill
from .state import GameState, MONSTER_TURN, PlayerState, Stat, TurnPhase
from .definitions.skills import SkillDefinition, SkillTargeting, skills_for_class


class ActionGenerator:
    """Generates legal actions for a player."""

    def generate(self, state: GameState, player_id: str | None = None) -> list[ValidAction]:
        """
        Legal actions for player_id, or for the current player.

        A player who is not on turn only gets the off-turn actions.
        """
        if state.is_game_over:
            return []

        entry = state.current_turn_entry
        player_id = player_id or entry
        if player_id is None or player_id == MONSTER_TURN:
            return []
        player = state.get_player(player_id)
        if player is None:
            return []

        if player_id != entry or player.is_dead:
            return self._off_turn_actions(player)

        actions: list[ValidAction] = []
        if player.turn_phase == TurnPhase.MOVE:
            actions.extend(self._move_phase_actions(state, player))
        else:
            actions.extend(self._action_phase_actions(state, player))
        actions.extend(self._revelation_actions(state, player))
        actions.extend(self._off_turn_actions(player))
        return actions

    # =========================================================================
    # Move phase
    # =========================================================================

    def _move_phase_actions(self, state: GameState, player: PlayerState) -> list[ValidAction]:
        if player.remaining_movement is None:
            return [ValidAction(Action.roll_move_dice(), "Roll for movement")]

        actions = []
        if player.remaining_movement > 0:
            for coord in neighbors(player.position):
                tile = state.board.get(coord)
                if tile is None:
                    continue
                cost = movement_cost(tile, player.is_corrupt, player.has_demon_sword)
                if cost == MoveCost.BLOCKED:
                    continue
                if cost == MoveCost.ALL:
                    actions.append(ValidAction(Action.move(coord), f"Climb the hill at {coord.key}"))
                elif cost <= player.remaining_movement:
                    actions.append(ValidAction(
                        Action.move(coord), f"Move to {tile.type.value} at {coord.key} (cost {cost})"
                    ))
        actions.append(ValidAction(Action.end_move_phase(), "End the move phase"))
        return actions

    # =========================================================================
    # Action phase
    # =========================================================================

    def _action_phase_actions(self, state: GameState, player: PlayerState) -> list[ValidAction]:
        actions: list[ValidAction] = []
        actions.extend(self._basic_attack_actions(state, player))
        actions.extend(self._skill_actions(state, player))

        if player.monster_essence >= player.level:
            for stat in Stat:
                actions.append(ValidAction(
                    Action.roll_stat_dice(stat),
                    f"Spend {player.level} essence to upgrade {stat.value}",
                ))

        if (
            player.is_corrupt
            and player.knows_demon_sword_position
            and state.demon_sword_position is not None
            and player.position == state.demon_sword_position
        ):
            actions.append(ValidAction(Action.draw_demon_sword(), "Draw the demon sword"))

        actions.append(ValidAction(Action.end_turn(), "End turn"))
        return actions

    def _basic_attack_actions(self, state: GameState, player: PlayerState) -> list[ValidAction]:
        if player.has_used_basic_attack:
            return []
        actions = []
        for other in state.players:
            if other.player_id == player.player_id or other.is_dead or other.is_stealthed:
                continue
            if distance(player.position, other.position) == 1:
                actions.append(ValidAction(Action.basic_attack(other.player_id), f"Attack {other.name}"))
        if not player.has_demon_sword:
            golem_immune = state.monster_round_buffs.golem_basic_attack_immune
            for monster in state.monsters:
                if monster.is_dead or distance(player.position, monster.position) != 1:
                    continue
                if monster.monster_id == "golem" and golem_immune:
                    continue
                actions.append(ValidAction(Action.basic_attack(monster.monster_id), f"Attack {monster.name}"))
        return actions

    def _skill_actions(self, state: GameState, player: PlayerState) -> list[ValidAction]:
        actions = []
        for skill in skills_for_class(player.hero_class):
            ok, _reason = can_use_skill(state, player.player_id, skill.id)
            if not ok:
                continue
            for candidate in self._skill_candidates(state, player, skill):
                if self._dry_run(state, player, candidate):
                    actions.append(ValidAction(candidate, self._describe_skill(state, skill, candidate)))
        return actions

    def _skill_candidates(self, state: GameState, player: PlayerState, skill: SkillDefinition) -> list[Action]:
        targeting = skill.targeting
        if targeting == SkillTargeting.NONE:
            return [Action.use_skill(skill.id)]

        if targeting in (SkillTargeting.UNIT, SkillTargeting.HERO):
            ids = [p.player_id for p in state.players if p.player_id != player.player_id and not p.is_dead]
            if targeting == SkillTargeting.UNIT:
                ids += [m.monster_id for m in state.monsters if not m.is_dead]
            return [Action.use_skill(skill.id, target_id=unit_id) for unit_id in ids]

        if targeting == SkillTargeting.POSITION:
            coords = self._candidate_positions(state, player)
            if skill.id == "mage-meteor":
                # Meteor lands anywhere; only offer tiles with something else to hit.
                coords = [c for c in coords if c != player.position and _has_unit(state, c)]
            return [Action.use_skill(skill.id, position=c) for c in coords]

        heroes = [
            p.player_id for p in state.players
            if p.player_id != player.player_id and not p.is_dead
            and distance(p.position, player.position) == 1
        ]
        return [
            Action.use_skill(skill.id, target_id=hero_id, position=coord)
            for hero_id in heroes
            for coord in coords_in_range(player.position, 2)
            if coord in state.board
        ]

    @staticmethod
    def _candidate_positions(state: GameState, player: PlayerState) -> list[HexCoord]:
        coords = [player.position] + neighbors(player.position)
        coords += [p.position for p in state.players if not p.is_dead]
        coords += [m.position for m in state.monsters if not m.is_dead]
        return list(dict.fromkeys(c for c in coords if c in state.board))

    def _dry_run(self, state: GameState, player: PlayerState, action: Action) -> bool:
        payload = action.payload
        result = use_skill(
            state,
            player.player_id,
            payload.skill_id,
            ScriptedDiceRoller(),
            target_id=payload.target_id,
            position=payload.position,
            params=payload.params,
        )
        return result.success

    @staticmethod
    def _describe_skill(state: GameState, skill: SkillDefinition, action: Action) -> str:
        payload = action.payload
        parts = [f"Use {skill.name}"]
        if payload.target_id is not None:
            target = state.get_player(payload.target_id) or state.get_monster(payload.target_id)
            parts.append(f"on {target.name if target else payload.target_id}")
        if payload.position is not None:
            parts.append(f"at {payload.position.key}")
        return " ".join(parts)

    # =========================================================================
    # Either phase / off turn
    # =========================================================================

    def _revelation_actions(self, state: GameState, player: PlayerState) -> list[ValidAction]:
        return [
            ValidAction(Action.complete_revelation(card.id), f"Complete revelation: {card.name}")
            for card in player.revelations
            if can_complete_revelation(state, player, card)
        ]

    @staticmethod
    def _off_turn_actions(player: PlayerState) -> list[ValidAction]:
        actions = []
        if player.corrupt_dice is not None and player.corrupt_dice_target is None:
            for stat in Stat:
                actions.append(ValidAction(
                    Action.apply_corrupt_dice(stat),
                    f"Apply corrupt die ({player.corrupt_dice}) to {stat.value}",
                ))
        if player.is_corrupt:
            actions.append(ValidAction(Action.choose_holy(), "Renounce corruption and return to holy"))
        return actions


def legal_actions(state: GameState, player_id: str | None = None) -> list[ValidAction]:
    """Convenience function to get legal actions."""
    return ActionGenerator().generate(state, player_id)


def _has_unit(state: GameState, coord: HexCoord) -> bool:
    return bool(state.players_at(coord)) or state.monster_at(coord) is not None
