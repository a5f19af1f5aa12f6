"""
API Service - Business logic layer between API and engine.

The service:
1. Translates wire requests to engine calls
2. Keeps the current GameState per game id (in memory only)
3. Converts engine results, events and errors to response models

This layer is framework-agnostic. It is not thread-safe: callers serialize
access to a single GameService.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging

from pydantic import ValidationError

from .schemas import (
    # Requests
    CreateGameRequest,
    # Responses
    ActionResultResponse,
    BoardSnapshot,
    ErrorResponse,
    GameEventModel,
    GameStateResponse,
    ValidActionInfo,
    # Helpers
    ErrorCode,
    action_to_request,
    parse_action,
)
from ..errors import GameSetupError
from ..engine_core.engine import GameEngine, PlayerSetup
from ..engine_core.state import GameState


logger = logging.getLogger(__name__)


@dataclass
class GameService:
    """
    In-memory game service.

    Usage:
        service = GameService()

        state = service.create_game(request)
        result = service.submit_action(state.game_id, {"type": "ROLL_MOVE_DICE"})
        actions = service.get_valid_actions(state.game_id)
    """
    engine: GameEngine = field(default_factory=GameEngine)

    # Current state per game id
    _games: dict[str, GameState] = field(default_factory=dict)

    def create_game(self, request: CreateGameRequest | dict[str, Any]) -> GameStateResponse | ErrorResponse:
        """
        Create a new game from a roster.
        """
        try:
            if not isinstance(request, CreateGameRequest):
                request = CreateGameRequest.model_validate(request)
            players = [PlayerSetup(p.id, p.name, p.hero_class) for p in request.players]
            sword = request.demon_sword_position.to_coord() if request.demon_sword_position else None
            state = self.engine.create_game(players, demon_sword_position=sword)
        except ValidationError as e:
            return _validation_error(e)
        except GameSetupError as e:
            return ErrorResponse(error_code=ErrorCode.INVALID_SETUP, message=str(e))

        self._games[state.game_id] = state
        return GameStateResponse.from_state(state)

    def get_state(self, game_id: str) -> GameStateResponse | ErrorResponse:
        """
        Get the current game snapshot.
        """
        state = self._games.get(game_id)
        if state is None:
            return _not_found(game_id)
        return GameStateResponse.from_state(state)

    def get_game_state(self, game_id: str) -> GameState | None:
        """Raw engine state, for bots and tests."""
        return self._games.get(game_id)

    def submit_action(
        self,
        game_id: str,
        payload: dict[str, Any],
        player_id: str | None = None,
    ) -> ActionResultResponse | ErrorResponse:
        """
        Validate and apply an action.

        Rule violations come back as an unsuccessful ActionResultResponse;
        unknown games and malformed payloads as an ErrorResponse.
        """
        state = self._games.get(game_id)
        if state is None:
            return _not_found(game_id)

        try:
            action = parse_action(payload)
        except ValidationError as e:
            return _validation_error(e)

        result = self.engine.execute_action(state, action, acting_player_id=player_id)
        if result.success:
            self._games[game_id] = result.new_state
        else:
            logger.debug("Rejected %s in game %s: %s", action.action_type.value, game_id, result.message)

        return ActionResultResponse(
            success=result.success,
            message=result.message,
            error_code=result.error_code,
            events=[GameEventModel.from_event(e) for e in result.events],
            state=GameStateResponse.from_state(result.new_state),
        )

    def get_valid_actions(
        self,
        game_id: str,
        player_id: str | None = None,
    ) -> list[ValidActionInfo] | ErrorResponse:
        """
        Legal actions for a player (default: the player on turn).
        """
        state = self._games.get(game_id)
        if state is None:
            return _not_found(game_id)
        return [
            ValidActionInfo(action=action_to_request(va.action), description=va.description)
            for va in self.engine.get_valid_actions(state, player_id)
        ]

    def export_board(self, game_id: str) -> BoardSnapshot | ErrorResponse:
        """
        Flat-array board snapshot of a game.
        """
        state = self._games.get(game_id)
        if state is None:
            return _not_found(game_id)
        return BoardSnapshot.from_board(state.board)

    def end_game(self, game_id: str) -> GameStateResponse | ErrorResponse:
        """
        Drop a game and return its final snapshot.
        """
        state = self._games.pop(game_id, None)
        if state is None:
            return _not_found(game_id)
        logger.info("Game %s closed after round %d", game_id, state.round_number)
        return GameStateResponse.from_state(state)

    def list_games(self) -> list[str]:
        return list(self._games)


# =============================================================================
# Error helpers
# =============================================================================

def _not_found(game_id: str) -> ErrorResponse:
    return ErrorResponse(
        error_code=ErrorCode.GAME_NOT_FOUND,
        message=f"Game not found: {game_id}",
    )


def _validation_error(error: ValidationError) -> ErrorResponse:
    return ErrorResponse(
        error_code=ErrorCode.VALIDATION_ERROR,
        message="Invalid request payload",
        details={"errors": error.errors(include_url=False, include_context=False)},
    )
