"""
API - Wire schemas and framework-agnostic service layer.
"""

from .schemas import (
    ActionResultResponse,
    BoardSnapshot,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameEventModel,
    GameStateResponse,
    HexTileModel,
    MonsterInfo,
    PlayerInfo,
    ValidActionInfo,
    parse_action,
)
from .service import GameService

__all__ = [
    "ActionResultResponse",
    "BoardSnapshot",
    "CreateGameRequest",
    "ErrorCode",
    "ErrorResponse",
    "GameEventModel",
    "GameStateResponse",
    "HexTileModel",
    "MonsterInfo",
    "PlayerInfo",
    "ValidActionInfo",
    "parse_action",
    "GameService",
]
