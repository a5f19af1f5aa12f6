"""
Pydantic Schemas for API - Wire models between clients and the engine.

These models define the JSON contract for game creation, actions, state
snapshots, events and the persisted board layout.

Error Codes:
- GAME_NOT_FOUND: Game id does not exist or has ended
- INVALID_SETUP: Roster or demon sword position rejected
- VALIDATION_ERROR: Request payload failed schema validation
- RULE_VIOLATION: Action is not legal in the current state
- INTERNAL_ERROR: Unexpected engine failure
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter

from ..engine_core.action import Action
from ..engine_core.board import Board, HexTile, HeroClass, TileType
from ..engine_core.events import GameEvent
from ..engine_core.hex import HexCoord
from ..engine_core.state import GameState, MonsterState, PlayerState, Revelation, Stat


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_SETUP = "INVALID_SETUP"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RULE_VIOLATION = "RULE_VIOLATION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class HexCoordModel(BaseModel):
    """Axial coordinate."""
    q: int
    r: int

    model_config = {"from_attributes": True}

    def to_coord(self) -> HexCoord:
        return HexCoord(self.q, self.r)


class HexTileModel(BaseModel):
    """A single board tile in the flat board array."""
    coord: HexCoordModel
    type: TileType
    village_class: Optional[HeroClass] = None
    monster_id: Optional[str] = None
    monster_name: Optional[str] = None

    model_config = {"from_attributes": True}

    def to_tile(self) -> HexTile:
        return HexTile(
            coord=self.coord.to_coord(),
            type=self.type,
            village_class=self.village_class,
            monster_id=self.monster_id,
            monster_name=self.monster_name,
        )


class BoardSnapshot(BaseModel):
    """Flat-array board serialization. Round-trips losslessly."""
    tiles: list[HexTileModel] = Field(default_factory=list)

    @classmethod
    def from_board(cls, board: Board) -> "BoardSnapshot":
        return cls(tiles=[HexTileModel.model_validate(t) for t in board.serialize()])

    def to_board(self) -> Board:
        return Board.deserialize(t.to_tile() for t in self.tiles)


class RevelationInfo(BaseModel):
    """Revelation card for display."""
    id: str
    name: str
    source: str
    task: str
    is_game_end: bool = False

    model_config = {"from_attributes": True}


class PlayerInfo(BaseModel):
    """Hero information for display."""
    player_id: str
    name: str
    hero_class: HeroClass
    state: str
    position: HexCoordModel
    health: int
    max_health: int
    level: int
    strength: int
    dexterity: int
    intelligence: int
    corrupt_dice: Optional[int] = None
    corrupt_dice_target: Optional[Stat] = None
    monster_essence: int = 0
    sacrifices: int = 0
    devil_score: int = 0
    faith_score: int = 0
    is_dead: bool = False
    death_turns_remaining: int = 0
    turn_phase: str
    remaining_movement: Optional[int] = None
    has_demon_sword: bool = False
    is_stealthed: bool = False
    skill_cooldowns: dict[str, int] = Field(default_factory=dict)
    revelations: list[RevelationInfo] = Field(default_factory=list)
    completed_revelations: list[RevelationInfo] = Field(default_factory=list)
    is_current_turn: bool = False

    @classmethod
    def from_player(cls, player: PlayerState, is_current_turn: bool = False) -> "PlayerInfo":
        return cls(
            player_id=player.player_id,
            name=player.name,
            hero_class=player.hero_class,
            state=player.state.value,
            position=HexCoordModel.model_validate(player.position),
            health=player.health,
            max_health=player.max_health,
            level=player.level,
            strength=player.strength,
            dexterity=player.dexterity,
            intelligence=player.intelligence,
            corrupt_dice=player.corrupt_dice,
            corrupt_dice_target=player.corrupt_dice_target,
            monster_essence=player.monster_essence,
            sacrifices=player.sacrifices,
            devil_score=player.devil_score,
            faith_score=player.faith_score,
            is_dead=player.is_dead,
            death_turns_remaining=player.death_turns_remaining,
            turn_phase=player.turn_phase.value,
            remaining_movement=player.remaining_movement,
            has_demon_sword=player.has_demon_sword,
            is_stealthed=player.is_stealthed,
            skill_cooldowns=dict(player.skill_cooldowns),
            revelations=[_revelation_info(r) for r in player.revelations],
            completed_revelations=[_revelation_info(r) for r in player.completed_revelations],
            is_current_turn=is_current_turn,
        )


def _revelation_info(revelation: Revelation) -> RevelationInfo:
    return RevelationInfo(
        id=revelation.id,
        name=revelation.name,
        source=revelation.source.value,
        task=revelation.task,
        is_game_end=revelation.is_game_end,
    )


class MonsterInfo(BaseModel):
    """Monster information for display."""
    monster_id: str
    name: str
    position: HexCoordModel
    health: int
    max_health: int
    is_dead: bool = False

    @classmethod
    def from_monster(cls, monster: MonsterState) -> "MonsterInfo":
        return cls(
            monster_id=monster.monster_id,
            name=monster.name,
            position=HexCoordModel.model_validate(monster.position),
            health=monster.health,
            max_health=monster.max_health,
            is_dead=monster.is_dead,
        )


class GameEventModel(BaseModel):
    """A game event. Only fields relevant to the event type are set."""
    event_type: str
    player_id: Optional[str] = None
    target_id: Optional[str] = None
    attacker_id: Optional[str] = None
    monster_id: Optional[str] = None
    amount: Optional[int] = None
    from_position: Optional[HexCoordModel] = None
    to_position: Optional[HexCoordModel] = None
    revelation_id: Optional[str] = None
    stat: Optional[str] = None
    dice: Optional[list[int]] = None
    winner_id: Optional[str] = None
    victory_type: Optional[str] = None

    @classmethod
    def from_event(cls, event: GameEvent) -> "GameEventModel":
        return cls(
            event_type=event.event_type.value,
            player_id=event.player_id,
            target_id=event.target_id,
            attacker_id=event.attacker_id,
            monster_id=event.monster_id,
            amount=event.amount,
            from_position=HexCoordModel.model_validate(event.from_position) if event.from_position else None,
            to_position=HexCoordModel.model_validate(event.to_position) if event.to_position else None,
            revelation_id=event.revelation_id,
            stat=event.stat,
            dice=list(event.dice) if event.dice is not None else None,
            winner_id=event.winner_id,
            victory_type=event.victory_type,
        )


# =============================================================================
# Action Requests (discriminated on "type")
# =============================================================================

class RollMoveDiceRequest(BaseModel):
    type: Literal["ROLL_MOVE_DICE"]

    def to_action(self) -> Action:
        return Action.roll_move_dice()


class MoveRequest(BaseModel):
    type: Literal["MOVE"]
    position: HexCoordModel

    def to_action(self) -> Action:
        return Action.move(self.position.to_coord())


class EndMovePhaseRequest(BaseModel):
    type: Literal["END_MOVE_PHASE"]

    def to_action(self) -> Action:
        return Action.end_move_phase()


class BasicAttackRequest(BaseModel):
    type: Literal["BASIC_ATTACK"]
    target_id: str

    def to_action(self) -> Action:
        return Action.basic_attack(self.target_id)


class UseSkillRequest(BaseModel):
    type: Literal["USE_SKILL"]
    skill_id: str
    target_id: Optional[str] = None
    position: Optional[HexCoordModel] = None
    cooldown_skill_id: Optional[str] = Field(
        default=None, description="Skill whose cooldown a charge reduces"
    )

    def to_action(self) -> Action:
        params: dict[str, Any] = {}
        if self.cooldown_skill_id is not None:
            params["cooldown_skill_id"] = self.cooldown_skill_id
        return Action.use_skill(
            self.skill_id,
            target_id=self.target_id,
            position=self.position.to_coord() if self.position else None,
            **params,
        )


class RollStatDiceRequest(BaseModel):
    type: Literal["ROLL_STAT_DICE"]
    stat: Stat

    def to_action(self) -> Action:
        return Action.roll_stat_dice(self.stat)


class EndTurnRequest(BaseModel):
    type: Literal["END_TURN"]

    def to_action(self) -> Action:
        return Action.end_turn()


class CompleteRevelationRequest(BaseModel):
    type: Literal["COMPLETE_REVELATION"]
    revelation_id: str

    def to_action(self) -> Action:
        return Action.complete_revelation(self.revelation_id)


class ApplyCorruptDiceRequest(BaseModel):
    type: Literal["APPLY_CORRUPT_DICE"]
    stat: Stat

    def to_action(self) -> Action:
        return Action.apply_corrupt_dice(self.stat)


class ChooseHolyRequest(BaseModel):
    type: Literal["CHOOSE_HOLY"]

    def to_action(self) -> Action:
        return Action.choose_holy()


class DrawDemonSwordRequest(BaseModel):
    type: Literal["DRAW_DEMON_SWORD"]

    def to_action(self) -> Action:
        return Action.draw_demon_sword()


ActionRequest = Annotated[
    Union[
        RollMoveDiceRequest,
        MoveRequest,
        EndMovePhaseRequest,
        BasicAttackRequest,
        UseSkillRequest,
        RollStatDiceRequest,
        EndTurnRequest,
        CompleteRevelationRequest,
        ApplyCorruptDiceRequest,
        ChooseHolyRequest,
        DrawDemonSwordRequest,
    ],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter = TypeAdapter(ActionRequest)


def parse_action(data: dict[str, Any]) -> Action:
    """
    Validate a JSON action payload and convert it to an engine Action.

    Raises pydantic.ValidationError on malformed input.
    """
    return _action_adapter.validate_python(data).to_action()


# =============================================================================
# Requests
# =============================================================================

class PlayerSetupModel(BaseModel):
    """Roster entry."""
    id: str = Field(min_length=1)
    name: str
    hero_class: HeroClass


class CreateGameRequest(BaseModel):
    """Request to create a game."""
    players: list[PlayerSetupModel] = Field(min_length=1)
    demon_sword_position: Optional[HexCoordModel] = None


class SubmitActionRequest(BaseModel):
    """Request to apply an action."""
    game_id: str
    player_id: Optional[str] = Field(default=None, description="Acting player; defaults to the current player")
    action: ActionRequest


# =============================================================================
# Responses
# =============================================================================

class ErrorResponse(BaseModel):
    """Structured error response."""
    error_code: ErrorCode
    message: str
    details: Optional[dict[str, Any]] = None


class GameStateResponse(BaseModel):
    """Full game snapshot for display."""
    game_id: str
    round_number: int
    phase: str
    current_turn_entry: Optional[str] = None
    round_turn_order: list[str] = Field(default_factory=list)
    monster_dice: list[int] = Field(default_factory=list)
    players: list[PlayerInfo] = Field(default_factory=list)
    monsters: list[MonsterInfo] = Field(default_factory=list)
    deck_size: int = 0
    golem_basic_attack_immune: bool = False
    meteor_immune: bool = False
    fire_tile_disabled: bool = False
    winner_id: Optional[str] = None
    victory_type: Optional[str] = None

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateResponse":
        entry = state.current_turn_entry
        buffs = state.monster_round_buffs
        return cls(
            game_id=state.game_id,
            round_number=state.round_number,
            phase=state.phase.value,
            current_turn_entry=entry,
            round_turn_order=list(state.round_turn_order),
            monster_dice=list(state.monster_dice),
            players=[PlayerInfo.from_player(p, p.player_id == entry) for p in state.players],
            monsters=[MonsterInfo.from_monster(m) for m in state.monsters],
            deck_size=len(state.revelation_deck),
            golem_basic_attack_immune=buffs.golem_basic_attack_immune,
            meteor_immune=buffs.meteor_immune,
            fire_tile_disabled=buffs.fire_tile_disabled,
            winner_id=state.winner_id,
            victory_type=state.victory_type,
        )


class ActionResultResponse(BaseModel):
    """Result of an action."""
    success: bool
    message: str = ""
    error_code: Optional[str] = None
    events: list[GameEventModel] = Field(default_factory=list)
    state: Optional[GameStateResponse] = None


class ValidActionInfo(BaseModel):
    """A legal action, in request form."""
    action: dict[str, Any]
    description: str


def action_to_request(action: Action) -> dict[str, Any]:
    """Serialize an engine Action to its request JSON shape."""
    payload = action.payload
    data: dict[str, Any] = {"type": action.action_type.value}
    if payload.position is not None:
        data["position"] = {"q": payload.position.q, "r": payload.position.r}
    if payload.target_id is not None:
        data["target_id"] = payload.target_id
    if payload.skill_id is not None:
        data["skill_id"] = payload.skill_id
    if payload.stat is not None:
        data["stat"] = payload.stat.value
    if payload.revelation_id is not None:
        data["revelation_id"] = payload.revelation_id
    if "cooldown_skill_id" in payload.params:
        data["cooldown_skill_id"] = payload.params["cooldown_skill_id"]
    return data
