"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidIdentifierError, InvalidRequestError
from src.core.shared_types import ErrorCode, OutcomeKind, Status
from src.tictactoe.ids import GameId, PlayerId

GameIdText = str
PlayerIdText = str


def _validate_game_id(value: str) -> str:
    try:
        GameId.parse(value)
    except InvalidIdentifierError as exc:
        raise InvalidRequestError(f"Cannot interpret {value!r} as a game ID.") from exc
    return value


# --- REQUEST MODELS ---
class JoinGameRequest(BaseModel):
    game_id: GameIdText

    @field_validator("game_id")
    @classmethod
    def validate_game_id(cls, value: str) -> str:
        return _validate_game_id(value)


class GetGameRequest(BaseModel):
    game_id: GameIdText

    @field_validator("game_id")
    @classmethod
    def validate_game_id(cls, value: str) -> str:
        return _validate_game_id(value)


class MoveRequest(BaseModel):
    game_id: GameIdText
    player_id: PlayerIdText
    # Range is deliberately not validated here: an off-board cell is a rule violation (INVALID_LOCATION), not a malformed request
    x: int
    y: int

    @field_validator("game_id")
    @classmethod
    def validate_game_id(cls, value: str) -> str:
        return _validate_game_id(value)

    @field_validator("player_id")
    @classmethod
    def validate_player_id(cls, value: str) -> str:
        try:
            PlayerId.parse(value)
        except InvalidIdentifierError as exc:
            raise InvalidRequestError(f"Cannot interpret {value!r} as a player ID.") from exc
        return value


# --- RESPONSE MODELS ---
class GameCreatedResponse(BaseModel):
    game_id: GameIdText


class PlayerResponse(BaseModel):
    game_id: GameIdText
    player_id: Optional[PlayerIdText] = None
    error: Optional[ErrorCode] = None


class MoveResponse(BaseModel):
    game_id: GameIdText
    outcome: Optional[OutcomeKind] = None
    # WIN: the mover. DRAW: the other player.
    player_id: Optional[PlayerIdText] = None
    error: Optional[ErrorCode] = None


class GameResponse(BaseModel):
    game_id: GameIdText
    players: list[Optional[PlayerIdText]]
    board: list[list[Optional[PlayerIdText]]]
    active_player: Optional[PlayerIdText]
    status: Status
    ended: bool
    # only set once the game has ended. WIN: the winner. DRAW: the player who would have moved next.
    outcome: Optional[OutcomeKind] = None
    result_player_id: Optional[PlayerIdText] = None
