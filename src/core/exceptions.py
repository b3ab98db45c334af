"""
Custom exceptions.

Every rule violation in the domain layer maps onto exactly one ErrorCode, so the engine can turn a raised GameError into a result value.
"""

from typing import Optional

from src.core.shared_types import ErrorCode


class GameError(Exception):
    """Top-level exception for anything going wrong while handling a game."""

    code: Optional[ErrorCode] = None

    def __init__(self, message: str = "", code: Optional[ErrorCode] = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class GameStateError(GameError):
    """Stored or transported game state cannot be interpreted."""


class GameEndedError(GameError):
    code = ErrorCode.GAME_ENDED


class GameFullError(GameError):
    code = ErrorCode.GAME_ONGOING


class GameNotStartedError(GameError):
    code = ErrorCode.GAME_NOT_STARTED


class PlayerDoesntExistError(GameError):
    code = ErrorCode.PLAYER_DOESNT_EXIST


class NotYourTurnError(GameError):
    code = ErrorCode.WRONG_TURN


class IllegalMoveError(GameError):
    code = ErrorCode.INVALID_LOCATION


class InvalidIdentifierError(GameError):
    """Text cannot be parsed as the requested kind of identifier."""


class InvalidRequestError(GameError):
    """Request data failed validation at the boundary."""


class RepositoryError(GameError):
    """Record could not be found or stored."""

    code = ErrorCode.GAME_DOESNT_EXIST


class ConfigError(Exception):
    """Settings taken from the environment are not usable."""
