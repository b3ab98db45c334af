"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    CREATED = "created"
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    ENDED = "ended"


# NOTE: listed in descending precedence. When several apply, the first one listed is reported.
# GAME_ONGOING here is only the add_player "game is full" error. A move that does not end the game is OutcomeKind.ONGOING.
class ErrorCode(StrEnum):
    GAME_DOESNT_EXIST = "game doesn't exist"
    GAME_ENDED = "game ended"
    GAME_ONGOING = "game ongoing"
    GAME_NOT_STARTED = "game not started"
    PLAYER_DOESNT_EXIST = "player doesn't exist"
    WRONG_TURN = "wrong turn"
    INVALID_LOCATION = "invalid location"


class OutcomeKind(StrEnum):
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"
