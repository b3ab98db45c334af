"""
Boundary layer data model(s).

These objects can be used to communicate with the Engine.
Both the service layer (higher) and domain/db layers (lower) use the model defined here to send to/receive from the Engine
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

# Type aliases to make GameModel easier to read
GameIdText = str
PlayerIdText = str


@dataclass
class GameModel:
    """Transport-safe representation of a tic-tac-toe game used between Service, DB, and Game layers."""

    game_id: GameIdText
    players: list[Optional[PlayerIdText]]
    board: list[list[Optional[PlayerIdText]]]  # row-major: board[y][x]
    active_player: Optional[PlayerIdText]
    ended: bool
    status: str
    ended_at: Optional[datetime] = None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
