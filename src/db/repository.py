"""Protocol repository (implemented in memory and with SQLAlchemy)"""

from datetime import datetime
from typing import Protocol

from src.core.models import GameModel
from src.tictactoe.ids import GameId


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: GameId) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> GameModel:
        """Store a new game (its ID is part of the model) and return the stored data."""
        ...

    def update_game(self, game_id: GameId, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, game_id: GameId) -> GameModel | None:
        """Remove a game's record."""
        ...

    def ended_before(self, cutoff: datetime) -> list[GameId]:
        """IDs of games that ended before the cutoff."""
        ...
