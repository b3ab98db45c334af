"""Implementation of (Game)Repository keeping everything in a dictionary for the lifetime of the process"""

import threading
from copy import deepcopy
from datetime import datetime

from src.core.models import GameModel
from src.tictactoe.ids import GameId


class InMemoryGameRepository:
    """
    Data stored in a dict keyed by game ID. Copies go in and out, so callers never hold on to stored state.
    Every access to the dict goes through one lock, so the store can be shared between threads.
    """

    def __init__(self) -> None:
        self._games: dict[GameId, GameModel] = {}
        self._lock = threading.Lock()

    def get_game(self, game_id: GameId) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self._lock:
            game = self._games.get(game_id)
            return deepcopy(game) if game is not None else None

    def create_game(self, game: GameModel) -> GameModel:
        """Store a new game (its ID is part of the model) and return the stored data."""
        game_id = GameId.parse(game.game_id)
        with self._lock:
            if game_id in self._games:
                raise ValueError(f"Game {game_id} is already stored.")
            self._games[game_id] = deepcopy(game)
        return deepcopy(game)

    def update_game(self, game_id: GameId, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        with self._lock:
            if game_id not in self._games:
                return None
            self._games[game_id] = deepcopy(game)
        return deepcopy(game)

    def delete_game(self, game_id: GameId) -> GameModel | None:
        """Remove a game's record and return a copy of what was stored."""
        with self._lock:
            game = self._games.pop(game_id, None)
        return deepcopy(game) if game is not None else None

    def ended_before(self, cutoff: datetime) -> list[GameId]:
        with self._lock:
            snapshot = list(self._games.items())
        return [
            game_id
            for game_id, game in snapshot
            if game.ended and game.ended_at is not None and game.ended_at < cutoff
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
