"""
The engine owns all games: it creates them, seats players and applies moves.

Every operation reports failures as an Err value carrying an ErrorCode (never by raising), and a failed call leaves stored state untouched.
Calls on the same game are serialized with one lock per game; calls on different games do not wait for each other.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Iterator, Optional, Self

from src.core.config import Settings
from src.core.exceptions import GameError, GameStateError
from src.core.logging_config import configure_logging
from src.core.models import GameModel, utc_now
from src.core.results import Err, Ok, Result
from src.core.shared_types import ErrorCode
from src.db.database import create_session_factory
from src.db.memory_repository import InMemoryGameRepository
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.tictactoe.game import Game
from src.tictactoe.ids import GameId, IdAllocator, PlayerId
from src.tictactoe.outcome import MoveOutcome

logger = logging.getLogger(__name__)


class GameEngine:
    def __init__(
        self,
        repository: Optional[GameRepository] = None,
        allocator: Optional[IdAllocator] = None,
        retention: Optional[timedelta] = None,
    ) -> None:
        self.repo: GameRepository = repository if repository is not None else InMemoryGameRepository()
        self.allocator = allocator or IdAllocator()
        # None: finished games stay queryable for as long as the repository lives
        self.retention = retention
        self._locks: dict[GameId, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """
        Bootstrap from settings: logging at the configured level, and the store the settings ask for
        (a plain dict, or SQL when a database URL is configured).
        """
        configure_logging(settings.log_level)
        repository: GameRepository
        if settings.database_url is None:
            repository = InMemoryGameRepository()
        else:
            repository = SQLGameRepository(create_session_factory(settings.database_url))
        return cls(repository=repository, retention=settings.retention)

    # -- Operations --
    def create_game(self) -> GameId:
        """New empty game. Never fails."""
        if self.retention is not None:
            self.evict_ended_games()

        # the id check and the insert must not interleave with another create_game
        with self._locks_guard:
            game_id = self.allocator.new_game_id(lambda candidate: self.repo.get_game(candidate) is not None)
            self.repo.create_game(Game.new_game(game_id).to_model())
        logger.info("Created game %s", game_id)
        return game_id

    def add_player(self, game_id: GameId) -> Result[PlayerId]:
        """
        Seat a player in the first free slot.
        ----
        Errors (first match wins): GAME_DOESNT_EXIST, GAME_ENDED, GAME_ONGOING (both slots already taken).
        """
        if not self._exists(game_id):
            return self._reject("add_player", game_id, ErrorCode.GAME_DOESNT_EXIST)

        with self._game_lock(game_id):
            game = self._load(game_id)
            if game is None:
                return self._reject("add_player", game_id, ErrorCode.GAME_DOESNT_EXIST)
            try:
                player_id = game.register_player(self.allocator)
            except GameError as exc:
                if exc.code is None:
                    raise
                return self._reject("add_player", game_id, exc.code, str(exc))
            self.repo.update_game(game_id, game.to_model())

        logger.info("Player %s joined game %s (status: %s)", player_id, game_id, game.status)
        return Ok(player_id)

    def make_move(self, game_id: GameId, player_id: PlayerId, x: int, y: int) -> Result[MoveOutcome]:
        """
        Mark cell (x, y) for the player.
        ----
        Errors (first match wins): GAME_DOESNT_EXIST, GAME_ENDED, GAME_NOT_STARTED, PLAYER_DOESNT_EXIST,
        INVALID_LOCATION (off the board), WRONG_TURN, INVALID_LOCATION (cell taken).

        On success the outcome is ONGOING, WIN (carrying the mover) or DRAW (carrying the other player).
        """
        if not self._exists(game_id):
            return self._reject("make_move", game_id, ErrorCode.GAME_DOESNT_EXIST)

        with self._game_lock(game_id):
            game = self._load(game_id)
            if game is None:
                return self._reject("make_move", game_id, ErrorCode.GAME_DOESNT_EXIST)
            try:
                outcome = game.make_move(player_id, x, y)
            except GameError as exc:
                if exc.code is None:
                    raise
                return self._reject("make_move", game_id, exc.code, str(exc))
            self.repo.update_game(game_id, game.to_model())

        if outcome.is_terminal:
            logger.info("Game %s ended: %s (%s)", game_id, outcome.kind, outcome.player)
        return Ok(outcome)

    def get_game(self, game_id: GameId) -> Result[GameModel]:
        """Current state of a game (finished games included, until evicted)."""
        if not self._exists(game_id):
            return self._reject("get_game", game_id, ErrorCode.GAME_DOESNT_EXIST)
        model = self.repo.get_game(game_id)
        if model is None:
            return self._reject("get_game", game_id, ErrorCode.GAME_DOESNT_EXIST)
        return Ok(model)

    def get_result(self, game_id: GameId) -> Result[Optional[MoveOutcome]]:
        """How a game ended (WIN or DRAW with its player), or Ok(None) while it is still running."""
        if not self._exists(game_id):
            return self._reject("get_result", game_id, ErrorCode.GAME_DOESNT_EXIST)
        game = self._load(game_id)
        if game is None:
            return self._reject("get_result", game_id, ErrorCode.GAME_DOESNT_EXIST)
        return Ok(game.result)

    def evict_ended_games(self, now: Optional[datetime] = None) -> int:
        """Drop games that ended longer than `retention` ago. Without a retention period nothing is dropped."""
        if self.retention is None:
            return 0
        cutoff = (now or utc_now()) - self.retention
        evicted = 0
        for game_id in self.repo.ended_before(cutoff):
            with self._game_lock(game_id):
                if self.repo.delete_game(game_id) is not None:
                    evicted += 1
            with self._locks_guard:
                self._locks.pop(game_id, None)
        if evicted:
            logger.info("Evicted %d finished game(s) that ended before %s", evicted, cutoff.isoformat())
        return evicted

    # -- Internal helpers --
    def _exists(self, game_id: object) -> bool:
        """Anything that is not a GameId (a PlayerId, an int, ...) can never name a game."""
        return isinstance(game_id, GameId) and self.repo.get_game(game_id) is not None

    def _load(self, game_id: GameId) -> Game | None:
        model = self.repo.get_game(game_id)
        if model is None:
            return None
        try:
            return Game.from_model(model)
        except GameStateError:
            logger.exception("Stored state of game %s is corrupt", game_id)
            raise

    @contextmanager
    def _game_lock(self, game_id: GameId) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(game_id, threading.Lock())
        with lock:
            yield

    def _reject(self, operation: str, game_id: object, code: ErrorCode, message: str = "") -> Err:
        logger.debug("%s rejected for game %s: %s %s", operation, game_id, code.name, message)
        return Err(code, message)
