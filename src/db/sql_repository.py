"""Implementation of (Game)Repository using SQLAlchemy"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameModel
from src.db.schema import DBGame
from src.tictactoe.ids import GameId


class SQLGameRepository:
    """
    Data stored using SQL / methods implemented using SQLAlchemy
    ---
    Every call opens its own session, so one repository can be shared by the engine across threads.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def get_game(self, game_id: GameId) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self.session_factory() as db:
            game_db = self._fetch_game(db, game_id)
            if game_db:
                return self._to_model(game_db)
            return None

    def create_game(self, game: GameModel) -> GameModel:
        """Store a new game (its ID is part of the model) and return the stored data."""
        with self.session_factory() as db:
            game_db = DBGame(
                id=game.game_id,
                players=game.players,
                board=game.board,
                active_player=game.active_player,
                ended=game.ended,
                status=game.status,
                ended_at=game.ended_at,
            )
            db.add(game_db)
            db.commit()
            db.refresh(game_db)
            return self._to_model(game_db)

    def update_game(self, game_id: GameId, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        with self.session_factory() as db:
            game_db = self._fetch_game(db, game_id)
            if not game_db:
                return None
            game_db.players = game.players
            game_db.board = game.board
            game_db.active_player = game.active_player
            game_db.ended = game.ended
            game_db.status = game.status
            game_db.ended_at = game.ended_at
            db.commit()
            db.refresh(game_db)
            return self._to_model(game_db)

    def delete_game(self, game_id: GameId) -> GameModel | None:
        """Remove a game's record."""
        with self.session_factory() as db:
            game_db = self._fetch_game(db, game_id)
            if not game_db:
                return None
            game_model = self._to_model(game_db)
            db.delete(game_db)
            db.commit()
            return game_model

    def ended_before(self, cutoff: datetime) -> list[GameId]:
        with self.session_factory() as db:
            query = select(DBGame.id, DBGame.ended_at).where(DBGame.ended.is_(True))
            return [
                GameId.parse(game_id)
                for game_id, ended_at in db.execute(query)
                if ended_at is not None and _as_utc(ended_at) < cutoff
            ]

    def _fetch_game(self, db: Session, game_id: GameId) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == str(game_id))
        return db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            game_id=game_db.id,
            players=list(game_db.players),
            board=[list(row) for row in game_db.board],
            active_player=game_db.active_player,
            ended=game_db.ended,
            status=game_db.status,
            ended_at=_as_utc(game_db.ended_at) if game_db.ended_at is not None else None,
        )


def _as_utc(moment: datetime) -> datetime:
    """SQLite hands back naive datetimes even for timezone-aware columns."""
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)
