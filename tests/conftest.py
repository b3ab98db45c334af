"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base
from src.services.game_engine import GameEngine
from src.tictactoe.ids import GameId, PlayerId

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Sessions on a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def game_engine() -> GameEngine:
    """Engine with the default (dictionary) store."""
    return GameEngine()


@pytest.fixture
def started_game(game_engine: GameEngine) -> tuple[GameId, PlayerId, PlayerId]:
    """A game with both players seated, nobody has moved yet."""
    game_id = game_engine.create_game()
    first = game_engine.add_player(game_id).unwrap()
    second = game_engine.add_player(game_id).unwrap()
    return game_id, first, second
