"""Orchestration of communication from API requests to the game engine (and the reverse direction)."""

from src.api.models import (
    GameCreatedResponse,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    MoveRequest,
    MoveResponse,
    PlayerResponse,
)
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.results import Err
from src.core.shared_types import Status
from src.services.game_engine import GameEngine
from src.tictactoe.game import Game
from src.tictactoe.ids import GameId, PlayerId


class TicTacToeService:
    """Orchestration of layers for tic-tac-toe. Rule violations come back as error codes inside the response."""

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine

    # -- API routes logic ---
    def create_new_game(self) -> GameCreatedResponse:
        """A player requested a fresh game."""
        game_id = self.engine.create_game()
        return GameCreatedResponse(game_id=str(game_id))

    def join_game(self, request: JoinGameRequest) -> PlayerResponse:
        """A player requested a seat in a game."""
        result = self.engine.add_player(GameId.parse(request.game_id))
        if isinstance(result, Err):
            return PlayerResponse(game_id=request.game_id, error=result.code)
        return PlayerResponse(game_id=request.game_id, player_id=str(result.value))

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt."""
        result = self.engine.make_move(
            GameId.parse(request.game_id),
            PlayerId.parse(request.player_id),
            request.x,
            request.y,
        )
        if isinstance(result, Err):
            return MoveResponse(game_id=request.game_id, error=result.code)

        outcome = result.value
        return MoveResponse(
            game_id=request.game_id,
            outcome=outcome.kind,
            player_id=str(outcome.player) if outcome.player is not None else None,
        )

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        result = self.engine.get_game(GameId.parse(request.game_id))
        if isinstance(result, Err):
            raise RepositoryError(f"Game with {request.game_id=} not found.")
        return self._create_game_response(result.value)

    # -- Internal helpers --
    def _create_game_response(self, model: GameModel) -> GameResponse:
        result = Game.from_model(model).result
        return GameResponse(
            game_id=model.game_id,
            players=model.players,
            board=model.board,
            active_player=model.active_player,
            status=Status(model.status),
            ended=model.ended,
            outcome=result.kind if result is not None else None,
            result_player_id=str(result.player) if result is not None and result.player is not None else None,
        )
