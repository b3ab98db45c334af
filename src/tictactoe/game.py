"""
The Game class is the entrypoint into the domain layer for the engine.
It is responsible for the rules of a single match: who may join, whose turn it is, which moves are legal and when the match is over.
Rule violations are raised as GameError subclasses; the engine turns them into result values.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Self

from src.core.exceptions import (
    GameEndedError,
    GameFullError,
    GameNotStartedError,
    GameStateError,
    IllegalMoveError,
    InvalidIdentifierError,
    NotYourTurnError,
    PlayerDoesntExistError,
)
from src.core.models import GameModel, utc_now
from src.core.shared_types import Status
from src.tictactoe.board import Board
from src.tictactoe.cell import Cell
from src.tictactoe.ids import GameId, IdAllocator, PlayerId
from src.tictactoe.outcome import MoveOutcome

PLAYER_SLOTS = 2


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY ENGINE ---

    id: GameId
    board: Board
    # players[0] is seated first and moves first
    players: list[Optional[PlayerId]] = field(default_factory=lambda: [None] * PLAYER_SLOTS)
    # None until the first move attempt fixes the turn order
    active_player: Optional[PlayerId] = None
    ended: bool = False
    ended_at: Optional[datetime] = None

    @classmethod
    def new_game(cls, game_id: GameId) -> Self:
        return cls(id=game_id, board=Board.empty())

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the engine / repository actually has"""
        try:
            game_id = GameId.parse(model.game_id)
            players = [PlayerId.parse(p) if p is not None else None for p in model.players]
            rows = [[PlayerId.parse(m) if m is not None else None for m in row] for row in model.board]
            active_player = PlayerId.parse(model.active_player) if model.active_player is not None else None
        except InvalidIdentifierError as exc:
            raise GameStateError(f"Stored game contains an invalid identifier: {exc}") from exc

        if len(players) != PLAYER_SLOTS:
            raise GameStateError(f"A game has exactly {PLAYER_SLOTS} player slots, got {len(players)}.")
        try:
            board = Board.from_rows(rows)
        except ValueError as exc:
            raise GameStateError(str(exc)) from exc

        game = cls(
            id=game_id,
            board=board,
            players=players,
            active_player=active_player,
            ended=model.ended,
            ended_at=model.ended_at,
        )

        # Validation: the recorded status must agree with the state it was recorded with
        if model.status not in [status.value for status in Status]:
            raise GameStateError(
                f"Invalid status: {model.status!r}. \nPick one from {','.join([status.value for status in Status])}"
            )
        if Status(model.status) != game.status:
            raise GameStateError(f"Recorded status {model.status!r} does not match game state ({game.status}).")
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the engine / repository uses"""

        return GameModel(
            game_id=str(self.id),
            players=[str(p) if p is not None else None for p in self.players],
            board=[[str(m) if m is not None else None for m in row] for row in self.board.to_rows()],
            active_player=str(self.active_player) if self.active_player is not None else None,
            ended=self.ended,
            status=self.status.value,
            ended_at=self.ended_at,
        )

    @property
    def status(self) -> Status:
        if self.ended:
            return Status.ENDED
        seated = sum(1 for p in self.players if p is not None)
        if seated == PLAYER_SLOTS:
            return Status.IN_PROGRESS
        if seated > 0:
            return Status.WAITING_FOR_PLAYERS
        return Status.CREATED

    @property
    def is_started(self) -> bool:
        """'Started' simply means both slots are filled"""
        return all(p is not None for p in self.players)

    @property
    def result(self) -> Optional[MoveOutcome]:
        """
        How a finished game ended, so results can be looked up afterwards.
        The last mover won if they hold a line. Otherwise it was a draw and the player who would have moved next is reported.
        """
        if not self.ended:
            return None
        winner = next((p for p in self.players if p is not None and self.board.has_line(p)), None)
        if winner is not None:
            return MoveOutcome.win(winner)
        assert self.active_player is not None
        return MoveOutcome.draw(self.active_player)

    def register_player(self, allocator: IdAllocator) -> PlayerId:
        """Seat a new player in the first free slot, handing out an id nobody in this game holds."""
        if self.ended:
            raise GameEndedError(f"Cannot join game {self.id}. The game has ended.")
        if self.is_started:
            raise GameFullError(f"Cannot join game {self.id}. Both player slots are taken.")

        player_id = allocator.new_player_id(self.players)
        free_slot = self.players.index(None)
        self.players[free_slot] = player_id
        return player_id

    def make_move(self, player_id: PlayerId, x: int, y: int, now: Optional[datetime] = None) -> MoveOutcome:
        """
        Attempt to make a move
        -----
        Checks, in this order (the first one failing is the one reported):
        1. game has not ended
        2. both players are seated
        3. the player is seated in this game
        4. the cell is on the board
        5. it is the player's turn (the first move fixes the turn order: players[0] starts)
        6. the cell is still empty

        Then the cell is marked, the turn passes on, and the game is checked for a win (first) or a full board.
        """
        if self.ended:
            raise GameEndedError(f"Game {self.id} has already ended.")

        if not self.is_started:
            raise GameNotStartedError(f"Game {self.id} is still waiting for players.")

        if player_id not in self.players:
            raise PlayerDoesntExistError(f"Player {player_id} is not seated in game {self.id}.")

        cell = self._to_cell(x, y)

        if self.active_player is None:
            self.active_player = self.players[0]
        self._assert_your_turn(player_id)

        self.board.place(cell, player_id)
        self.active_player = self._opponent(player_id)

        if self.board.has_line(player_id):
            self._end(now)
            return MoveOutcome.win(player_id)

        # no early draw detection: only a full board counts
        if self.board.is_full():
            self._end(now)
            return MoveOutcome.draw(self.active_player)

        return MoveOutcome.ongoing()

    # -- PRIVATE HELPERS ---
    def _to_cell(self, x: int, y: int) -> Cell:
        # bool is a subclass of int, but True/False are not coordinates
        if not (isinstance(x, int) and isinstance(y, int)) or isinstance(x, bool) or isinstance(y, bool):
            raise IllegalMoveError(f"Coordinates must be integers, got ({x!r}, {y!r}).")
        cell = Cell(x, y)
        if not cell.is_within_bounds():
            raise IllegalMoveError(f"Cell ({x}, {y}) is not on the board.")
        return cell

    def _assert_your_turn(self, player_id: PlayerId) -> None:
        if player_id != self.active_player:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {self.active_player} to make a move first."
            )

    def _opponent(self, player_id: PlayerId) -> PlayerId:
        opponent = self.players[1] if self.players[0] == player_id else self.players[0]
        assert opponent is not None
        return opponent

    def _end(self, now: Optional[datetime]) -> None:
        self.ended = True
        self.ended_at = now or utc_now()
