"""What an accepted move did to the game."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import ErrorCode, OutcomeKind
from src.tictactoe.ids import PlayerId


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of an accepted move.
    ----
    WIN carries the moving player. DRAW carries the other player (the one who would have moved next).
    ONGOING carries no player.
    """

    kind: OutcomeKind
    player: Optional[PlayerId] = None

    @classmethod
    def ongoing(cls) -> MoveOutcome:
        return cls(OutcomeKind.ONGOING)

    @classmethod
    def win(cls, mover: PlayerId) -> MoveOutcome:
        return cls(OutcomeKind.WIN, mover)

    @classmethod
    def draw(cls, other_player: PlayerId) -> MoveOutcome:
        return cls(OutcomeKind.DRAW, other_player)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.ONGOING

    @property
    def signal(self) -> ErrorCode | PlayerId:
        """Single-value form: GAME_ONGOING while the game continues, otherwise the carried player id."""
        if self.player is None:
            return ErrorCode.GAME_ONGOING
        return self.player
