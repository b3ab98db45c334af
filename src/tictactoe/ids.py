"""
Game and player identifiers.

Two separate value types, so a game id can never be mistaken for a player id (or the other way around):
* they never compare equal, even when wrapping the same UUID
* their text form carries the kind as a prefix ("game-..." / "player-...")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Collection, Optional, Self
from uuid import UUID, uuid4

from src.core.exceptions import InvalidIdentifierError


@dataclass(frozen=True)
class _Identifier:
    value: UUID
    prefix: ClassVar[str] = ""

    @classmethod
    def parse(cls, text: str) -> Self:
        """Read back the text form: '<prefix>-<32 hex digits>'"""
        kind, sep, raw = text.partition("-")
        if not sep or kind != cls.prefix:
            raise InvalidIdentifierError(f"Not a {cls.prefix} identifier: {text!r}")
        try:
            return cls(UUID(hex=raw))
        except ValueError as exc:
            raise InvalidIdentifierError(f"Malformed {cls.prefix} identifier: {text!r}") from exc

    def __str__(self) -> str:
        return f"{self.prefix}-{self.value.hex}"


@dataclass(frozen=True)
class GameId(_Identifier):
    prefix: ClassVar[str] = "game"


@dataclass(frozen=True)
class PlayerId(_Identifier):
    prefix: ClassVar[str] = "player"


class IdAllocator:
    """Hands out fresh identifiers. The UUID source can be swapped out (tests use it to force collisions)."""

    def __init__(self, uuid_source: Optional[Callable[[], UUID]] = None) -> None:
        self._uuid_source = uuid_source or uuid4

    def new_game_id(self, is_taken: Callable[[GameId], bool]) -> GameId:
        """Draw until an id comes up that no stored game uses yet."""
        while True:
            candidate = GameId(self._uuid_source())
            if not is_taken(candidate):
                return candidate

    def new_player_id(self, taken: Collection[Optional[PlayerId]]) -> PlayerId:
        """Draw until an id comes up that nobody in the same game holds."""
        while True:
            candidate = PlayerId(self._uuid_source())
            if candidate not in taken:
                return candidate
