"""The Game board keeps track of which player marked which cell, and knows about lines (win) and a full board (draw)."""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import IllegalMoveError
from src.tictactoe.cell import ALL_CELLS, BOARD_DIMENSIONS, Cell
from src.tictactoe.ids import PlayerId

# An empty cell holds None, which never equals a PlayerId
Mark = Optional[PlayerId]

Line = tuple[Cell, Cell, Cell]

# 3 rows, 3 columns, 2 diagonals
LINES: tuple[Line, ...] = (
    *(tuple(Cell(x, y) for x in range(3)) for y in range(3)),
    *(tuple(Cell(x, y) for y in range(3)) for x in range(3)),
    (Cell(0, 0), Cell(1, 1), Cell(2, 2)),
    (Cell(2, 0), Cell(1, 1), Cell(0, 2)),
)


@dataclass
class Board:
    position: dict[Cell, Mark]

    @classmethod
    def empty(cls) -> Self:
        return cls({cell: None for cell in ALL_CELLS})

    @classmethod
    def from_rows(cls, rows: list[list[Mark]]) -> Self:
        """Rows are read top to bottom, so rows[y][x] is the mark in Cell(x, y)."""
        if len(rows) != BOARD_DIMENSIONS[1] or any(len(row) != BOARD_DIMENSIONS[0] for row in rows):
            raise ValueError(f"Board must be {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]}, got {rows!r}")
        return cls({Cell(x, y): mark for y, row in enumerate(rows) for x, mark in enumerate(row)})

    def to_rows(self) -> list[list[Mark]]:
        return [
            [self.position[Cell(x, y)] for x in range(BOARD_DIMENSIONS[0])]
            for y in range(BOARD_DIMENSIONS[1])
        ]

    def mark(self, cell: Cell) -> Mark:
        return self.position[cell]

    def is_occupied(self, cell: Cell) -> bool:
        return self.position[cell] is not None

    def place(self, cell: Cell, player: PlayerId) -> None:
        """Once marked, a cell stays marked."""
        if not cell.is_within_bounds():
            raise IllegalMoveError(f"Cell {cell} is not on the board.")
        if self.is_occupied(cell):
            raise IllegalMoveError(f"Cell {cell} is already taken.")
        self.position[cell] = player

    def has_line(self, player: PlayerId) -> bool:
        return any(all(self.position[cell] == player for cell in line) for line in LINES)

    def is_full(self) -> bool:
        return all(mark is not None for mark in self.position.values())

    def empty_cells(self) -> list[Cell]:
        return [cell for cell, mark in self.position.items() if mark is None]
