"""
A cell on the board

(placed in its own module as multiple other modules need to import it)
"""

from dataclasses import dataclass

# Only the classic 3x3 game is played
BOARD_DIMENSIONS = (3, 3)


@dataclass(frozen=True)
class Cell:
    x: int
    y: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])


ALL_CELLS: tuple[Cell, ...] = tuple(
    Cell(x, y) for y in range(BOARD_DIMENSIONS[1]) for x in range(BOARD_DIMENSIONS[0])
)
