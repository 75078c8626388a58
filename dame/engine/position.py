"""
A square on the board, addressed by (row, col)

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Dame is played on the dark squares of an 8x8 board. Row 0 is BLACK's back row, row 7 is WHITE's back row.
BOARD_SIZE = 8

Vector = tuple[int, int]

# Each direction is (row delta, col delta)
ALL_DIRECTIONS: tuple[Vector, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def is_dark_square(self) -> bool:
        """Only dark squares are ever occupied"""
        return (self.row + self.col) % 2 == 1

    def step(self, direction: Vector, distance: int = 1) -> Position:
        """Walk `distance` squares along a direction. NOTE: does not check the bounds of the board."""
        d_row, d_col = direction
        return Position(self.row + distance * d_row, self.col + distance * d_col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"
