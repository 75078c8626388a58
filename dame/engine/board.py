"""The Game board holds the pieces. Rules that decide which moves are legal live in moves.py / calculator.py"""

from dataclasses import dataclass, field
from typing import Optional, Self

from dame.engine.pieces import Piece, Player
from dame.engine.position import BOARD_SIZE, Position

Grid = list[list[Optional[Piece]]]

# Rows on which each side places its men at the start of a game. Rows 3 and 4 stay empty.
STARTING_ROWS: dict[Player, range] = {
    Player.BLACK: range(0, 3),
    Player.WHITE: range(BOARD_SIZE - 3, BOARD_SIZE),
}


def _empty_grid() -> Grid:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    """
    8x8 grid of optional pieces.
    ----

    * Row 0 is BLACK's back row (promotion row for WHITE), row 7 is WHITE's back row (promotion row for BLACK).
    * Only dark squares ((row + col) odd) are ever occupied. Setup and move code keep it that way, it is not re-checked on every write.
    * Coordinates outside of the board are absorbed: reads return None, writes do nothing.
    """

    grid: Grid = field(default_factory=_empty_grid)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def initial(cls) -> Self:
        """Board in the standard starting position"""
        board = cls()
        board.setup_initial_position()
        return board

    # --- SINGLE SQUARE ACCESS ---
    def get(self, position: Position) -> Optional[Piece]:
        if not self.is_inside(position):
            return None
        return self.grid[position.row][position.col]

    def set(self, position: Position, piece: Optional[Piece]) -> None:
        if self.is_inside(position):
            self.grid[position.row][position.col] = piece

    def remove(self, position: Position) -> None:
        self.set(position, None)

    def is_inside(self, position: Position) -> bool:
        return position.is_within_bounds()

    def is_empty(self, position: Position) -> bool:
        return self.get(position) is None

    def is_dark_square(self, position: Position) -> bool:
        return position.is_dark_square()

    def move_piece(self, from_position: Position, to_position: Position) -> None:
        """Relocate a piece. No capture semantics: whatever stood on the target square gets overwritten."""
        piece = self.get(from_position)
        self.remove(from_position)
        self.set(to_position, piece)

    # --- WHOLE BOARD QUERIES ---
    def locate_pieces(self, player: Player) -> list[tuple[Position, Piece]]:
        """All pieces of a player, scanned row by row"""
        return [
            (Position(row, col), piece)
            for row, pieces_in_row in enumerate(self.grid)
            for col, piece in enumerate(pieces_in_row)
            if piece is not None and piece.owner == player
        ]

    def count_pieces(self, player: Player) -> int:
        return len(self.locate_pieces(player))

    def count_kings(self, player: Player) -> int:
        return sum(1 for _, piece in self.locate_pieces(player) if piece.is_king())

    def count_men(self, player: Player) -> int:
        return self.count_pieces(player) - self.count_kings(player)

    def copy(self) -> Self:
        """Deep copy: pieces are never shared between two boards (undo snapshots and the move search rely on it)."""
        return type(self)(
            [
                [piece.copy() if piece is not None else None for piece in row]
                for row in self.grid
            ]
        )

    def setup_initial_position(self) -> None:
        """Clear the board and place 12 men per side on the dark squares of their starting rows."""
        self.grid = _empty_grid()
        for player, rows in STARTING_ROWS.items():
            for row in rows:
                for col in range(BOARD_SIZE):
                    position = Position(row, col)
                    if position.is_dark_square():
                        self.set(position, Piece(player))

    def __str__(self) -> str:
        """
        Text diagram, handy when debugging:
        w / W : white man / king
        b / B : black man / king
        . : empty dark square
        """
        lines = ["  " + " ".join(str(col) for col in range(BOARD_SIZE))]
        for row in range(BOARD_SIZE):
            cells: list[str] = []
            for col in range(BOARD_SIZE):
                position = Position(row, col)
                piece = self.get(position)
                if piece is None:
                    cells.append("." if position.is_dark_square() else " ")
                else:
                    symbol = "w" if piece.owner == Player.WHITE else "b"
                    cells.append(symbol.upper() if piece.is_king() else symbol)
            lines.append(f"{row} " + " ".join(cells))
        return "\n".join(lines)
