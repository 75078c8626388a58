"""Combines the per-piece rules of moves.py into the legal move set of a player (mandatory capture rule)."""

from typing import Optional

from dame.engine.board import Board
from dame.engine.moves import CAPTURE_RULES, MOVEMENT_RULES, Move
from dame.engine.pieces import Piece, Player
from dame.engine.position import Position


class MoveCalculator:
    """
    Calculates the valid moves on one board.
    ----

    Holds nothing but a reference to the board, so the answers always reflect the board's current position.
    Capture moves are always complete sequences: every terminal branch of the capture search is its own option (free choice).
    """

    def __init__(self, board: Board) -> None:
        self.board = board

    def valid_moves(self, player: Player) -> list[Move]:
        """
        1. generate the moves of every piece of the player
        2. split them into captures and simple moves
        3. any capture available? --> only the captures are valid. Otherwise all simple moves are.
        """
        simple_moves: list[Move] = []
        capture_moves: list[Move] = []
        for position, piece in self.board.locate_pieces(player):
            for move in self.moves_for_piece(position, piece):
                if move.is_capture():
                    capture_moves.append(move)
                else:
                    simple_moves.append(move)
        return capture_moves if capture_moves else simple_moves

    def moves_for_piece(self, position: Position, piece: Optional[Piece]) -> list[Move]:
        """A piece that can capture never gets its simple moves (regardless of what other pieces of the player can do)."""
        if piece is None:
            return []

        captures = CAPTURE_RULES[piece.type](position, self.board)
        if captures:
            return captures
        return MOVEMENT_RULES[piece.type](position, self.board)

    def moves_for_position(self, position: Position) -> list[Move]:
        return self.moves_for_piece(position, self.board.get(position))

    def has_valid_moves(self, player: Player) -> bool:
        return len(self.valid_moves(player)) > 0

    def has_captures_available(self, player: Player) -> bool:
        return any(
            move.is_capture()
            for position, piece in self.board.locate_pieces(player)
            for move in self.moves_for_piece(position, piece)
        )

    def capture_moves_from(self, position: Position) -> list[Move]:
        """Captures only, for the piece on one square (used to continue a multi-jump)."""
        return [
            move for move in self.moves_for_position(position) if move.is_capture()
        ]
