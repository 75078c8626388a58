"""
Movement and capturing rules of Ghanaian Dame

Key idea: Use strategy pattern to define the moves for each piece type.

* Mandatory capture: if any capture is available, the player must capture.
* Free choice: the player may pick ANY complete capture sequence, not only the longest.
* Men step forward only, but capture in all four diagonal directions.
* Kings fly: they move and capture at any distance along a diagonal.

Combining the rules per player (mandatory capture) is done by the MoveCalculator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol, Self

from dame.engine.pieces import FORWARD_DIRECTIONS, Piece, PieceType, Player
from dame.engine.position import ALL_DIRECTIONS, Position


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def get(self, position: Position) -> Optional[Piece]: ...
    def is_inside(self, position: Position) -> bool: ...
    def is_empty(self, position: Position) -> bool: ...
    def remove(self, position: Position) -> None: ...
    def move_piece(self, from_position: Position, to_position: Position) -> None: ...
    def copy(self) -> Self: ...


@dataclass(frozen=True)
class Move:
    """
    A move from start to end. The captured squares are listed in the order they were jumped.
    No captures means a simple move.

    NOTE: two moves are equal only if start, end AND captures agree. Use `matches()` to select on start/end alone.
    """

    start: Position
    end: Position
    captures: tuple[Position, ...] = ()

    def is_capture(self) -> bool:
        return len(self.captures) > 0

    def capture_count(self) -> int:
        return len(self.captures)

    def matches(self, start: Position, end: Position) -> bool:
        return self.start == start and self.end == end

    def __str__(self) -> str:
        if self.is_capture():
            return f"{self.start}x{self.end}"
        return f"{self.start}-{self.end}"


# --- SIMPLE MOVES ---
def man_simple_moves(position: Position, board: Board) -> list[Move]:
    """A man steps a single square diagonally forward, onto an empty square."""
    piece = board.get(position)
    if piece is None:
        return []

    moves: list[Move] = []
    for direction in FORWARD_DIRECTIONS[piece.owner]:
        target = position.step(direction)
        if board.is_inside(target) and board.is_empty(target):
            moves.append(Move(position, target))
    return moves


def king_simple_moves(position: Position, board: Board) -> list[Move]:
    """
    Flying king: slide along each diagonal until the edge of the board or another piece.
    Every empty square along the way is a separate move (not just the farthest one).
    """
    if board.get(position) is None:
        return []

    moves: list[Move] = []
    for direction in ALL_DIRECTIONS:
        target = position.step(direction)
        while board.is_inside(target) and board.is_empty(target):
            moves.append(Move(position, target))
            target = target.step(direction)
    return moves


# --- CAPTURES ---
def man_captures(position: Position, board: Board) -> list[Move]:
    """
    All complete capture sequences for the man standing on `position`.
    The search runs on a copy, so the board passed in is never touched.
    """
    piece = board.get(position)
    if piece is None:
        return []
    return list(
        _man_capture_sequences(position, position, piece.owner, (), board.copy())
    )


def king_captures(position: Position, board: Board) -> list[Move]:
    """
    All complete capture sequences for the king standing on `position`.
    Different intermediate landing squares can end in the same sequence: each Move is listed once (in order of discovery).
    """
    piece = board.get(position)
    if piece is None:
        return []
    return list(
        dict.fromkeys(
            _king_capture_sequences(position, position, piece.owner, (), board.copy())
        )
    )


def _is_capturable(
    piece: Optional[Piece], target: Position, owner: Player, captured: tuple[Position, ...]
) -> bool:
    return piece is not None and piece.owner != owner and target not in captured


def _jump(board: Board, current: Position, enemy: Position, landing: Position) -> Board:
    """The board after a single hop: a fresh copy per branch, so sibling branches never see each other's captures."""
    next_board = board.copy()
    next_board.remove(enemy)
    next_board.move_piece(current, landing)
    return next_board


def _man_capture_sequences(
    origin: Position,
    current: Position,
    owner: Player,
    captured: tuple[Position, ...],
    board: Board,
) -> Iterator[Move]:
    """
    Recursive search for men
    ----

    From the current square, look at all four diagonals:
    an enemy piece right next to us + an empty square right behind it --> hop over it and keep searching from the landing square.

    A branch ends (and gets recorded as one Move from the origin) exactly when no further hop exists.
    """
    found_capture = False
    for direction in ALL_DIRECTIONS:
        enemy = current.step(direction)
        landing = current.step(direction, 2)
        if not board.is_inside(landing):
            continue

        if not _is_capturable(board.get(enemy), enemy, owner, captured):
            continue

        if not board.is_empty(landing):
            continue

        found_capture = True
        yield from _man_capture_sequences(
            origin,
            landing,
            owner,
            captured + (enemy,),
            _jump(board, current, enemy, landing),
        )

    if not found_capture and captured:
        yield Move(origin, current, captured)


def _king_capture_sequences(
    origin: Position,
    current: Position,
    owner: Player,
    captured: tuple[Position, ...],
    board: Board,
) -> Iterator[Move]:
    """
    Recursive search for (flying) kings
    ----

    Same idea as for men, but along each diagonal we scan outward to the first occupied square.
    * First occupied square is an enemy? Every empty square beyond it (until blocked) is a possible landing square.
    * Whatever the first occupied square holds, the scan in that direction stops there:
      a piece hiding behind another one can only be reached from a new landing square.
    """
    found_capture = False
    for direction in ALL_DIRECTIONS:
        scan = current.step(direction)
        while board.is_inside(scan) and board.is_empty(scan):
            scan = scan.step(direction)

        if not board.is_inside(scan):
            continue

        if not _is_capturable(board.get(scan), scan, owner, captured):
            continue

        landing = scan.step(direction)
        while board.is_inside(landing) and board.is_empty(landing):
            found_capture = True
            yield from _king_capture_sequences(
                origin,
                landing,
                owner,
                captured + (scan,),
                _jump(board, current, scan, landing),
            )
            landing = landing.step(direction)

    if not found_capture and captured:
        yield Move(origin, current, captured)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovesFn = Callable[[Position, Board], list[Move]]

MOVEMENT_RULES: dict[PieceType, MovesFn] = {
    PieceType.MAN: man_simple_moves,
    PieceType.KING: king_simple_moves,
}

CAPTURE_RULES: dict[PieceType, MovesFn] = {
    PieceType.MAN: man_captures,
    PieceType.KING: king_captures,
}
