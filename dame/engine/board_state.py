"""
JSON encoding of the board / the multi-jump square, used to persist a game between requests.

Board: array of occupied squares only, e.g.
    [{"row": 0, "col": 1, "owner": "BLACK", "type": "MAN"}, ...]
Position: {"row": 3, "col": 2}, or nothing at all when no piece is pinned mid multi-jump.

Decoding is strict: a payload that cannot be trusted raises BoardStateError instead of being patched up.
"""

import logging
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from dame.core.exceptions import BoardStateError
from dame.core.shared_types import Color, PieceType as PieceTypeName
from dame.engine.board import Board
from dame.engine.pieces import Piece, PieceType, Player
from dame.engine.position import BOARD_SIZE, Position

logger = logging.getLogger(__name__)

Coordinate = Annotated[StrictInt, Field(ge=0, lt=BOARD_SIZE)]


class PositionRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    row: Coordinate
    col: Coordinate

    @classmethod
    def from_position(cls, position: Position) -> "PositionRecord":
        return cls(row=position.row, col=position.col)

    def to_position(self) -> Position:
        return Position(self.row, self.col)


class PieceRecord(BaseModel):
    """One occupied square"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    row: Coordinate
    col: Coordinate
    owner: Color
    type: PieceTypeName

    @model_validator(mode="after")
    def check_dark_square(self) -> "PieceRecord":
        if not Position(self.row, self.col).is_dark_square():
            raise ValueError(f"Piece on light square ({self.row},{self.col})")
        return self

    @classmethod
    def from_piece(cls, position: Position, piece: Piece) -> "PieceRecord":
        return cls(
            row=position.row,
            col=position.col,
            owner=Color(piece.owner.name),
            type=PieceTypeName(piece.type.name),
        )

    def to_piece(self) -> Piece:
        return Piece(Player[self.owner.value], PieceType[self.type.value])


BOARD_ADAPTER = TypeAdapter(list[PieceRecord])
POSITION_ADAPTER = TypeAdapter(Optional[PositionRecord])


def _is_absent(payload: Optional[str]) -> bool:
    return payload is None or payload.strip() == ""


def board_records(board: Board) -> list[PieceRecord]:
    """Occupied squares, row by row"""
    records = [
        PieceRecord.from_piece(position, piece)
        for player in Player
        for position, piece in board.locate_pieces(player)
    ]
    return sorted(records, key=lambda record: (record.row, record.col))


def serialize_board(board: Board) -> str:
    return BOARD_ADAPTER.dump_json(board_records(board)).decode()


def deserialize_board(payload: Optional[str]) -> Board:
    """No payload at all means: a game that has not started yet --> standard starting position."""
    if _is_absent(payload):
        return Board.initial()

    try:
        records = BOARD_ADAPTER.validate_json(payload)
    except ValidationError as exc:
        raise BoardStateError(f"Cannot interpret board state: {payload!r}") from exc

    board = Board.empty()
    for record in records:
        position = Position(record.row, record.col)
        if not board.is_empty(position):
            raise BoardStateError(f"Square {position} occurs twice in board state.")
        board.set(position, record.to_piece())

    logger.debug("Decoded board with %d pieces", len(records))
    return board


def serialize_position(position: Optional[Position]) -> Optional[str]:
    if position is None:
        return None
    return PositionRecord.from_position(position).model_dump_json()


def deserialize_position(payload: Optional[str]) -> Optional[Position]:
    if _is_absent(payload):
        return None

    try:
        record = POSITION_ADAPTER.validate_json(payload)
    except ValidationError as exc:
        raise BoardStateError(f"Cannot interpret position: {payload!r}") from exc
    return record.to_position() if record is not None else None
