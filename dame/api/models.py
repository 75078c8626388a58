"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from dame.core.exceptions import InvalidRequestError
from dame.core.shared_types import Color, GameStatus
from dame.engine.board_state import PieceRecord
from dame.engine.moves import Move
from dame.engine.position import BOARD_SIZE, Position

PlayerName = str


# --- SHARED PIECES OF REQUESTS / RESPONSES ---
class SquareModel(BaseModel):
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not (0 <= value < BOARD_SIZE):
            raise InvalidRequestError(
                f"Coordinate {value!r} is not on the board (0 - {BOARD_SIZE - 1})."
            )
        return value

    @classmethod
    def from_position(cls, position: Position) -> Self:
        return cls(row=position.row, col=position.col)

    def to_position(self) -> Position:
        return Position(self.row, self.col)


class MoveModel(BaseModel):
    start: SquareModel
    end: SquareModel
    captures: list[SquareModel] = []

    @classmethod
    def from_move(cls, move: Move) -> Self:
        return cls(
            start=SquareModel.from_position(move.start),
            end=SquareModel.from_position(move.end),
            captures=[SquareModel.from_position(square) for square in move.captures],
        )

    def to_move(self) -> Move:
        return Move(
            self.start.to_position(),
            self.end.to_position(),
            tuple(square.to_position() for square in self.captures),
        )


def _validate_player_name(value: str) -> str:
    if not value.strip():
        raise InvalidRequestError("Player name cannot be blank.")
    return value


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    white_player: PlayerName
    black_player: PlayerName

    @field_validator(*["white_player", "black_player"])
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)

    @model_validator(mode="after")
    def validate_distinct_players(self) -> Self:
        if self.white_player == self.black_player:
            raise InvalidRequestError(
                f"A player cannot play against themselves: {self.white_player!r}"
            )
        return self


class GetSessionRequest(BaseModel):
    session_id: UUID


class DeleteSessionRequest(BaseModel):
    session_id: UUID


class LegalMovesRequest(BaseModel):
    """Without a square: all legal moves of the player. With a square: only those of the piece standing there."""

    session_id: UUID
    player_name: PlayerName
    square: Optional[SquareModel] = None


class MoveRequest(BaseModel):
    """
    Captures are optional. They are only needed to pick one of several capture paths
    that start and end on the same squares.
    """

    session_id: UUID
    player_name: PlayerName
    move: MoveModel


class ForfeitRequest(BaseModel):
    session_id: UUID
    player_name: PlayerName

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)


# --- RESPONSE MODELS ---
class ScoreModel(BaseModel):
    white_wins: int
    black_wins: int
    draws: int
    games_played: int
    match_winner: Optional[Color]


class SessionResponse(BaseModel):
    session_id: UUID
    players: dict[Color, PlayerName]
    board: list[PieceRecord]
    current_turn: Color
    game_state: GameStatus
    multi_jump_position: Optional[SquareModel]
    status_message: str
    score: ScoreModel


class LegalMovesResponse(BaseModel):
    session_id: UUID
    player_name: PlayerName
    color: Color
    legal_moves: list[MoveModel]


class MoveResponse(BaseModel):
    session_id: UUID
    move: MoveModel
    turn_ended: bool
    session: SessionResponse
