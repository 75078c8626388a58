"""Defines the players, the types of pieces, and the outcome of a single game"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from dame.engine.position import Vector


class Player(Enum):
    """WHITE always moves first. WHITE starts on rows 5-7 and moves up the board (decreasing row), BLACK the reverse."""

    WHITE = auto()
    BLACK = auto()

    def opponent(self) -> Player:
        return Player.BLACK if self == Player.WHITE else Player.WHITE


class PieceType(Enum):
    MAN = auto()
    KING = auto()


class GameState(Enum):
    IN_PROGRESS = auto()
    WHITE_WINS = auto()
    BLACK_WINS = auto()
    DRAW = auto()

    @classmethod
    def winner_of(cls, player: Player) -> GameState:
        return cls.WHITE_WINS if player == Player.WHITE else cls.BLACK_WINS


# Men only step forward. (Captures go in all four directions, see moves.py)
FORWARD_DIRECTIONS: dict[Player, tuple[Vector, ...]] = {
    Player.WHITE: ((-1, -1), (-1, 1)),
    Player.BLACK: ((1, -1), (1, 1)),
}

# A man reaching the opponent's back row gets promoted
PROMOTION_ROW: dict[Player, int] = {
    Player.WHITE: 0,
    Player.BLACK: 7,
}


@dataclass
class Piece:
    owner: Player
    type: PieceType = PieceType.MAN

    def __setattr__(self, name: str, value: Any) -> None:
        # NOTE: pieces never change sides, and a king never goes back to being a man
        if name == "owner" and hasattr(self, "owner"):
            raise AttributeError("The owner of a piece cannot be changed.")
        if name == "type" and getattr(self, "type", None) == PieceType.KING and value != PieceType.KING:
            raise AttributeError("A king cannot be demoted.")
        super().__setattr__(name, value)

    def is_king(self) -> bool:
        return self.type == PieceType.KING

    def promote_to_king(self) -> None:
        self.type = PieceType.KING

    def copy(self) -> Piece:
        return Piece(self.owner, self.type)
