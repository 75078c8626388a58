"""
Type definitions used across layers
"""

from enum import StrEnum

# --- NOTE The engine has its own Player / PieceType / GameState enums. These string versions carry the same names,
# --- so a symbolic name read from storage or a request maps onto the engine enum with Enum[name]


class Color(StrEnum):
    WHITE = "WHITE"
    BLACK = "BLACK"


class PieceType(StrEnum):
    MAN = "MAN"
    KING = "KING"


class GameStatus(StrEnum):
    IN_PROGRESS = "IN_PROGRESS"
    WHITE_WINS = "WHITE_WINS"
    BLACK_WINS = "BLACK_WINS"
    DRAW = "DRAW"
