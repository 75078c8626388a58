"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PlayerName = str
JSONPayload = str


@dataclass
class GameModel:
    """Transport-safe representation of one session (current round + match score) used between Service, DB, and Game layers."""

    white_player: PlayerName
    black_player: PlayerName
    board_state: JSONPayload
    current_turn: str
    game_state: str
    multi_jump_position: Optional[JSONPayload] = None
    white_wins: int = 0
    black_wins: int = 0
    draws: int = 0
    games_played: int = 0
