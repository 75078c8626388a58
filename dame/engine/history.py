"""Undo support: a stack of snapshots, one pushed right before every applied move."""

from dataclasses import dataclass, field
from typing import Optional, Self

from dame.engine.board import Board
from dame.engine.pieces import GameState, Player
from dame.engine.position import Position


@dataclass(frozen=True)
class GameSnapshot:
    """Complete game state just before a move. The board is a deep copy, so later moves cannot corrupt it."""

    board: Board
    current_player: Player
    game_state: GameState
    multi_jump_position: Optional[Position]

    @classmethod
    def of(
        cls,
        board: Board,
        current_player: Player,
        game_state: GameState,
        multi_jump_position: Optional[Position],
    ) -> Self:
        return cls(board.copy(), current_player, game_state, multi_jump_position)


@dataclass
class GameHistory:
    """LIFO stack of snapshots. No depth limit: every move of the game can be undone."""

    snapshots: list[GameSnapshot] = field(default_factory=list)

    def push(self, snapshot: GameSnapshot) -> None:
        self.snapshots.append(snapshot)

    def pop(self) -> Optional[GameSnapshot]:
        """Most recent snapshot, or None when there is nothing to undo"""
        if not self.snapshots:
            return None
        return self.snapshots.pop()

    def can_undo(self) -> bool:
        return len(self.snapshots) > 0

    def clear(self) -> None:
        self.snapshots.clear()

    def __len__(self) -> int:
        return len(self.snapshots)
