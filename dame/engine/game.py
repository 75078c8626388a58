"""
GameLogic is the entrypoint into the domain layer for the service layer.
It owns the board and the turn state machine: applying moves, promotion, multi-jump continuation, end of game detection and undo.

Generating moves is always delegated to the MoveCalculator. GameLogic never hand-rolls movement rules.

NOTE: a GameLogic instance is plain mutable state without any locking. One instance belongs to one game session,
and whoever holds it makes sure calls are not made concurrently.
"""

import logging
from typing import Optional, Self

from dame.core.exceptions import GameStateError
from dame.core.models import GameModel
from dame.engine.board import Board
from dame.engine.board_state import deserialize_board, deserialize_position
from dame.engine.calculator import MoveCalculator
from dame.engine.history import GameHistory, GameSnapshot
from dame.engine.moves import Move
from dame.engine.pieces import PROMOTION_ROW, GameState, Piece, Player
from dame.engine.position import Position

logger = logging.getLogger(__name__)

STATUS_MESSAGES: dict[GameState, str] = {
    GameState.WHITE_WINS: "White wins!",
    GameState.BLACK_WINS: "Black wins!",
    GameState.DRAW: "Draw!",
}


class GameLogic:
    """
    Turn state machine
    ----

    IN_PROGRESS --> WHITE_WINS | BLACK_WINS | DRAW

    The terminal states are only left through `undo()` or `reset()`.
    Between a first capture and a forced follow-up capture by the same piece, `multi_jump_position` pins that piece.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        current_player: Player = Player.WHITE,
        state: GameState = GameState.IN_PROGRESS,
        multi_jump_position: Optional[Position] = None,
    ) -> None:
        """Without a board: a new game at the starting position. A board passed in is copied, never shared."""
        self.board = board.copy() if board is not None else Board.initial()
        self.current_player = current_player
        self.state = state
        self.multi_jump_position = multi_jump_position
        self.history = GameHistory()
        self.calculator = MoveCalculator(self.board)

    # --- DOMAIN LAYER API CALLED BY SERVICE---
    @classmethod
    def from_state(
        cls,
        board: Board,
        current_player: Player,
        state: GameState,
        multi_jump_position: Optional[Position] = None,
    ) -> Self:
        """Rebuild a game from externally persisted state. The history starts out empty: undo only reaches moves made on this instance."""
        return cls(board, current_player, state, multi_jump_position)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a GameLogic from the information the Service layer actually has"""

        # Validation
        if model.current_turn not in Player.__members__:
            raise GameStateError(
                f"Invalid player to move: {model.current_turn!r}. \nPick one from {','.join(Player.__members__)}"
            )
        if model.game_state not in GameState.__members__:
            raise GameStateError(
                f"Invalid game state: {model.game_state!r}. \nPick one from {','.join(GameState.__members__)}"
            )

        return cls.from_state(
            board=deserialize_board(model.board_state),
            current_player=Player[model.current_turn],
            state=GameState[model.game_state],
            multi_jump_position=deserialize_position(model.multi_jump_position),
        )

    def is_game_over(self) -> bool:
        return self.state != GameState.IN_PROGRESS

    def is_in_multi_jump(self) -> bool:
        return self.multi_jump_position is not None

    def is_own_piece(self, position: Position) -> bool:
        piece = self.board.get(position)
        return piece is not None and piece.owner == self.current_player

    def valid_moves(self) -> list[Move]:
        """All moves the player to move can choose from right now."""
        if self.is_game_over():
            return []

        if self.multi_jump_position is not None:
            return self.calculator.capture_moves_from(self.multi_jump_position)

        return self.calculator.valid_moves(self.current_player)

    def valid_moves_for(self, position: Position) -> list[Move]:
        """
        Moves for the piece on one square.

        NOTE: mandatory capture is decided for the whole side. If any piece can capture, a piece without a capture has no moves at all.
        """
        if self.is_game_over() or not self.is_own_piece(position):
            return []

        if self.multi_jump_position is not None:
            if position != self.multi_jump_position:
                return []
            return self.calculator.capture_moves_from(position)

        piece_moves = self.calculator.moves_for_position(position)
        if self.calculator.has_captures_available(self.current_player):
            return [move for move in piece_moves if move.is_capture()]
        return piece_moves

    def can_select(self, position: Position) -> bool:
        if self.is_game_over():
            return False

        if self.multi_jump_position is not None:
            return position == self.multi_jump_position

        return self.is_own_piece(position) and len(self.valid_moves_for(position)) > 0

    def resolve_move(self, requested: Move) -> Optional[Move]:
        """
        Find the legal move a request refers to.
        ----

        The request is matched on its start and end square.
        * Request lists captures? Then the capture sequence has to match exactly.
        * Request lists no captures, but several capture paths run from start to end? Ambiguous --> None.
          (The caller must then say which pieces it wants to take.)
        """
        if self.is_game_over():
            return None

        candidates = [
            move
            for move in self.valid_moves_for(requested.start)
            if move.matches(requested.start, requested.end)
        ]

        if requested.is_capture():
            return next(
                (move for move in candidates if move.captures == requested.captures),
                None,
            )

        if len(set(candidates)) > 1:
            logger.debug(
                "Ambiguous move %s: %d capture paths share start and end",
                requested,
                len(candidates),
            )
            return None

        return candidates[0] if candidates else None

    def apply_move(self, requested: Move) -> bool:
        """
        Attempt to make a move
        -----

        Returns True if the turn has ended, False if it has not.
        False also means: nothing happened (illegal request). Check `is_in_multi_jump()` / `resolve_move()` to tell the two apart.

        1. resolve the request against the legal moves
        2. save a snapshot (for undo)
        3. move the piece, remove every captured piece
        4. promote if the piece landed on the far row
        5. a man that just captured and can capture again stays on move (pinned). Otherwise the turn ends.
        """
        move = self.resolve_move(requested)
        if move is None:
            logger.debug("Rejected move %s for %s", requested, self.current_player.name)
            return False

        # Save snapshot BEFORE executing the move
        self.history.push(
            GameSnapshot.of(
                self.board, self.current_player, self.state, self.multi_jump_position
            )
        )

        piece = self.board.get(move.start)
        # for the type checker: a resolved move always starts on one of our pieces
        assert piece is not None
        self._update_board(move)
        self._promote_if_needed(piece, move.end)

        # NOTE kings are never probed for a continuation: their capture sequences are already complete compound moves
        if move.is_capture() and not piece.is_king():
            if self.calculator.capture_moves_from(move.end):
                self.multi_jump_position = move.end
                logger.debug("%s must continue jumping from %s", self.current_player.name, move.end)
                return False

        self._end_turn()
        return True

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def undo(self) -> bool:
        """Restore the state from right before the last applied move. False if there is nothing to undo."""
        snapshot = self.history.pop()
        if snapshot is None:
            logger.debug("Nothing to undo")
            return False

        self._restore(
            snapshot.board,
            snapshot.current_player,
            snapshot.game_state,
            snapshot.multi_jump_position,
        )
        return True

    def reset(self) -> None:
        self._restore(Board.initial(), Player.WHITE, GameState.IN_PROGRESS, None)
        self.history.clear()

    def status_message(self) -> str:
        if self.state == GameState.IN_PROGRESS:
            if self.is_in_multi_jump():
                return f"{self.current_player.name} must continue jumping"
            return f"{self.current_player.name}'s turn"
        return STATUS_MESSAGES[self.state]

    # -- PRIVATE HELPERS ---
    def _restore(
        self,
        board: Board,
        current_player: Player,
        state: GameState,
        multi_jump_position: Optional[Position],
    ) -> None:
        # copy again: the stored board (snapshot / caller's board) must never be aliased by the live game
        self.board = board.copy()
        self.current_player = current_player
        self.state = state
        self.multi_jump_position = multi_jump_position
        self.calculator = MoveCalculator(self.board)

    def _update_board(self, move: Move) -> None:
        self.board.move_piece(move.start, move.end)
        for captured in move.captures:
            self.board.remove(captured)

    def _promote_if_needed(self, piece: Piece, landing: Position) -> None:
        if not piece.is_king() and landing.row == PROMOTION_ROW[piece.owner]:
            piece.promote_to_king()

    def _end_turn(self) -> None:
        self.multi_jump_position = None
        self.current_player = self.current_player.opponent()
        self._update_game_state()

    def _update_game_state(self) -> None:
        """
        Performs checks to see if the game has ended and changes the state accordingly.

        NOTE the turn has already switched. The player to move is the opponent of the player who just moved.
        1. The player to move has no legal move --> the other player wins.
        2. A side has no pieces left --> the other side wins.
        3. A single king against a single king --> draw.
        """
        if not self.calculator.has_valid_moves(self.current_player):
            self._change_state(GameState.winner_of(self.current_player.opponent()))
            return

        for player in Player:
            if self.board.count_pieces(player) == 0:
                self._change_state(GameState.winner_of(player.opponent()))
                return

        if self._is_lone_king_each():
            self._change_state(GameState.DRAW)

    def _is_lone_king_each(self) -> bool:
        return all(
            self.board.count_pieces(player) == 1 and self.board.count_kings(player) == 1
            for player in Player
        )

    def _change_state(self, new_state: GameState) -> None:
        logger.info("Game over: %s", new_state.name)
        self.state = new_state
