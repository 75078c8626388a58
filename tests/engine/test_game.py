"""Unit tests for /dame/engine/game.py"""

from unittest.mock import patch

import pytest

from dame.core.exceptions import BoardStateError, GameStateError
from dame.core.models import GameModel
from dame.engine.board import Board
from dame.engine.board_state import serialize_board, serialize_position
from dame.engine.game import GameLogic
from dame.engine.moves import Move
from dame.engine.pieces import GameState, Piece, PieceType, Player
from dame.engine.position import Position

WHITE, BLACK = Player.WHITE, Player.BLACK
MAN, KING = PieceType.MAN, PieceType.KING


def P(row: int, col: int) -> Position:
    return Position(row, col)


def game_on(board: Board, player: Player = WHITE, multi_jump_position: Position | None = None) -> GameLogic:
    return GameLogic.from_state(board, player, GameState.IN_PROGRESS, multi_jump_position)


@pytest.fixture
def ring_board(make_board) -> Board:
    """Four BLACK men around (3,2): the WHITE man on (5,2) can capture them going either way round"""
    return make_board(
        (5, 2, WHITE, MAN),
        (4, 1, BLACK, MAN),
        (2, 1, BLACK, MAN),
        (2, 3, BLACK, MAN),
        (4, 3, BLACK, MAN),
        (0, 7, BLACK, MAN),
    )


# -- NEW GAME ---
def test_new_game() -> None:
    game = GameLogic()
    assert game.board == Board.initial()
    assert game.current_player == WHITE
    assert game.state == GameState.IN_PROGRESS
    assert not game.is_in_multi_jump()
    assert not game.can_undo()
    assert game.status_message() == "WHITE's turn"
    assert len(game.valid_moves()) == 7


def test_from_state_copies_the_board(make_board) -> None:
    board = make_board((5, 2, WHITE, MAN), (2, 1, BLACK, MAN))
    game = game_on(board)
    game.apply_move(Move(P(5, 2), P(4, 3)))
    assert board.get(P(5, 2)) == Piece(WHITE)


def test_from_state_skips_the_starting_position(make_board) -> None:
    board = make_board((5, 2, WHITE, MAN), (2, 1, BLACK, MAN))
    with patch.object(Board, "initial") as initial:
        game = GameLogic.from_state(board, BLACK, GameState.IN_PROGRESS)
    initial.assert_not_called()
    assert game.board == board
    assert game.current_player == BLACK


# -- MAKING MOVES ---
def test_simple_move_switches_the_turn() -> None:
    game = GameLogic()
    assert game.apply_move(Move(P(5, 2), P(4, 3)))
    assert game.board.is_empty(P(5, 2))
    assert game.board.get(P(4, 3)) == Piece(WHITE)
    assert game.current_player == BLACK
    assert game.state == GameState.IN_PROGRESS


@pytest.mark.parametrize(
    "move",
    [
        Move(P(5, 2), P(3, 4)),  # too far for a man
        Move(P(6, 1), P(5, 0)),  # blocked by its own piece
        Move(P(2, 1), P(3, 2)),  # not WHITE's piece
        Move(P(4, 3), P(3, 4)),  # empty square
    ],
)
def test_illegal_move_changes_nothing(move: Move) -> None:
    game = GameLogic()
    assert not game.apply_move(move)
    assert game.board == Board.initial()
    assert game.current_player == WHITE
    assert not game.can_undo()


def test_capture_removes_the_piece(make_board) -> None:
    board = make_board((5, 0, WHITE, MAN), (4, 1, BLACK, MAN), (2, 3, BLACK, MAN), (0, 7, BLACK, MAN))
    game = game_on(board)
    assert game.apply_move(Move(P(5, 0), P(1, 4)))
    assert game.board.is_empty(P(4, 1))
    assert game.board.is_empty(P(2, 3))
    assert game.board.get(P(1, 4)) == Piece(WHITE)
    assert game.board.count_pieces(BLACK) == 1
    assert game.current_player == BLACK


def test_simple_move_refused_while_a_capture_exists(make_board) -> None:
    board = make_board((5, 0, WHITE, MAN), (5, 4, WHITE, MAN), (4, 1, BLACK, MAN), (0, 7, BLACK, MAN))
    game = game_on(board)
    assert game.valid_moves_for(P(5, 4)) == []
    assert not game.can_select(P(5, 4))
    assert game.can_select(P(5, 0))
    assert not game.apply_move(Move(P(5, 4), P(4, 5)))


def test_promotion_on_the_far_row(make_board) -> None:
    board = make_board((1, 2, WHITE, MAN), (3, 6, BLACK, MAN))
    game = game_on(board)
    assert game.apply_move(Move(P(1, 2), P(0, 1)))
    assert game.board.get(P(0, 1)) == Piece(WHITE, KING)
    assert game.current_player == BLACK


def test_undo_turns_the_king_back_into_a_man(make_board) -> None:
    board = make_board((1, 2, WHITE, MAN), (3, 6, BLACK, MAN))
    game = game_on(board)
    game.apply_move(Move(P(1, 2), P(0, 1)))
    assert game.board.get(P(0, 1)).is_king()

    assert game.undo()
    assert game.board.get(P(1, 2)) == Piece(WHITE, MAN)
    assert game.board.is_empty(P(0, 1))
    assert game.current_player == WHITE


def test_black_promotes_on_row_seven(make_board) -> None:
    board = make_board((6, 1, BLACK, MAN), (3, 6, WHITE, MAN))
    game = game_on(board, BLACK)
    assert game.apply_move(Move(P(6, 1), P(7, 2)))
    assert game.board.get(P(7, 2)).is_king()


def test_promoted_piece_is_not_pinned(make_board) -> None:
    """A man that promotes by capturing ends the turn, even where the new king could capture again"""
    board = make_board((2, 1, WHITE, MAN), (1, 2, BLACK, MAN), (3, 6, BLACK, MAN))
    game = game_on(board)
    assert game.apply_move(Move(P(2, 1), P(0, 3)))
    assert game.board.get(P(0, 3)) == Piece(WHITE, KING)
    assert not game.is_in_multi_jump()
    assert game.current_player == BLACK


# -- MULTI-JUMP PIN ---
def test_pinned_piece_must_continue(make_board) -> None:
    board = make_board((3, 2, WHITE, MAN), (6, 1, WHITE, MAN), (2, 3, BLACK, MAN), (0, 7, BLACK, MAN))
    game = game_on(board, multi_jump_position=P(3, 2))

    assert game.is_in_multi_jump()
    assert game.status_message() == "WHITE must continue jumping"
    assert game.valid_moves() == [Move(P(3, 2), P(1, 4), (P(2, 3),))]
    assert game.valid_moves_for(P(6, 1)) == []
    assert game.can_select(P(3, 2))
    assert not game.can_select(P(6, 1))
    assert not game.apply_move(Move(P(6, 1), P(5, 0)))

    assert game.apply_move(Move(P(3, 2), P(1, 4)))
    assert not game.is_in_multi_jump()
    assert game.current_player == BLACK


# -- MOVE RESOLUTION ---
def test_ambiguous_request_is_rejected(ring_board: Board) -> None:
    game = game_on(ring_board)
    assert len(game.valid_moves()) == 2
    assert game.resolve_move(Move(P(5, 2), P(5, 2))) is None
    assert not game.apply_move(Move(P(5, 2), P(5, 2)))
    assert game.board == ring_board


def test_captures_pick_one_path(ring_board: Board) -> None:
    game = game_on(ring_board)
    path = (P(4, 3), P(2, 3), P(2, 1), P(4, 1))
    assert game.resolve_move(Move(P(5, 2), P(5, 2), path)) == Move(P(5, 2), P(5, 2), path)
    assert game.apply_move(Move(P(5, 2), P(5, 2), path))
    assert game.board.count_pieces(BLACK) == 1
    assert game.board.get(P(5, 2)) == Piece(WHITE)
    assert game.state == GameState.IN_PROGRESS


def test_wrong_capture_list_is_rejected(ring_board: Board) -> None:
    game = game_on(ring_board)
    assert game.resolve_move(Move(P(5, 2), P(5, 2), (P(4, 3), P(2, 3)))) is None


def test_unambiguous_request_without_captures(make_board) -> None:
    board = make_board((7, 0, WHITE, KING), (4, 3, BLACK, MAN), (0, 1, BLACK, MAN))
    game = game_on(board)
    assert game.resolve_move(Move(P(7, 0), P(2, 5))) == Move(P(7, 0), P(2, 5), (P(4, 3),))


# -- END OF GAME ---
def test_capturing_the_last_piece_wins(make_board) -> None:
    board = make_board((5, 2, WHITE, MAN), (4, 3, BLACK, MAN))
    game = game_on(board)
    assert game.apply_move(Move(P(5, 2), P(3, 4)))
    assert game.state == GameState.WHITE_WINS
    assert game.is_game_over()
    assert game.status_message() == "White wins!"
    assert game.valid_moves() == []
    assert not game.apply_move(Move(P(3, 4), P(2, 3)))


def test_boxed_in_player_loses(make_board) -> None:
    """BLACK still has a man on the board, but it cannot move: WHITE wins"""
    board = make_board(
        (2, 1, BLACK, MAN),
        (1, 0, WHITE, MAN),
        (1, 2, WHITE, MAN),
        (3, 0, WHITE, MAN),
        (3, 2, WHITE, MAN),
        (0, 3, WHITE, MAN),
        (4, 3, WHITE, MAN),
        (6, 5, WHITE, MAN),
    )
    game = game_on(board)
    assert game.apply_move(Move(P(6, 5), P(5, 4)))
    assert game.board.count_pieces(BLACK) == 1
    assert game.state == GameState.WHITE_WINS


def test_lone_kings_draw(make_board) -> None:
    board = make_board((1, 0, WHITE, KING), (7, 6, BLACK, KING))
    game = game_on(board)
    assert game.apply_move(Move(P(1, 0), P(0, 1)))
    assert game.state == GameState.DRAW
    assert game.status_message() == "Draw!"


def test_king_against_man_plays_on(make_board) -> None:
    board = make_board((1, 0, WHITE, KING), (2, 7, BLACK, MAN))
    game = game_on(board)
    assert game.apply_move(Move(P(1, 0), P(0, 1)))
    assert game.state == GameState.IN_PROGRESS


# -- UNDO / RESET ---
def test_undo_restores_the_previous_position() -> None:
    game = GameLogic()
    game.apply_move(Move(P(5, 2), P(4, 3)))
    game.apply_move(Move(P(2, 1), P(3, 2)))
    assert game.current_player == WHITE

    assert game.undo()
    assert game.current_player == BLACK
    assert game.board.get(P(2, 1)) == Piece(BLACK)
    assert game.board.is_empty(P(3, 2))

    assert game.undo()
    assert game.board == Board.initial()
    assert game.current_player == WHITE
    assert not game.can_undo()
    assert not game.undo()


def test_undo_leaves_a_finished_game(make_board) -> None:
    board = make_board((5, 2, WHITE, MAN), (4, 3, BLACK, MAN))
    game = game_on(board)
    game.apply_move(Move(P(5, 2), P(3, 4)))
    assert game.undo()
    assert game.state == GameState.IN_PROGRESS
    assert game.board == board


def test_undo_restores_the_pin(make_board) -> None:
    board = make_board((3, 2, WHITE, MAN), (2, 3, BLACK, MAN), (0, 7, BLACK, MAN))
    game = game_on(board, multi_jump_position=P(3, 2))
    game.apply_move(Move(P(3, 2), P(1, 4)))
    game.undo()
    assert game.multi_jump_position == P(3, 2)
    assert game.current_player == WHITE


def test_reset() -> None:
    game = GameLogic()
    game.apply_move(Move(P(5, 2), P(4, 3)))
    game.reset()
    assert game.board == Board.initial()
    assert game.current_player == WHITE
    assert game.state == GameState.IN_PROGRESS
    assert not game.can_undo()


# -- REBUILDING FROM STORAGE ---
def make_model(**overrides) -> GameModel:
    fields = dict(
        white_player="ama",
        black_player="kofi",
        board_state=serialize_board(Board.initial()),
        current_turn="BLACK",
        game_state="IN_PROGRESS",
    )
    fields.update(overrides)
    return GameModel(**fields)


def test_from_model() -> None:
    game = GameLogic.from_model(make_model(multi_jump_position=serialize_position(P(2, 1))))
    assert game.current_player == BLACK
    assert game.state == GameState.IN_PROGRESS
    assert game.multi_jump_position == P(2, 1)
    assert game.board == Board.initial()


@pytest.mark.parametrize(
    "overrides",
    [{"current_turn": "RED"}, {"game_state": "STALEMATE"}, {"current_turn": "white"}],
)
def test_from_model_rejects_unknown_names(overrides: dict) -> None:
    with pytest.raises(GameStateError):
        GameLogic.from_model(make_model(**overrides))


def test_from_model_rejects_corrupt_board() -> None:
    with pytest.raises(BoardStateError):
        GameLogic.from_model(make_model(board_state="[{]"))
