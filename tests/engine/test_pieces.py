"""Unit tests for /dame/engine/pieces.py"""

import pytest

from dame.engine.pieces import PROMOTION_ROW, GameState, Piece, PieceType, Player


def test_opponent() -> None:
    assert Player.WHITE.opponent() == Player.BLACK
    assert Player.BLACK.opponent() == Player.WHITE


def test_new_piece_is_a_man() -> None:
    piece = Piece(Player.WHITE)
    assert piece.type == PieceType.MAN
    assert not piece.is_king()


def test_promotion() -> None:
    piece = Piece(Player.BLACK)
    piece.promote_to_king()
    assert piece.is_king()
    assert piece.owner == Player.BLACK

    # promoting twice is harmless
    piece.promote_to_king()
    assert piece.is_king()


def test_king_cannot_be_demoted() -> None:
    piece = Piece(Player.WHITE, PieceType.KING)
    with pytest.raises(AttributeError):
        piece.type = PieceType.MAN


def test_owner_cannot_change() -> None:
    piece = Piece(Player.WHITE)
    with pytest.raises(AttributeError):
        piece.owner = Player.BLACK


def test_copy_is_independent() -> None:
    piece = Piece(Player.WHITE)
    copied = piece.copy()
    assert copied == piece
    assert copied is not piece

    copied.promote_to_king()
    assert not piece.is_king()


@pytest.mark.parametrize(
    "player, state",
    [(Player.WHITE, GameState.WHITE_WINS), (Player.BLACK, GameState.BLACK_WINS)],
)
def test_winner_of(player: Player, state: GameState) -> None:
    assert GameState.winner_of(player) == state


def test_promotion_rows_are_the_opponents_back_rows() -> None:
    assert PROMOTION_ROW[Player.WHITE] == 0
    assert PROMOTION_ROW[Player.BLACK] == 7
