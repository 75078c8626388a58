"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from dame.db.schema import Base
from dame.engine.board import Board
from dame.engine.pieces import Piece, PieceType, Player
from dame.engine.position import Position

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


# --- BOARD SETUP HELPERS ---
PiecePlacement = tuple[int, int, Player, PieceType]
BoardFactory = Callable[..., Board]


def place(board: Board, row: int, col: int, owner: Player, piece_type: PieceType = PieceType.MAN) -> None:
    board.set(Position(row, col), Piece(owner, piece_type))


@pytest.fixture
def make_board() -> BoardFactory:
    """
    Build a board from (row, col, owner, type) tuples, e.g.
    make_board((5, 0, Player.WHITE, PieceType.MAN), (4, 1, Player.BLACK, PieceType.KING))
    """

    def _make_board(*placements: PiecePlacement) -> Board:
        board = Board.empty()
        for row, col, owner, piece_type in placements:
            place(board, row, col, owner, piece_type)
        return board

    return _make_board
