"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBSession(Base):
    """One game session: the current round (board + turn + state) and the running match score."""

    __tablename__ = "sessions"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    white_player: Mapped[str]
    black_player: Mapped[str]
    board_state: Mapped[str] = mapped_column(Text)  # JSON array of occupied squares
    current_turn: Mapped[str]
    game_state: Mapped[str]
    multi_jump_position: Mapped[Optional[str]]
    white_wins: Mapped[int] = mapped_column(default=0)
    black_wins: Mapped[int] = mapped_column(default=0)
    draws: Mapped[int] = mapped_column(default=0)
    games_played: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
