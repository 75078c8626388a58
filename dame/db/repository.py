"""Protocol for storing game sessions. The service only talks to this interface (SQL implementation in sql_repository.py)."""

from typing import Protocol
from uuid import UUID

from dame.core.models import GameModel


class SessionRepository(Protocol):
    """
    One record per session: both player names, the round being played and the match tally so far.
    Implementations store the GameModel as-is. Interpreting the board / turn / state strings is up to the engine.
    """

    def get_session(self, session_id: UUID) -> GameModel | None:
        """Stored round + score of the session, or None for an unknown id."""
        ...

    def create_session(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Open a new match. The repository hands out the session id."""
        ...

    def update_session(self, session_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the stored round + score after a move, forfeit, new round or match reset. None for an unknown id."""
        ...

    def delete_session(self, session_id: UUID) -> GameModel | None:
        """Drop the session. Returns what was stored, None if there was nothing to delete."""
        ...
