"""Implementation of (Session)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from dame.core.models import GameModel
from dame.db.schema import DBSession

# Columns shared one-to-one between the GameModel and the DBSession table
MODEL_FIELDS: tuple[str, ...] = (
    "white_player",
    "black_player",
    "board_state",
    "current_turn",
    "game_state",
    "multi_jump_position",
    "white_wins",
    "black_wins",
    "draws",
    "games_played",
)


class SQLSessionRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_session(self, session_id: UUID) -> GameModel | None:
        """Get session by ID, if record exists."""
        session_db = self._fetch_session(session_id)
        if session_db:
            return self._to_model(session_db)
        return None

    def create_session(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new session and return the stored data + newly created session ID."""

        new_id = uuid4()
        session_db = DBSession(id=new_id)
        self._copy_fields(game, session_db)
        self.db.add(session_db)
        self.db.commit()
        self.db.refresh(session_db)
        return self._to_model(session_db), new_id

    def update_session(self, session_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite an existing record with the new state."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        self._copy_fields(game, session_db)
        self.db.commit()
        self.db.refresh(session_db)
        return self._to_model(session_db)

    def delete_session(self, session_id: UUID) -> GameModel | None:
        """Remove a session's record."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        game_model = self._to_model(session_db)
        self.db.delete(session_db)
        self.db.commit()
        return game_model

    def _fetch_session(self, session_id: UUID) -> DBSession | None:
        query = select(DBSession).where(DBSession.id == session_id)
        return self.db.scalar(query)

    def _copy_fields(self, game: GameModel, session_db: DBSession) -> None:
        for name in MODEL_FIELDS:
            setattr(session_db, name, getattr(game, name))

    def _to_model(self, session_db: DBSession) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(**{name: getattr(session_db, name) for name in MODEL_FIELDS})
