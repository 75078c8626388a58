"""Generate database session"""

import os
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from dame.db.schema import Base

DATABASE_URL = os.getenv("DAME_DATABASE_URL", "sqlite:///dame.db")
DATABASE_ECHO = os.getenv("DAME_DATABASE_ECHO", "0").lower() in {"1", "true", "yes"}

engine = create_engine(DATABASE_URL, echo=DATABASE_ECHO)
SessionLocal = sessionmaker(bind=engine)

# Ensure all tables are created
Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
