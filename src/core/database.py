"""Database connection and session management.

This module handles the database connection using SQLAlchemy. Importing it
also registers the row-level security and trigger listeners.
"""

import logging
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config import DATA_DIR, DATABASE_ECHO, DATABASE_URL
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401
from core import triggers  # noqa: F401
from core.policies import PolicySession

logger = logging.getLogger(__name__)

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=DATABASE_ECHO, connect_args=_connect_args)

SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine, class_=PolicySession
)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db(bind: Engine = None) -> None:
    """Create all tables that do not exist yet."""
    if DATABASE_URL.startswith("sqlite"):
        DATA_DIR.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database schema ready")


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_rollback(db: Session) -> None:
    """Commit the session, rolling back before re-raising on failure.

    Args:
        db: Session holding pending changes.

    Raises:
        PolicyViolationError: If a row-level security policy rejects a write.
        sqlalchemy.exc.IntegrityError: If a constraint rejects a write.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
