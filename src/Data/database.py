"""
Database engine, session, and utilities for the planner.
Uses SQLAlchemy with SQLite by default.
"""

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
import uuid
from datetime import datetime, timezone

from config import DATABASE_URL

connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


class DuplicateIdError(ValueError):
    """A client-supplied id is already taken."""


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def init_db(bind=None):
    """Create all tables if they don't exist."""
    # Import models so they are registered on Base.metadata
    import Data.models  # noqa: F401

    Base.metadata.create_all(bind or engine)


def insert_row(db: Session, row):
    """Add a row and commit. Raises DuplicateIdError on a primary key clash."""
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateIdError(
            f"{type(row).__name__} with id '{row.id}' already exists"
        )
    db.refresh(row)
    return row


def get_db():
    """Get a database session."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
