"""
Database engine and sessions for the FanSense tables.

DATABASE_URL picks the store (SQLite file by default). Route handlers open
a SessionLocal() for reads; writes go through get_session(), which commits
on success and rolls back on error.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from fansense.config import config


class Base(DeclarativeBase):
    """Declarative base shared by sensor_readings and dataset_readings."""


# The device POST and the dashboard polls arrive on different Flask threads
connect_args = {'check_same_thread': False} if config.database.is_sqlite else {}

engine = create_engine(config.database.url, connect_args=connect_args)

# Rows are serialized after the session has closed
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Session scope for writes: commit, or roll back and re-raise."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create sensor_readings and dataset_readings if they are missing."""
    Base.metadata.create_all(bind=engine)
