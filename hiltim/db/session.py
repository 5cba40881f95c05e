"""Database engine and session management for the local key/value store."""
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


@lru_cache()
def get_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create (once per URL) the engine backing local storage.

    SQLite connections are shared with FastAPI's worker threads, so
    check_same_thread is disabled for them.
    """
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=echo,
        connect_args=connect_args,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """
    Transaction context manager with automatic rollback.

    Usage:
        with session_scope(factory) as db:
            db.add(entry)
            # commit on success, rollback on exception
    """
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
