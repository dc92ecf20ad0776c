from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import create_all


def get_engine(sqlite_path: str) -> Engine:
    """Create an engine with all tables in place (caller must dispose it)."""
    engine = create_engine(f"sqlite:///{sqlite_path}", future=True)
    create_all(engine)
    return engine


@contextmanager
def session_context(sqlite_path: str) -> Generator[Session, None, None]:
    """
    Context manager for one request's SQLAlchemy session.

    The session gets its own engine, which is disposed on exit so no pooled
    connection outlives the request. Repository mutations commit on their
    own; anything still pending when an exception escapes is rolled back.

    Usage:
        with session_context(sqlite_path) as session:
            ctx = build_context(session, auth, token)
    """
    engine = get_engine(sqlite_path)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
