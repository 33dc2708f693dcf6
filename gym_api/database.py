"""Database engine and helpers.

The engine is built from the configured `DATABASE_URL` by the app
factory and stored on `app.state`; request handlers receive a `Session`
through the `get_session` dependency.
"""

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for `database_url`.

    SQLite connections are shared across the server's worker threads, so
    the same-thread check is disabled for them.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args)


def create_db_and_tables(engine: Engine):
    """Create database tables using SQLModel metadata.

    This is enough for the single `workout` table; schema changes beyond
    that should go through a migration tool (alembic) instead.
    """
    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session bound to the app's engine and ensures
    it is closed when the request scope finishes.
    """
    with Session(request.app.state.engine) as session:
        yield session
