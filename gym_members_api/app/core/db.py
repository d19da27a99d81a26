"""
Database engine, session factory and schema bootstrap.

One engine (and therefore one connection pool) is created when this
module is imported and shared by every request.  Each request receives
its own ``Session`` from the ``get_session`` dependency; the session is
handed to the repository explicitly and closed when the response has
been sent.

``init_db`` creates the ``members`` table if it does not exist yet.  It
is called once from the application lifespan hook.
"""

import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    SQLite connections are shared across FastAPI's worker threads, so
    the same‑thread check is disabled for them.  Server databases get
    ``pool_pre_ping`` so that connections dropped by the server are
    replaced instead of failing the next request.
    """
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True, pool_size=5, max_overflow=0)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def get_session() -> Iterator[Session]:
    """FastAPI dependency yielding a session for the current request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db(bind: Engine = engine) -> None:
    """Create missing tables for all registered models."""
    # Import models so their tables are registered on ``Base.metadata``.
    from gym_members_api.app.models import member  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ready (%s)", bind.url.render_as_string(hide_password=True))
