"""SQLAlchemy engine + session management.

Uses a session-per-request pattern.
"""

from __future__ import annotations

from flask import Flask, g
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from tally.models import RECORD_MODELS
from tally.models.base import Base
from tally.repositories.record_store import bootstrap_counters


def _enable_sqlite_savepoints(engine: Engine) -> None:
    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT; let
    # SQLAlchemy emit BEGIN itself.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN")


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        engine = create_engine(database_url, future=True)
        _enable_sqlite_savepoints(engine)
        return engine

    return create_engine(database_url, pool_pre_ping=True, future=True)


def init_schema(engine: Engine) -> None:
    """Create tables and make sure every record family has a counter row."""

    Base.metadata.create_all(bind=engine)

    with Session(engine) as session:
        bootstrap_counters(session, [m.__tablename__ for m in RECORD_MODELS])
        session.commit()


def init_db(app: Flask) -> None:
    """Initialize database engine and per-request sessions."""

    engine = create_app_engine(str(app.config["DATABASE_URL"]))
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    # Create tables for the example (production would use migrations).
    init_schema(engine)

    app.extensions["engine"] = engine
    app.extensions["session_factory"] = session_factory

    @app.before_request
    def _open_session() -> None:
        g.db = session_factory()  # type: ignore[attr-defined]

    @app.teardown_request
    def _close_session(exc: BaseException | None) -> None:
        session: Session | None = getattr(g, "db", None)
        if session is None:
            return

        try:
            if exc is None and not getattr(g, "db_rollback", False):
                session.commit()
            else:
                session.rollback()
        finally:
            session.close()


def get_session() -> Session:
    """Get the current request's SQLAlchemy session."""

    session: Session | None = getattr(g, "db", None)
    if session is None:
        raise RuntimeError("Database session not initialized")
    return session


def mark_rollback() -> None:
    """Make the request teardown roll back instead of committing.

    Error handlers turn exceptions into responses, so teardown never sees
    them; they call this instead.
    """

    if getattr(g, "db", None) is not None:
        g.db_rollback = True  # type: ignore[attr-defined]
