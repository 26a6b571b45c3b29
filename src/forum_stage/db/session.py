"""Engine, declarative base and request-scoped sessions."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import DDL, Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from forum_stage.core.settings import settings
from forum_stage.utils.ranking import HOT_RANK_POSTGRES_FUNCTION, sqlite_hot_rank


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Populate Base.metadata before anything calls create_all.
import forum_stage.models  # noqa: E402,F401


def _engine_kwargs(url: str) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.sql_debug}
    if url.startswith("sqlite"):
        # Request handlers run in a threadpool.
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


def configure_sqlite_connections(target: Engine) -> None:
    """Prepare every new SQLite connection of ``target``.

    Turns on FK enforcement, so votes, saves and moderation entries cascade
    with their post, and registers the ``hot_rank`` SQL function used by the
    Hot listing.
    """

    @event.listens_for(target, "connect")
    def _on_connect(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        dbapi_connection.create_function("hot_rank", 2, sqlite_hot_rank)


# PostgreSQL gets hot_rank as a stored function alongside the tables.
event.listen(
    Base.metadata,
    "after_create",
    DDL(HOT_RANK_POSTGRES_FUNCTION).execute_if(dialect="postgresql"),
)


engine = create_engine(
    settings.effective_database_url,
    **_engine_kwargs(settings.effective_database_url),
)
if engine.dialect.name == "sqlite":
    configure_sqlite_connections(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
