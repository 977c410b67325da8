"""Database engine and request-scoped session management."""

from collections.abc import Generator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tencards.config import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base shared by every ORM model."""


@dataclass
class _DatabaseState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None


_state = _DatabaseState()


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        # In-memory databases live on a single connection
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url, pool_size=10, max_overflow=20, pool_pre_ping=True, pool_recycle=3600
    )


def initialize_database(settings: Settings) -> sessionmaker[Session]:
    """Bind the process-wide engine and session factory to ``DATABASE_URL``.

    SQLite URLs are treated as local/dev databases and get their tables
    created directly; everything else is expected to be migrated by alembic.
    """
    engine = build_engine(settings.DATABASE_URL)
    if engine.dialect.name == "sqlite":
        import tencards.models  # noqa: F401, PLC0415

        Base.metadata.create_all(bind=engine)

    _state.engine = engine
    _state.session_factory = sessionmaker(bind=engine, autoflush=False)
    return _state.session_factory


def get_session_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> sessionmaker[Session]:
    return _state.session_factory or initialize_database(settings)


def dispose_engine() -> None:
    if _state.engine is not None:
        _state.engine.dispose()
    _state.engine = None
    _state.session_factory = None


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Generator[Session, None, None]:
    """Yield one session per request and close it afterwards."""
    with session_factory() as db:
        yield db


DatabaseSession = Annotated[Session, Depends(get_db)]
