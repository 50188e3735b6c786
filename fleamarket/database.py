"""Database configuration and session management."""

from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base: Any = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine, pooled for server databases and thread-shared for SQLite."""
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory for an engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session from the app's own store."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine) -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from fleamarket import models  # noqa: F401

    Base.metadata.create_all(bind=bind)
