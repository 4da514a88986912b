"""Database configuration and session management for the Gnawa Tours site."""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings


def _build_engine(url: str, timeout: int) -> Engine:
    """Create the SQLAlchemy engine with backend-specific tuning."""

    engine_kwargs = {"future": True, "echo": False}
    dialect = make_url(url).get_backend_name()

    if dialect == "sqlite":
        # SQLite needs a special flag for usage with FastAPI's threaded test client.
        engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": timeout}
    else:
        # Enable pool pre-ping so long-lived connections recover gracefully.
        engine_kwargs["pool_pre_ping"] = True
        engine_kwargs["pool_timeout"] = timeout
        if dialect == "postgresql":
            engine_kwargs["connect_args"] = {"connect_timeout": timeout}

    return create_engine(url, **engine_kwargs)


engine: Engine | None = (
    _build_engine(settings.database_url, settings.database_timeout_seconds)
    if settings.database_url
    else None
)

SessionLocal = (
    sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    if engine is not None
    else None
)

Base = declarative_base()


def init_db() -> None:
    if engine is not None:
        Base.metadata.create_all(bind=engine)