"""
Database configuration and session management for Household Hub.

Uses SQLAlchemy ORM. SQLite is the default store; PostgreSQL is used when
DATABASE_URL points at it. Foreign keys are enforced on both.
"""

import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from household_hub.config import settings


def build_engine(database_url: str, echo: bool = False, **pool_options) -> Engine:
    """
    Create an engine for the given URL.

    Pool options are only passed for server databases; SQLite gets
    check_same_thread disabled and foreign key enforcement turned on.
    """
    if database_url.startswith("sqlite"):
        db_path = database_url.replace("sqlite:///", "")
        db_dir = os.path.dirname(db_path)
        if db_dir and db_path != ":memory:" and not os.path.exists(db_dir):
            os.makedirs(db_dir, exist_ok=True)
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            **pool_options,
        )
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_engine(database_url, echo=echo, pool_pre_ping=True, **pool_options)


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on FK enforcement for every new SQLite connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _pool_options() -> dict:
    if settings.DATABASE_URL.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
    }


engine = build_engine(settings.DATABASE_URL, settings.DATABASE_ECHO, **_pool_options())

# Base class for declarative models
Base = declarative_base()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = None):
    """
    Initialize database by creating all tables.
    """
    # Import models to ensure they're registered
    from household_hub import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Session:
    """
    Dependency for getting database session.
    Use in FastAPI route dependencies.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

