# afterschool/database.py
"""
Database engine, session factory, and metadata shared across the application.

The engine is created once per process from settings; request handlers get
their own session through the ``get_db`` dependency.
"""

from datetime import datetime
import logging
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .core.config import settings

logger = logging.getLogger(__name__)


def _unicode_lower(value: Any) -> Any:
    """SQL ``lower()`` that folds case beyond ASCII."""
    if isinstance(value, str):
        return value.casefold()
    return value


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine with dialect-appropriate connection arguments."""
    is_sqlite = database_url.startswith("sqlite")
    connect_args: Dict[str, Any] = {}
    engine_kwargs: Dict[str, Any] = {"echo": echo, "future": True}
    if is_sqlite:
        # Sessions are handed between the request thread and worker threads.
        connect_args = {"check_same_thread": False, "timeout": 30}
    else:
        engine_kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True, pool_recycle=3600)

    engine = create_engine(database_url, connect_args=connect_args, **engine_kwargs)

    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
        connection_record.info["connect_time"] = datetime.now()
        if is_sqlite:
            # SQLite's built-in lower() only folds ASCII letters
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)
        logger.debug("Database connection established")

    @event.listens_for(engine, "checkout")
    def receive_checkout(
        dbapi_connection: Any, connection_record: Any, connection_proxy: Any
    ) -> None:
        logger.debug("Connection checked out from pool")

    return engine


engine: Engine = build_engine(settings.database_url, echo=settings.database_echo)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base = declarative_base()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register with Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
