"""Database connection and session management."""
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from gameserve.config import get_settings
from gameserve.utils.exceptions import ConfigurationError

Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Create the engine on first use so the app can boot without credentials."""
    global _engine, _session_factory
    if _engine is not None:
        return _engine

    settings = get_settings()
    if not settings.database_url:
        raise ConfigurationError("DATABASE_URL is not configured")

    # The Supabase pooler (port 6543) requires NullPool
    if "pooler.supabase.com" in settings.database_url or ":6543" in settings.database_url:
        _engine = create_engine(settings.database_url, poolclass=NullPool)
    else:
        _engine = create_engine(settings.database_url, pool_size=10, max_overflow=5)

    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_db():
    """Dependency for getting database session."""
    get_engine()
    db = _session_factory()
    try:
        yield db
    finally:
        db.close()


def get_optional_db():
    """Like get_db, but yields None instead of failing when no database is configured."""
    try:
        get_engine()
    except ConfigurationError:
        yield None
        return
    db = _session_factory()
    try:
        yield db
    finally:
        db.close()
