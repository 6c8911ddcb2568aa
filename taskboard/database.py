"""
Database Session Management - Core database connectivity layer
"""

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from typing import Any, Dict, Generator
import logging

from taskboard.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool options per backend - SQLite (tests/dev) cannot take QueuePool sizing"""
    if url.startswith("sqlite"):
        options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool  # One shared in-memory database
        return options
    return {
        "pool_size": settings.DB_POOL_SIZE,  # Number of persistent connections
        "max_overflow": settings.DB_MAX_OVERFLOW,  # Additional connections when pool is exhausted
        "pool_timeout": settings.DB_POOL_TIMEOUT,  # Wait time for available connection
        "pool_pre_ping": True,  # Verify connection health before using
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log all SQL queries in debug mode
    **_engine_options(settings.DATABASE_URL),
)


@event.listens_for(engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    logger.debug("🔌 New database connection established")


@event.listens_for(engine, "close")
def receive_close(dbapi_conn, connection_record):
    logger.debug("🔌 Database connection closed")


# Session factory - one session per request
SessionLocal = sessionmaker(
    autocommit=False,  # Require explicit commits
    autoflush=False,
    bind=engine,
)

# Base class for all ORM models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides database session per request.
    Automatically handles session lifecycle and cleanup.
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"❌ Database error during request: {str(e)}", exc_info=True)
        db.rollback()  # Never leave a half-applied transaction behind
        raise
    finally:
        db.close()
        logger.debug("✅ Database session closed")


def init_db() -> None:
    """
    Create all tables.
    Used for development setup - production should use migrations.
    """
    logger.info("🏗️  Creating database tables...")
    try:
        from taskboard.models import user, task  # noqa: F401 - register models with Base
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables created successfully")
    except Exception as e:
        logger.error(f"❌ Failed to create database tables: {str(e)}", exc_info=True)
        raise


def check_db_connection() -> bool:
    """
    Verify database connectivity - used for health checks and startup validation.
    Returns True if connection successful, False otherwise.
    """
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        logger.debug("✅ Database connection successful")
        return True
    except Exception as e:
        logger.error(f"❌ Database connection failed: {str(e)}", exc_info=True)
        return False


def get_pool_stats() -> dict:
    """Current connection pool statistics (empty for pools without sizing)"""
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return {"pool": type(pool).__name__}
    return {
        "pool_size": pool.size(),
        "checked_out": pool.checkedout(),
        "overflow": pool.overflow(),
        "checked_in": pool.checkedin(),
    }


def close_db_connections():
    """Dispose the engine's pool on shutdown"""
    logger.info("🔌 Closing database connections...")
    engine.dispose()
    logger.info("✅ All database connections closed")
