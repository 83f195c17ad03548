from sqlalchemy import create_engine, event, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from typing import Generator
import logging

from .config import settings

logger = logging.getLogger(__name__)

# ============================================================
# Database Engine
# ============================================================

def engine_options(url: str) -> dict:
    """
    Pool options for the configured backend.
    An in-memory SQLite database gets a single shared connection so it
    survives across sessions.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "poolclass": QueuePool,
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
        "pool_recycle": 3600,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    future=True,
    **engine_options(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False
)

# ============================================================
# Base Model
# ============================================================

Base = declarative_base()

# ============================================================
# Database Session Dependency
# ============================================================

def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency, one session per request.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()

    Repository operations commit or roll back themselves; anything
    left uncommitted when the request ends is rolled back on close.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ============================================================
# Database Health Check
# ============================================================

def check_db_health() -> bool:
    """
    Check if database is accessible and responsive.
    Returns True if healthy, False otherwise.
    """
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
    finally:
        db.close()


# ============================================================
# Connection Event Listeners (for logging & monitoring)
# ============================================================

@event.listens_for(engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    """Log database connections"""
    logger.debug("Database connection established")


@event.listens_for(engine, "checkout")
def receive_checkout(dbapi_conn, connection_record, connection_proxy):
    """Log when connection is checked out from pool"""
    logger.debug("Connection checked out from pool")


if settings.is_sqlite:
    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT nesting.
    # Let SQLAlchemy emit BEGIN itself.
    @event.listens_for(engine, "connect")
    def disable_pysqlite_transactions(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None

    @event.listens_for(engine, "begin")
    def emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


# ============================================================
# Startup/Shutdown Handlers
# ============================================================

def init_db():
    try:
        logger.info("🔄 Creating missing tables...")

        # register models on Base.metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=engine)

        if check_db_health():
            logger.info("✅ Database health check passed")
        else:
            logger.error("❌ Database health check failed")

    except Exception as e:
        logger.error(f"❌ Database init failed: {e}", exc_info=True)
        raise


def close_db():
    """
    Close database connections on shutdown.
    """
    try:
        logger.info("🔄 Closing database connections...")
        engine.dispose()
        logger.info("✅ Database connections closed")
    except Exception as e:
        logger.error(f"❌ Error closing database: {e}")


__all__ = [
    'Base',
    'engine',
    'SessionLocal',
    'get_db',
    'check_db_health',
    'init_db',
    'close_db',
]
