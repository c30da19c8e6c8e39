"""
Database configuration for the user service.

Provides:
- Engine and session factory setup (init_database)
- Transactional async sessions (session_scope)
- Schema creation and shutdown (init_db, close_db)
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from user_service.core.errors import DatabaseError
from .models import Base

logger = logging.getLogger("user-service.infrastructure.persistence.database")

db_url = None
async_db_url = None
engine = None
async_session_maker = None


def to_async_url(database_url: str) -> str:
    """
    Convert a sync SQLAlchemy URL to its async driver form.

    sqlite:/// -> sqlite+aiosqlite:///, postgresql:// -> postgresql+asyncpg://;
    other URLs are returned unchanged.
    """
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


def init_database(database_url: str, echo: bool = False):
    """
    Initialize database engine and session maker.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log SQL statements
    """
    global db_url, async_db_url, engine, async_session_maker

    db_url = database_url

    # Ensure data directory exists for file-based SQLite
    if db_url.startswith("sqlite:///") and ":memory:" not in db_url:
        db_path = db_url.replace("sqlite:///", "", 1)
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async_db_url = to_async_url(db_url)

    engine = create_async_engine(
        async_db_url,
        echo=echo,
        future=True,
        pool_pre_ping=True,
    )

    if "sqlite" in async_db_url:
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Set SQLite pragmas for better concurrency"""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA busy_timeout=30000")  # 30 seconds
            cursor.close()

        logger.info("SQLite WAL mode configured")

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    logger.info(f"Database initialized with URL: {db_url}")


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Open a session that commits on exit and rolls back on error.

    Raises:
        DatabaseError: If init_database() has not been called
    """
    if async_session_maker is None:
        raise DatabaseError(operation="session_scope", reason="database not initialized, call init_database() first")

    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create tables"""
    if engine is None:
        raise DatabaseError(operation="init_db", reason="database not initialized, call init_database() first")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema initialized")


async def close_db():
    """Close database connections"""
    global engine, async_session_maker
    if engine is not None:
        await engine.dispose()
        logger.info("Database connections closed")
    engine = None
    async_session_maker = None
