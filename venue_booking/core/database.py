"""Database engine, session factory and declarative base."""
import logging
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from venue_booking.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# Execution option marking a connection whose transaction will write
WRITE_TRANSACTION = "venue_booking_write"


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite has no row locks. The database runs in WAL mode so open readers
    never block a writer, and transactions started through ``begin_write``
    are opened with BEGIN IMMEDIATE so writers serialize on the database
    lock. All other transactions use a plain deferred BEGIN.
    """
    engine = create_async_engine(url, echo=echo)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def _configure_connection(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

        @event.listens_for(engine.sync_engine, "begin")
        def _begin(conn):
            if conn.get_execution_options().get(WRITE_TRANSACTION):
                conn.exec_driver_sql("BEGIN IMMEDIATE")
            else:
                conn.exec_driver_sql("BEGIN")

    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory; objects stay usable after commit."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def begin_write(db: AsyncSession) -> None:
    """
    Start a write transaction on the session.

    A read transaction still open on the session is committed first, so
    callers must not leave unrelated pending changes in it. Row locks taken
    inside the new transaction do the serializing on PostgreSQL.
    """
    if db.in_transaction():
        await db.commit()
    await db.connection(execution_options={WRITE_TRANSACTION: True})


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a database session."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db(target: AsyncEngine = engine) -> None:
    """Create all tables."""
    # Import models so they register on Base.metadata
    import venue_booking.models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")
