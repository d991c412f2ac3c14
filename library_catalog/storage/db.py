import asyncio
from typing import Any, AsyncIterator

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import library_catalog.models  # noqa: F401  (registers the catalog tables)
from library_catalog.logging import logger
from library_catalog.settings import app_settings


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement for every SQLite connection.

    SQLite ignores REFERENCES clauses unless ``PRAGMA foreign_keys`` is
    enabled per connection, which would let the store accept a book whose
    author does not exist.

    Args:
        engine: Async engine bound to a SQLite database.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine() -> AsyncEngine:
    """
    Create the application engine from settings.

    Pool sizing only applies to server databases; SQLite uses the
    dialect's default pool.

    Returns:
        Configured AsyncEngine.
    """
    db = app_settings.database
    if db.is_sqlite:
        sqlite_engine = create_async_engine(db.url, echo=False)
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine

    return create_async_engine(
        db.url,
        echo=False,
        pool_size=db.POOL_SIZE,
        max_overflow=db.MAX_OVERFLOW,
        pool_recycle=db.POOL_RECYCLE,
        pool_pre_ping=db.POOL_PRE_PING,
    )


engine: AsyncEngine = create_engine()
async_session = sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Create the catalog tables if they do not exist.

    Args:
        bind: Engine to create the tables on. Defaults to the app engine.
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def wait_and_init_db(
    retry_interval: int | None = None,
    max_retries: int | None = None,
) -> None:
    """
    Wait until the database is available, then create the catalog tables.

    Args:
        retry_interval: Time in seconds between retries.
            Defaults to app_settings.DB_INIT_RETRY_INTERVAL
        max_retries: Maximum number of retries before giving up.
            Defaults to app_settings.DB_INIT_MAX_RETRIES
    """
    if retry_interval is None:
        retry_interval = app_settings.DB_INIT_RETRY_INTERVAL
    if max_retries is None:
        max_retries = app_settings.DB_INIT_MAX_RETRIES
    for attempt in range(max_retries):
        try:
            async with engine.connect() as conn:
                await conn.exec_driver_sql("SELECT 1")
            logger.info("Database is now ready.")
            await init_db()
            return
        except OperationalError:
            logger.warning(
                f"Database not ready, retrying in {retry_interval} seconds... (Attempt {attempt + 1}/{max_retries})"
            )
            await asyncio.sleep(retry_interval)

    logger.error("Failed to connect to the database after multiple attempts.")
    raise RuntimeError("Database connection could not be established.")


async def get_session() -> AsyncIterator[AsyncSession]:
    """
    Get an asynchronous session from the SQLAlchemy session factory.

    Catalog operations commit their own transaction; anything still
    pending when the request ends is committed here.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as ex:
            await session.rollback()
            logger.error(f"Database integrity error: {ex}")
            raise
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise
