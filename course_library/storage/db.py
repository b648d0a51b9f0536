import asyncio
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from course_library import models  # noqa: F401  (registers tables)
from course_library.logging import logger
from course_library.settings import app_settings


def _unicode_lower(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def configure_sqlite_connection(dbapi_connection, _) -> None:
    """
    Prepare a new SQLite connection.

    Foreign keys are enforced so author deletion cascades in the database.
    The built-in ``lower()`` only folds ASCII; it is replaced with Python's
    ``str.lower`` so category filters and searches ignore case for any
    letter.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_connection.create_function(
        "lower", 1, _unicode_lower, deterministic=True
    )


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    SQLite connections are prepared by ``configure_sqlite_connection``;
    pool options only apply to server databases.

    Args:
        database_url: Overrides ``app_settings.DATABASE_URL``.

    Returns:
        Configured AsyncEngine.
    """
    url = database_url or app_settings.DATABASE_URL

    if url.startswith("sqlite"):
        new_engine = create_async_engine(url, echo=False)

        event.listen(
            new_engine.sync_engine, "connect", configure_sqlite_connection
        )

        return new_engine

    return create_async_engine(
        url,
        echo=False,
        pool_size=app_settings.DB_POOL_SIZE,
        max_overflow=app_settings.DB_MAX_OVERFLOW,
        pool_recycle=app_settings.DB_POOL_RECYCLE,
        pool_pre_ping=app_settings.DB_POOL_PRE_PING,
    )


engine: AsyncEngine = create_engine()
async_session = sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def wait_and_init_db(
    retry_interval: int | None = None,
    max_retries: int | None = None,
    reset: bool | None = None,
) -> None:
    """
    Wait until the database is available, then create missing tables.

    Args:
        retry_interval: Time in seconds between retries.
            Defaults to app_settings.DB_INIT_RETRY_INTERVAL
        max_retries: Maximum number of retries before giving up.
            Defaults to app_settings.DB_INIT_MAX_RETRIES
        reset: Drop all tables before creating them.
            Defaults to app_settings.RESET_DATABASE_ON_STARTUP

    Raises:
        RuntimeError: If the database never becomes reachable.
    """
    if retry_interval is None:
        retry_interval = app_settings.DB_INIT_RETRY_INTERVAL
    if max_retries is None:
        max_retries = app_settings.DB_INIT_MAX_RETRIES
    if reset is None:
        reset = app_settings.RESET_DATABASE_ON_STARTUP

    for attempt in range(max_retries):
        try:
            async with engine.connect() as conn:
                await conn.exec_driver_sql("SELECT 1")
            logger.info("Database is now ready.")
            break
        except OperationalError:
            logger.warning(
                f"Database not ready, retrying in {retry_interval} seconds... (Attempt {attempt + 1}/{max_retries})"
            )
            await asyncio.sleep(retry_interval)
    else:
        logger.error("Failed to connect to the database after multiple attempts.")
        raise RuntimeError("Database connection could not be established.")

    await init_db(engine, reset=reset)


async def init_db(target: AsyncEngine, reset: bool = False) -> None:
    """
    Create all tables, optionally dropping them first.

    Args:
        target: Engine to run DDL against.
        reset: Drop every table before creating.
    """
    async with target.begin() as conn:
        if reset:
            logger.warning("Resetting database: dropping all tables")
            await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get an asynchronous session from the SQLAlchemy session factory.

    Commands persist explicitly through ``save()``; the session is rolled
    back if the request fails with a database error.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session() as session:
        try:
            yield session
        except IntegrityError as ex:
            await session.rollback()
            logger.error(f"Database integrity error: {ex}")
            raise
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise
