import asyncio
from typing import AsyncIterator

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from worldcup_api.logging import logger
from worldcup_api.settings import app_settings
from worldcup_api.utils.query_monitor import enable_query_monitoring

# Enable database query performance monitoring
enable_query_monitoring()

engine: AsyncEngine = create_async_engine(
    app_settings.DATABASE_URL,
    echo=False,
    pool_size=app_settings.DB_POOL_SIZE,
    max_overflow=app_settings.DB_MAX_OVERFLOW,
    pool_recycle=app_settings.DB_POOL_RECYCLE,
    pool_pre_ping=app_settings.DB_POOL_PRE_PING,
)
async_session = sessionmaker(
    engine, expire_on_commit=False, class_=AsyncSession
)


async def wait_for_database(
    retry_interval: int | None = None,
    max_retries: int | None = None,
) -> None:
    """
    Block until the database accepts connections.

    The World Cup schema is provisioned outside this service, so nothing is
    created here.

    Args:
        retry_interval: Seconds between attempts.
            Defaults to app_settings.DB_INIT_RETRY_INTERVAL
        max_retries: Number of attempts.
            Defaults to app_settings.DB_INIT_MAX_RETRIES

    Raises:
        RuntimeError: If every attempt fails.
    """
    if retry_interval is None:
        retry_interval = app_settings.DB_INIT_RETRY_INTERVAL
    if max_retries is None:
        max_retries = app_settings.DB_INIT_MAX_RETRIES

    for attempt in range(1, max_retries + 1):
        try:
            async with engine.connect() as conn:
                await conn.exec_driver_sql("SELECT 1")
        except (OperationalError, OSError) as ex:
            logger.warning(
                f"Database unavailable (attempt {attempt}/{max_retries}): {ex}"
            )
            if attempt < max_retries:
                await asyncio.sleep(retry_interval)
            continue
        logger.info(f"Connected to database {app_settings.DB_NAME}")
        return

    logger.error(f"Database unavailable after {max_retries} attempts")
    raise RuntimeError("Database connection could not be established.")


async def get_session() -> AsyncIterator[AsyncSession]:
    """
    Get an asynchronous session from the SQLAlchemy session factory.

    One session is borrowed per request and released when the request
    completes.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as ex:
            await session.rollback()
            logger.error(f"Database error: {ex}")
            raise
