# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from worldcup_api.exceptions import AppException
from worldcup_api.logging import logger
from worldcup_api.middlewares.correlation_id import CorrelationIDMiddleware
from worldcup_api.middlewares.logging_context import LoggingContextMiddleware
from worldcup_api.middlewares.prometheus import PrometheusMiddleware
from worldcup_api.routing import collect_subrouters
from worldcup_api.settings import app_settings
from worldcup_api.storage.db import engine, wait_for_database
from worldcup_api.utils.error_handler import (
    app_exception_handler,
    unhandled_exception_handler,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application startup and shutdown.

    Startup blocks until the database accepts connections; shutdown
    disposes of the connection pool.
    """
    logger.info("Application startup initiated")
    await wait_for_database()
    logger.info(f"Application started in {app_settings.ENV.value} mode")

    yield

    logger.info("Application shutdown initiated")
    await engine.dispose()
    logger.info("Application shutdown complete")


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    The function includes the routers collected from
    `worldcup_api.routing.collect_subrouters()`, registers the exception
    handlers rendering the unified error envelope, and adds the following
    middleware:
    - `PrometheusMiddleware`: HTTP metrics (when METRICS_ENABLED).
    - `LoggingContextMiddleware`: Request fields in structured logs.
    - `CorrelationIDMiddleware`: Request correlation IDs.
    """
    app = FastAPI(
        title="World Cup API",
        description="Read-only REST API over the FIFA World Cup database",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Collect routers
    app.include_router(collect_subrouters())

    # Exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Middlewares (execute in REVERSE order of registration)
    # Execution flow: CorrelationIDMiddleware → LoggingContextMiddleware → PrometheusMiddleware
    if app_settings.METRICS_ENABLED:
        app.add_middleware(PrometheusMiddleware)
    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    return app


app = application()  # Need for fastapi cli
