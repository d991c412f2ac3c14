# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager

from fastapi import FastAPI

from library_catalog.logging import logger
from library_catalog.middlewares.correlation_id import CorrelationIDMiddleware
from library_catalog.routing import collect_subrouters
from library_catalog.storage.db import engine, wait_and_init_db
from library_catalog.utils.error_handler import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup and shutdown.

    Startup waits for the database and creates the catalog tables.
    Shutdown disposes of the engine's connection pool.
    """
    logger.info("Application startup: initializing resources")

    await wait_and_init_db()
    logger.info("Initialized database and tables")

    yield  # Application runs here

    logger.info("Application shutdown: cleaning up resources")
    await engine.dispose()
    logger.info("Application shutdown complete")


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    The routers under ``library_catalog/api/http`` are collected by
    ``collect_subrouters()``, catalog exceptions are rendered as the JSON
    error envelope and every request gets a correlation ID.
    """
    app = FastAPI(
        title="Library catalog",
        description="Authors and books with referential integrity",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(collect_subrouters())

    register_exception_handlers(app)

    app.add_middleware(CorrelationIDMiddleware)

    return app


app = application()  # Need for fastapi cli
