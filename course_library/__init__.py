# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager

from fastapi import FastAPI

from course_library.logging import logger
from course_library.middlewares.correlation_id import CorrelationIDMiddleware
from course_library.middlewares.prometheus import PrometheusMiddleware
from course_library.routing import collect_subrouters
from course_library.storage.db import engine, wait_and_init_db
from course_library.utils.error_handler import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application startup and shutdown.

    Startup waits for the database and creates missing tables; shutdown
    disposes of the engine's connection pool.
    """
    await wait_and_init_db()
    logger.info("Initialized database and tables")

    yield

    logger.info("Application shutdown initiated")
    await engine.dispose()
    logger.info("Application shutdown complete")


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    Includes the routers collected by ``collect_subrouters()``, registers
    the exception handlers and adds the middlewares:
    - `PrometheusMiddleware`: Middleware for collecting Prometheus metrics.
    - `CorrelationIDMiddleware`: Middleware for request correlation IDs.
    """
    # Initialize application
    app = FastAPI(
        title="Course Library API",
        description="Authors and their courses",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Collect routers
    app.include_router(collect_subrouters())

    register_exception_handlers(app)

    # Middlewares (execute in REVERSE order of registration)
    # Execution flow: CorrelationIDMiddleware → PrometheusMiddleware
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    return app


app = application()  # Need for fastapi cli
