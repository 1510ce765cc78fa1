import logging
from contextlib import asynccontextmanager

import logfire
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docreg.application.api.v1.errors import map_docreg_error
from docreg.application.api.v1.routes import admin, documents, health
from docreg.application.di import create_container
from docreg.config import Config, configure_logging
from docreg.domain.document.service.document import DocumentService
from docreg.domain.shared.error import DocregError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container

    # Resolving the service creates the storage root and index directories
    await container.get(DocumentService)
    logger.info("Document storage ready at %s", app.state.config.storage.root)

    yield

    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire must be configured before calling this; ``docreg server start``
    does it for production and ``tests/conftest.py`` for tests.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting docreg server: %s v%s", config.server.name, config.server.version)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )
    app_instance.state.config = config

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config)
    setup_dishka(container, app_instance)

    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(documents.router, prefix="/api/v1")
    app_instance.include_router(admin.router, prefix="/api/v1")

    # Global docreg error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(DocregError)
    async def docreg_error_handler(request: Request, exc: DocregError):
        http_exc = map_docreg_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance
