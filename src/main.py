"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from src.api.middleware.error_handler import error_handler_middleware, request_validation_handler
from src.api.middleware.latency_logging import latency_logging_middleware
from src.api.routes import health, partners, requests
from src.core.config import get_settings

# Configure logging
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    The store client is created lazily on first use and kept for the
    life of the process.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control back to the application.
    """
    settings = get_settings()
    logger.info("Starting %s in %s mode", settings.app_name, settings.app_env)
    if settings.enforce_request_ownership:
        logger.info("Request ownership checks enabled for update/delete")
    else:
        logger.warning("Request ownership checks disabled: any signed-in user may edit any request")

    yield

    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="StudyMate Partner API",
        description="Study partner directory and partner requests",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # Browsers reject credentialed responses for a wildcard origin
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handler turns APIError and unexpected exceptions into the JSON envelope
    app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Latency logging wraps the error handler so it sees final status codes
    app.add_middleware(BaseHTTPMiddleware, dispatch=latency_logging_middleware)

    app.include_router(health.router)
    app.include_router(partners.router)
    app.include_router(requests.router)

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
