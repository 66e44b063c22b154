"""
Main application entry point for the TLS assessor.

This module sets up the FastAPI application, configures logging, and starts
the assessment HTTP service.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .analyze_handler import AnalyzeHandler
from .config import get_settings
from .logging_config import setup_logging
from .polling import AssessmentEngine
from .ssllabs_client import SSLLabsClient


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    setup_logging(settings)
    logger = structlog.get_logger()

    logger.info("Starting TLS assessor")
    logger.info(
        "Configuration loaded",
        api_url=settings.ssllabs_api_url,
        max_polls=settings.max_polls,
        debug=settings.debug,
    )

    # Initialize services
    client = SSLLabsClient.from_settings(settings)
    engine = AssessmentEngine.from_settings(client, settings)

    # Store services in app state
    app.state.client = client
    app.state.engine = engine

    yield

    await client.aclose()
    logger.info("Shutting down TLS assessor")


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    settings = get_settings()

    application = FastAPI(
        title="TLS Assessor",
        description="Runs SSL Labs assessments and relays their reports",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS
    if settings.enable_cors:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_methods=["GET", "OPTIONS"],
            allow_headers=["Content-Type"],
        )

    analyze_handler = AnalyzeHandler()
    application.include_router(analyze_handler.router, tags=["assessment"])

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return application


app = create_app()


def main() -> None:
    """Main entry point."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    logger = structlog.get_logger()
    server = settings.server_config

    logger.info(
        "Starting server", host=server.host, port=server.port, debug=server.debug
    )

    uvicorn.run(
        "tls_assessor.main:app",
        host=server.host,
        port=server.port,
        reload=server.debug,
        log_config=None,  # We handle logging ourselves
    )


if __name__ == "__main__":
    main()
