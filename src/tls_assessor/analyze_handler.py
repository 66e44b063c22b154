"""
HTTP handler for assessment requests.

This module exposes the polling engine over HTTP: ``GET /analyze`` runs an
assessment session and returns the report, ``GET /info`` relays the
service information.
"""

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .exceptions import AssessmentError, MissingInputError
from .models import AssessmentRequest
from .polling import AssessmentEngine
from .ssllabs_client import SSLLabsClient

logger = structlog.get_logger(__name__)

MISSING_HOST_MESSAGE = (
    "Parameter 'host' is required. Example: /analyze?host=example.com"
)


class AnalyzeHandler:
    """
    Assessment HTTP handler.

    Services are looked up on ``app.state`` (``engine`` and ``client``),
    which the application lifespan populates.
    """

    def __init__(self) -> None:
        """Initialize the handler."""
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self) -> None:
        """Set up assessment routes."""
        self.router.get("/analyze")(self.analyze)
        self.router.get("/info")(self.info)

    def _get_engine(self, request: Request) -> AssessmentEngine:
        engine: AssessmentEngine = request.app.state.engine
        return engine

    def _get_client(self, request: Request) -> SSLLabsClient:
        client: SSLLabsClient = request.app.state.client
        return client

    async def analyze(
        self,
        request: Request,
        host: str | None = Query(None, description="Hostname to assess"),
        from_cache: str | None = Query(
            None, alias="fromCache", description="'true' to accept a cached report"
        ),
    ) -> Response:
        """
        Run an assessment for ``host`` and return the terminal report.

        Args:
            request: FastAPI request object
            host: Hostname to assess
            from_cache: ``"true"`` to accept a cached report

        Returns:
            JSON response with the Host report, or a plain text error message
        """
        try:
            assessment = AssessmentRequest.for_host(host, from_cache == "true")
        except MissingInputError:
            logger.warning("Rejected analyze request without host")
            return PlainTextResponse(MISSING_HOST_MESSAGE, status_code=400)

        logger.info(
            "Received analyze request",
            host=assessment.host,
            from_cache=assessment.from_cache,
        )

        try:
            report = await self._get_engine(request).run(assessment)
        except AssessmentError as e:
            return PlainTextResponse(f"Error analyzing the host: {e}", status_code=500)

        return JSONResponse(content=report.model_dump(mode="json", by_alias=True))

    async def info(self, request: Request) -> Response:
        """Return the assessment service information."""
        try:
            service_info = await self._get_client(request).info()
        except AssessmentError as e:
            logger.error("Failed to fetch service info", error=str(e))
            return PlainTextResponse(
                f"Error fetching service info: {e}", status_code=500
            )

        return JSONResponse(
            content=service_info.model_dump(mode="json", by_alias=True)
        )
