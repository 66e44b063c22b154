"""
SSL Labs API client for the TLS assessor.

This module performs single GET requests against the assessment API,
classifies the responses, and retries transient failures with a fixed
per-status backoff.
"""

import asyncio
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any

import httpx
import structlog

from .config import RetryPolicy, Settings
from .exceptions import NetworkError, TransportPermanentError, TransportTransientError
from .models import AssessmentRequest, Host, Info, QuotaState
from .parser import parse_host, parse_info
from .quota import quota_from_headers
from .urls import CACHE_MAX_AGE, DEFAULT_API_URL, build_analyze_url, build_info_url

logger = structlog.get_logger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

STATUS_MESSAGES = {
    400: "invocation error (e.g., invalid parameters)",
    429: "client request rate too high or too many new assessments too fast",
    500: "internal error",
    503: "the service is not available (e.g., down for maintenance)",
    529: "the service is overloaded",
}


def status_message(status_code: int) -> str:
    """Get the canonical message for an error status code."""
    return STATUS_MESSAGES.get(status_code, f"HTTP {status_code}")


class TransportResponse:
    """Successful response body plus the quota advertised with it."""

    def __init__(self, body: bytes, quota: QuotaState, status_code: int = 200):
        self.body = body
        self.quota = quota
        self.status_code = status_code


class SSLLabsClient:
    """
    SSL Labs API client with response classification and bounded retry.

    Responses with status 503 or 529 are retried according to the retry
    policy; 400, 429 and 500 fail immediately. Connection-level failures
    are never retried.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        retry_policy: RetryPolicy | None = None,
        timeout: float = 30.0,
        cache_max_age: int = CACHE_MAX_AGE,
        http_client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: API base URL
            retry_policy: Retry policy for transient statuses
            timeout: Request timeout in seconds (ignored for injected clients)
            cache_max_age: maxAge sent with cached lookups
            http_client: Pre-built HTTP client; owned by the caller if given
            sleep: Coroutine function used to wait between retries
        """
        self.base_url = base_url
        self.retry_policy = retry_policy or RetryPolicy()
        self.cache_max_age = cache_max_age
        self._sleep = sleep
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=True
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "SSLLabsClient":
        """Create a client configured from application settings."""
        return cls(
            base_url=settings.ssllabs_api_url,
            retry_policy=settings.retry_policy,
            timeout=settings.request_timeout,
            cache_max_age=settings.cache_max_age,
            **kwargs,
        )

    async def __aenter__(self) -> "SSLLabsClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _send(self, url: str) -> httpx.Response:
        try:
            return await self._client.get(url)
        except httpx.RequestError as e:
            logger.error("Request to assessment API failed", url=url, error=str(e))
            raise NetworkError(
                f"request failed: {e}",
                context={"url": url, "error_type": type(e).__name__},
            ) from e

    async def get(self, url: str) -> TransportResponse:
        """
        Execute one GET request, retrying transient failures.

        Args:
            url: Absolute request URL

        Returns:
            Body and quota of the successful response

        Raises:
            TransportTransientError: 503/529 persisted through every retry
            TransportPermanentError: Non-retryable error status
            NetworkError: Connection-level failure
        """
        retries = 0
        while True:
            response = await self._send(url)
            status_code = response.status_code
            quota = quota_from_headers(response.headers)

            if response.is_success:
                return TransportResponse(response.content, quota, status_code)

            message = status_message(status_code)
            context = {"url": url, "attempts": retries + 1}

            if not self.retry_policy.is_transient(status_code):
                logger.error(
                    "Assessment API rejected request",
                    url=url,
                    status_code=status_code,
                    message=message,
                )
                raise TransportPermanentError(message, status_code, context)

            if retries >= self.retry_policy.max_retries:
                logger.error(
                    "Assessment API still unavailable after retries",
                    url=url,
                    status_code=status_code,
                    attempts=retries + 1,
                )
                raise TransportTransientError(message, status_code, context)

            delay = self.retry_policy.delay_for(status_code)
            retries += 1
            logger.warning(
                "Assessment API unavailable, retrying",
                url=url,
                status_code=status_code,
                retry=retries,
                delay_seconds=delay,
            )
            await self._sleep(delay)

    async def analyze(
        self, request: AssessmentRequest, start_new: bool
    ) -> tuple[Host, QuotaState]:
        """
        Issue one ``analyze`` call and decode the report snapshot.

        Args:
            request: Session parameters
            start_new: Whether to ask for a new assessment

        Returns:
            Host snapshot and the quota observed with it
        """
        url = build_analyze_url(
            request.host,
            start_new=start_new,
            from_cache=request.from_cache,
            max_age=self.cache_max_age,
            base_url=self.base_url,
        )
        response = await self.get(url)
        return parse_host(response.body), response.quota

    async def info(self) -> Info:
        """Fetch service information (engine versions, global quota)."""
        response = await self.get(build_info_url(self.base_url))
        return parse_info(response.body)
