"""
Pytest configuration and fixtures for TLS assessor tests.
"""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from tls_assessor.config import Settings
from tls_assessor.ssllabs_client import SSLLabsClient

API_URL = "https://api.ssllabs.com/api/v2"


class SleepRecorder:
    """Stand-in for ``asyncio.sleep`` that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedAPI:
    """MockTransport handler replaying a fixed list of responses."""

    def __init__(self, responses: list[httpx.Response | Exception]) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request: {request.url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def params(self) -> list[dict[str, str]]:
        """Query parameters of every request made so far."""
        return [dict(request.url.params) for request in self.requests]


def api_response(
    payload: Any = None,
    status_code: int = 200,
    max_assessments: int | None = None,
    current_assessments: int | None = None,
) -> httpx.Response:
    """Build a response the way the assessment API sends it."""
    headers = {}
    if max_assessments is not None:
        headers["X-Max-Assessments"] = str(max_assessments)
    if current_assessments is not None:
        headers["X-Current-Assessments"] = str(current_assessments)
    if payload is None:
        return httpx.Response(status_code, headers=headers)
    return httpx.Response(status_code, json=payload, headers=headers)


def host_payload(status: str, endpoints: list[dict[str, Any]] | None = None) -> dict:
    """Build an ``analyze`` payload for example.com with the given status."""
    payload: dict[str, Any] = {
        "host": "example.com",
        "port": 443,
        "protocol": "http",
        "isPublic": False,
        "status": status,
        "startTime": 1700000000000,
        "engineVersion": "2.3.0",
        "criteriaVersion": "2009q",
    }
    if endpoints is not None:
        payload["endpoints"] = endpoints
    return payload


@pytest.fixture
def mock_settings() -> Settings:
    """Settings for testing."""
    return Settings(
        ssllabs_api_url=API_URL,
        debug=True,
        log_level="DEBUG",
        log_format="console",
        allowed_origins="http://localhost:5173",
    )


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    """Recorder injected wherever the code under test would sleep."""
    return SleepRecorder()


@pytest.fixture
def make_client(
    sleep_recorder: SleepRecorder,
) -> Callable[..., SSLLabsClient]:
    """Factory building a client wired to a scripted API."""

    def _make(api: ScriptedAPI, **kwargs: Any) -> SSLLabsClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(api))
        return SSLLabsClient(
            base_url=API_URL, http_client=http_client, sleep=sleep_recorder, **kwargs
        )

    return _make


@pytest.fixture
def ready_endpoints() -> list[dict[str, Any]]:
    """Two endpoints of a finished assessment."""
    return [
        {
            "ipAddress": "93.184.216.34",
            "serverName": "example.com",
            "statusMessage": "Ready",
            "grade": "A+",
            "gradeTrustIgnored": "A+",
            "hasWarnings": False,
            "isExceptional": True,
            "progress": 100,
            "duration": 75123,
            "delegation": 2,
        },
        {
            "ipAddress": "2606:2800:220:1:248:1893:25c8:1946",
            "serverName": "example.com",
            "statusMessage": "Ready",
            "statusDetails": "TESTING_PROTOCOL_INTOLERANCE_399",
            "statusDetailsMessage": "Testing Protocol Intolerance (TLS 1.152)",
            "grade": "B",
            "gradeTrustIgnored": "B",
            "hasWarnings": True,
            "isExceptional": False,
            "progress": 100,
            "duration": 81230,
            "eta": 0,
            "delegation": 2,
        },
    ]


@pytest.fixture
def ready_payload(ready_endpoints: list[dict[str, Any]]) -> dict[str, Any]:
    """A complete READY report with two endpoints."""
    payload = host_payload("READY", ready_endpoints)
    payload.update(
        {
            "statusMessage": "",
            "testTime": 1700000157000,
            "cacheExpiryTime": 1700003757000,
            "certHostnames": ["example.com", "www.example.com"],
        }
    )
    return payload
