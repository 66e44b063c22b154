"""
Basic tests for TLS assessor core functionality.
"""

import pytest
from pydantic import ValidationError

from tls_assessor.exceptions import MissingInputError
from tls_assessor.models import AssessmentRequest, Host
from tls_assessor.polling import AssessmentEngine
from tls_assessor.ssllabs_client import SSLLabsClient


def test_package_exports():
    """Test that the public API can be imported from the package root."""
    import tls_assessor

    assert tls_assessor.__version__ == "0.1.0"
    assert tls_assessor.AssessmentEngine is AssessmentEngine
    assert tls_assessor.SSLLabsClient is SSLLabsClient


@pytest.mark.asyncio
async def test_client_from_settings(mock_settings):
    """Test the client picks up URL, retry policy and cache age from settings."""
    async with SSLLabsClient.from_settings(mock_settings) as client:
        assert client.base_url == mock_settings.ssllabs_api_url
        assert client.retry_policy == mock_settings.retry_policy
        assert client.cache_max_age == 86400


@pytest.mark.asyncio
async def test_engine_from_settings(mock_settings):
    """Test the engine picks up cadence and poll ceiling from settings."""
    async with SSLLabsClient.from_settings(mock_settings) as client:
        engine = AssessmentEngine.from_settings(client, mock_settings)

        assert engine.client is client
        assert engine.cadence == mock_settings.cadence_policy
        assert engine.max_polls == mock_settings.max_polls


def test_request_for_host_strips_input():
    request = AssessmentRequest.for_host("  example.com ")

    assert request.host == "example.com"
    assert request.from_cache is False
    assert request.start_new is True


def test_request_from_cache_never_starts_new():
    request = AssessmentRequest.for_host("example.com", from_cache=True)

    assert request.start_new is False


@pytest.mark.parametrize("host", [None, "", "   "])
def test_request_without_host(host):
    """Test front-end input without a hostname is a typed failure."""
    with pytest.raises(MissingInputError) as exc_info:
        AssessmentRequest.for_host(host)

    assert exc_info.value.code == "MISSING_INPUT"


def test_request_is_immutable():
    request = AssessmentRequest(host="example.com")

    with pytest.raises(ValidationError):
        request.host = "example.org"  # type: ignore[misc]


@pytest.mark.parametrize(
    "status,terminal",
    [("READY", True), ("ERROR", True), ("DNS", False), ("IN_PROGRESS", False)],
)
def test_host_terminal_status(status, terminal):
    assert Host(status=status).is_terminal is terminal


def test_main_app_import():
    """Test that main FastAPI app can be imported."""
    from tls_assessor.main import app

    assert app is not None
    assert app.title == "TLS Assessor"
