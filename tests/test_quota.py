"""
Tests for quota header parsing and the quota gate.
"""

import httpx
import pytest
from pydantic import ValidationError

from tls_assessor.models import QuotaState
from tls_assessor.quota import is_quota_exhausted, quota_from_headers


def test_quota_read_from_headers():
    """Test that both counters are taken from the response headers."""
    headers = httpx.Headers(
        {"X-Max-Assessments": "25", "X-Current-Assessments": "4"}
    )

    quota = quota_from_headers(headers)

    assert quota == QuotaState(max_assessments=25, current_assessments=4)


def test_quota_headers_are_case_insensitive():
    """Test header lookup through httpx's case-insensitive headers."""
    headers = httpx.Headers(
        {"x-max-assessments": "10", "x-current-assessments": "10"}
    )

    assert quota_from_headers(headers).current_assessments == 10


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"X-Max-Assessments": "many", "X-Current-Assessments": ""},
    ],
)
def test_missing_or_malformed_headers_default_to_zero(headers):
    """Test that absent or unparsable headers mean no limit observed."""
    quota = quota_from_headers(httpx.Headers(headers))

    assert quota == QuotaState()
    assert is_quota_exhausted(quota) is False


@pytest.mark.parametrize(
    "max_assessments,current_assessments,expected",
    [
        (25, 0, False),
        (25, 24, False),
        (25, 25, True),
        (25, 30, True),
        (0, 0, False),
        (0, 7, False),
    ],
)
def test_quota_gate(max_assessments, current_assessments, expected):
    """Test the gate trips at or above the maximum, never without a maximum."""
    quota = QuotaState(
        max_assessments=max_assessments, current_assessments=current_assessments
    )

    assert is_quota_exhausted(quota) is expected


def test_quota_state_is_immutable():
    """Test that quota snapshots cannot be changed in place."""
    quota = QuotaState(max_assessments=1)

    with pytest.raises(ValidationError):
        quota.max_assessments = 2  # type: ignore[misc]
