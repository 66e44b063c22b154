"""
Assessment quota handling for the polling engine.

The SSL Labs API advertises its concurrent assessment quota on every
response. This module turns those headers into a QuotaState value and
decides whether another poll is allowed.
"""

from collections.abc import Mapping

import structlog

from .models import QuotaState

logger = structlog.get_logger(__name__)

MAX_ASSESSMENTS_HEADER = "X-Max-Assessments"
CURRENT_ASSESSMENTS_HEADER = "X-Current-Assessments"


def _header_int(headers: Mapping[str, str], name: str) -> int:
    raw = headers.get(name)
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring malformed quota header", header=name, value=raw)
        return 0


def quota_from_headers(headers: Mapping[str, str]) -> QuotaState:
    """
    Build a quota snapshot from response headers.

    Missing or malformed headers count as zero, which the quota gate
    treats as "no limit observed".

    Args:
        headers: Response headers (case-insensitive mapping)

    Returns:
        Fresh quota snapshot
    """
    return QuotaState(
        max_assessments=_header_int(headers, MAX_ASSESSMENTS_HEADER),
        current_assessments=_header_int(headers, CURRENT_ASSESSMENTS_HEADER),
    )


def is_quota_exhausted(quota: QuotaState) -> bool:
    """Check if the service has no free assessment slots left."""
    if quota.max_assessments <= 0:
        return False
    return quota.current_assessments >= quota.max_assessments
