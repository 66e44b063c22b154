"""
Request URL construction for the SSL Labs assessment API.

Everything here is pure: identical arguments always produce byte-identical
URLs.
"""

from urllib.parse import quote, urlencode

DEFAULT_API_URL = "https://api.ssllabs.com/api/v2"

# 24 hours, sent as-is in the maxAge parameter.
CACHE_MAX_AGE = 86400


def build_analyze_url(
    host: str,
    start_new: bool,
    from_cache: bool = False,
    max_age: int = CACHE_MAX_AGE,
    base_url: str = DEFAULT_API_URL,
) -> str:
    """
    Build the URL of an ``analyze`` call.

    Full check detail (``all=done``) is always requested. Parameters are
    emitted in sorted key order.

    Args:
        host: Hostname to assess
        start_new: Start a new assessment (first request of a session only)
        from_cache: Accept a cached report
        max_age: Maximum cache age sent along with ``from_cache``
        base_url: API base URL

    Returns:
        Fully percent-encoded absolute URL
    """
    params = {"host": host, "all": "done"}
    if start_new:
        params["startNew"] = "on"
    if from_cache:
        params["fromCache"] = "on"
        params["maxAge"] = str(max_age)

    query = urlencode(sorted(params.items()), quote_via=quote)
    return f"{base_url.rstrip('/')}/analyze?{query}"


def build_info_url(base_url: str = DEFAULT_API_URL) -> str:
    """Build the URL of the service ``info`` call."""
    return f"{base_url.rstrip('/')}/info"
