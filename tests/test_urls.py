"""
Tests for analyze/info URL construction.
"""

from tls_assessor.urls import CACHE_MAX_AGE, build_analyze_url, build_info_url

BASE = "https://api.ssllabs.com/api/v2"


def test_first_request_starts_new_assessment():
    """Test that start_new adds startNew=on and always asks for full detail."""
    url = build_analyze_url("example.com", start_new=True)

    assert url == f"{BASE}/analyze?all=done&host=example.com&startNew=on"


def test_follow_up_request_omits_start_new():
    """Test that polls after the first one do not restart the assessment."""
    url = build_analyze_url("example.com", start_new=False)

    assert url == f"{BASE}/analyze?all=done&host=example.com"


def test_cache_request_sets_cache_flag_and_max_age():
    """Test cached lookups send fromCache and the fixed 24 hour max age."""
    url = build_analyze_url("example.com", start_new=False, from_cache=True)

    assert CACHE_MAX_AGE == 86400
    assert url == (
        f"{BASE}/analyze?all=done&fromCache=on&host=example.com&maxAge=86400"
    )


def test_identical_inputs_give_identical_urls():
    """Test that the builder is deterministic."""
    first = build_analyze_url("example.com", True, from_cache=True)
    second = build_analyze_url("example.com", True, from_cache=True)

    assert first == second


def test_hostname_with_space_is_percent_encoded():
    """Test that unsafe characters in the hostname are encoded."""
    url = build_analyze_url("my host.com", start_new=False)

    assert "host=my%20host.com" in url
    assert " " not in url


def test_hostname_reserved_characters_are_encoded():
    """Test that query delimiters in the hostname cannot inject parameters."""
    url = build_analyze_url("example.com&startNew=on", start_new=False)

    assert "host=example.com%26startNew%3Don" in url
    assert url.count("&") == 1


def test_custom_base_url_and_max_age():
    """Test overriding the base URL (with trailing slash) and max age."""
    url = build_analyze_url(
        "example.com",
        start_new=False,
        from_cache=True,
        max_age=12,
        base_url="http://localhost:9000/api/",
    )

    assert url == (
        "http://localhost:9000/api/analyze"
        "?all=done&fromCache=on&host=example.com&maxAge=12"
    )


def test_info_url():
    """Test the service info URL."""
    assert build_info_url() == f"{BASE}/info"
    assert build_info_url("http://localhost:9000/") == "http://localhost:9000/info"
