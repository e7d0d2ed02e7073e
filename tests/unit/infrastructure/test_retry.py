"""
Tests for the retry helper (transient vs permanent classification).
"""

import httpx
import pytest
from olidesk.infrastructure.services.retry import (
    create_retry_decorator,
    get_http_status_code,
    is_transient_error,
)

pytestmark = pytest.mark.unit


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://geo.test/search")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("boom", request=request, response=response)


@pytest.mark.parametrize("status", [408, 429, 500, 502, 503, 504])
def test_transient_status_codes(status):
    assert is_transient_error(_status_error(status)) is True


@pytest.mark.parametrize("status", [400, 401, 403, 404])
def test_permanent_status_codes(status):
    assert is_transient_error(_status_error(status)) is False


def test_transport_errors_are_transient():
    assert is_transient_error(httpx.ReadTimeout("slow")) is True
    assert is_transient_error(TimeoutError()) is True
    assert is_transient_error(ConnectionError()) is True


def test_other_errors_are_permanent():
    assert is_transient_error(ValueError("bad payload")) is False


def test_get_http_status_code():
    assert get_http_status_code(_status_error(503)) == 503
    assert get_http_status_code(ValueError()) is None


def test_decorator_stops_after_max_attempts():
    calls = []

    @create_retry_decorator(max_attempts=3, base_delay=0, max_delay=0.01)
    def flaky():
        calls.append(1)
        raise httpx.ConnectError("refused")

    with pytest.raises(httpx.ConnectError):
        flaky()
    assert len(calls) == 3


def test_decorator_does_not_retry_permanent_errors():
    calls = []

    @create_retry_decorator(max_attempts=3, base_delay=0, max_delay=0.01)
    def broken():
        calls.append(1)
        raise ValueError("permanent")

    with pytest.raises(ValueError):
        broken()
    assert len(calls) == 1


def test_invalid_policy_rejected():
    with pytest.raises(ValueError):
        create_retry_decorator(max_attempts=0, base_delay=0, max_delay=1)
