"""
Name: Error Mapping Tests

Responsibilities:
  - ErrorKind -> HTTP status / code table
  - Validation errors carry the offending field
"""

import pytest
from olidesk.application.errors import ErrorKind, UseCaseError
from olidesk.crosscutting.error_responses import AppHTTPException, ErrorCode
from olidesk.interfaces.api.http.error_mapping import (
    STATUS_BY_KIND,
    raise_use_case_error,
    to_http_exception,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "kind,status,code",
    [
        (ErrorKind.VALIDATION_ERROR, 400, ErrorCode.VALIDATION_ERROR),
        (ErrorKind.NOT_AUTHENTICATED, 401, ErrorCode.UNAUTHORIZED),
        (ErrorKind.NOT_FOUND, 404, ErrorCode.NOT_FOUND),
        (ErrorKind.CONFLICT, 409, ErrorCode.CONFLICT),
        (ErrorKind.UPSTREAM_FAILURE, 500, ErrorCode.UPSTREAM_FAILURE),
        (ErrorKind.INTERNAL_ERROR, 500, ErrorCode.INTERNAL_ERROR),
    ],
)
def test_status_table(kind, status, code):
    exc = to_http_exception(UseCaseError(kind=kind, message="boom"))

    assert exc.status_code == status
    assert exc.code == code
    assert exc.detail == "boom"


def test_every_kind_is_mapped():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


def test_validation_error_includes_field():
    exc = to_http_exception(
        UseCaseError(
            kind=ErrorKind.VALIDATION_ERROR, message="city is required", field="address.city"
        )
    )

    assert exc.errors == [{"field": "address.city", "msg": "city is required"}]


def test_non_validation_errors_have_no_details():
    exc = to_http_exception(
        UseCaseError(kind=ErrorKind.UPSTREAM_FAILURE, message="x", field="NO_RESULTS_FOUND")
    )

    assert exc.errors is None


def test_raise_use_case_error():
    with pytest.raises(AppHTTPException) as exc_info:
        raise_use_case_error(UseCaseError(kind=ErrorKind.NOT_FOUND, message="client not found"))

    assert exc_info.value.status_code == 404
