"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCaseError -> HTTP)
===============================================================================

Responsabilidades:
  - Traducir ErrorKind de casos de uso a status HTTP + ErrorCode.
  - Centralizar el mapeo en UNA tabla.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (kind + message [+ field]).
  - La API traduce a AppHTTPException (crosscutting.error_responses).

Colaboradores:
  - application.errors (ErrorKind, UseCaseError)
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import Final, NoReturn

from olidesk.application.errors import ErrorKind, UseCaseError
from olidesk.crosscutting.error_responses import AppHTTPException, ErrorCode

# R: Tabla única ErrorKind -> (status HTTP, code estable)
STATUS_BY_KIND: Final[dict[ErrorKind, tuple[int, ErrorCode]]] = {
    ErrorKind.VALIDATION_ERROR: (400, ErrorCode.VALIDATION_ERROR),
    ErrorKind.NOT_AUTHENTICATED: (401, ErrorCode.UNAUTHORIZED),
    ErrorKind.NOT_FOUND: (404, ErrorCode.NOT_FOUND),
    ErrorKind.CONFLICT: (409, ErrorCode.CONFLICT),
    ErrorKind.UPSTREAM_FAILURE: (500, ErrorCode.UPSTREAM_FAILURE),
    ErrorKind.INTERNAL_ERROR: (500, ErrorCode.INTERNAL_ERROR),
}


def to_http_exception(error: UseCaseError) -> AppHTTPException:
    status_code, code = STATUS_BY_KIND.get(
        error.kind, (500, ErrorCode.INTERNAL_ERROR)
    )
    errors = None
    if error.kind == ErrorKind.VALIDATION_ERROR and error.field:
        errors = [{"field": error.field, "msg": error.message}]
    return AppHTTPException(status_code, code, error.message, errors)


def raise_use_case_error(error: UseCaseError) -> NoReturn:
    raise to_http_exception(error)
