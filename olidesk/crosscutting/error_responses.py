# olidesk/crosscutting/error_responses.py
"""
===============================================================================
TARJETA CRC — crosscutting/error_responses.py (Cuerpo de error HTTP)
===============================================================================

Contrato (todas las respuestas != 2xx):
    {"message": "...", "code": "NOT_FOUND", "request_id": "...", "errors": [...]}

`message` es el campo que el front ya lee; `code` es estable para clientes
nuevos; `errors` sólo aparece en validación o con un error_id interno.

Colaboradores:
  - identity/auth_gate.py (401 antes del router)
  - api/exception_handlers.py
  - interfaces/api/http/error_mapping.py
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

ErrorDetails = list[dict[str, Any]]


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorBody(BaseModel):
    message: str
    code: ErrorCode
    request_id: str | None = None
    errors: ErrorDetails | None = None


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {"description": label, "model": ErrorBody}
    for status, label in (
        (400, "Requisição inválida"),
        (401, "Não autorizado"),
        (404, "Não encontrado"),
        (409, "Conflito"),
        ("default", "Erro"),
    )
}


class AppHTTPException(HTTPException):
    """HTTPException con `code` estable y detalles opcionales."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: ErrorDetails | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


def validation_error(
    detail: str = "Requisição inválida", errors: ErrorDetails | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def unauthorized(detail: str = "Não autorizado") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)


def internal_error(detail: str = "Erro interno") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


def request_id_from(request: Request) -> str | None:
    state = getattr(request, "state", None)
    return getattr(state, "request_id", None)


def build_error_response(
    *,
    status_code: int,
    code: ErrorCode,
    message: str,
    request_id: str | None = None,
    errors: ErrorDetails | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """JSONResponse con ErrorBody; también la usan middlewares previos al router."""
    payload = ErrorBody(
        message=message, code=code, request_id=request_id, errors=errors or None
    ).model_dump(mode="json", exclude_none=True)
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return build_error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=str(exc.detail),
        request_id=request_id_from(request),
        errors=exc.errors,
        headers=exc.headers,
    )
