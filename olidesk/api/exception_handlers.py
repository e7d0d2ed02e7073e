"""
===============================================================================
TARJETA CRC — olidesk/api/exception_handlers.py (Excepciones -> ErrorBody)
===============================================================================

Responsabilidades:
  - Convertir excepciones que escapan de los routers en ErrorBody.
  - DatabaseError / OlideskError -> 500 con error_id (el detalle queda en logs).
  - Body/path inválido (RequestValidationError) -> 400 con errors[field,msg].
  - Cualquier otra excepción -> 500; el mensaje real sólo fuera de producción.

Colaboradores:
  - crosscutting.error_responses
  - crosscutting.exceptions
  - crosscutting.config (is_production)
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    build_error_response,
    request_id_from,
    validation_error,
)
from ..crosscutting.exceptions import DatabaseError, OlideskError
from ..crosscutting.logger import logger

GENERIC_MESSAGE = "Erro interno"


def _internal_response(
    request: Request, code: ErrorCode, message: str, error_id: str | None = None
) -> JSONResponse:
    return build_error_response(
        status_code=500,
        code=code,
        message=message,
        request_id=request_id_from(request),
        errors=[{"error_id": error_id}] if error_id else None,
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(
        "Fallo de base de datos",
        exc_info=exc,
        extra={"error_id": exc.error_id, "error": exc.message},
    )
    return _internal_response(
        request, ErrorCode.DATABASE_ERROR, GENERIC_MESSAGE, exc.error_id
    )


async def olidesk_error_handler(request: Request, exc: OlideskError) -> JSONResponse:
    logger.error(
        "Error interno tipado",
        extra={"error_code": exc.error_code, "error_id": exc.error_id, "error": exc.message},
    )
    return _internal_response(
        request, ErrorCode.INTERNAL_ERROR, GENERIC_MESSAGE, exc.error_id
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        details.append({"field": ".".join(loc), "msg": err.get("msg", "")})
    return await app_exception_handler(request, validation_error(errors=details))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Excepción no controlada", exc_info=exc)
    message = GENERIC_MESSAGE if get_settings().is_production() else str(exc)
    return _internal_response(request, ErrorCode.INTERNAL_ERROR, message)


def register_exception_handlers(app: FastAPI) -> None:
    # Exception va último: es el fallback.
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(OlideskError, olidesk_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
