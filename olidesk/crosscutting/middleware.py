# olidesk/crosscutting/middleware.py
"""
===============================================================================
TARJETA CRC — crosscutting/middleware.py (Contexto + access log)
===============================================================================

Responsabilidades:
  - Asignar request_id: reusar X-Request-Id entrante o generar uno.
  - Publicarlo en request.state y en el ContextVar de logs.
  - Devolverlo en la respuesta (header X-Request-Id).
  - Una línea de access log por request (salvo /healthz).

Colaboradores:
  - olidesk/context.py
  - crosscutting/logger.py
  - api/main.py (lo registra como middleware más externo)
===============================================================================
"""

from __future__ import annotations

import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 128

_UNLOGGED_PATHS = frozenset({"/healthz"})


def resolve_request_id(raw: str | None) -> str:
    candidate = (raw or "").strip()
    if candidate and len(candidate) <= MAX_REQUEST_ID_LENGTH:
        return candidate
    return str(uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            if request.url.path not in _UNLOGGED_PATHS:
                logger.info(
                    "Request atendido",
                    extra={
                        "status_code": response.status_code,
                        "elapsed_ms": _elapsed_ms(started),
                    },
                )
            return response
        except Exception:
            logger.exception(
                "Request abortado", extra={"elapsed_ms": _elapsed_ms(started)}
            )
            raise
        finally:
            clear_context()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
