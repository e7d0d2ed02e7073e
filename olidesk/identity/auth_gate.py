"""
===============================================================================
TARJETA CRC — identity/auth_gate.py
===============================================================================

Módulo:
    Authentication Gate (Bearer JWT) + dependencia require_caller

Responsabilidades:
    - Interceptar cada request antes del router.
    - Dejar pasar rutas públicas (match exacto de path).
    - Exigir `Authorization: Bearer <token>` y verificarlo con TokenService.
    - Adjuntar el subject verificado a `request.state.caller`.
    - Responder 401 `{message, code}` sin invocar ningún caso de uso.
    - Exponer `require_caller` para obtener un CallerIdentity tipado.

Colaboradores:
    - identity.tokens: TokenService / TokenError
    - crosscutting.error_responses: build_error_response / unauthorized
    - domain.entities.CallerIdentity
    - crosscutting.logger

Reglas:
    - El prefijo "Bearer " es case-sensitive.
    - El set de rutas públicas es estático por instancia.
    - No se loguean tokens.
===============================================================================
"""

from __future__ import annotations

from typing import Callable, Final, Iterable
from uuid import UUID

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..crosscutting.error_responses import (
    ErrorCode,
    build_error_response,
    request_id_from,
    unauthorized,
)
from ..crosscutting.logger import logger
from ..domain.entities import CallerIdentity
from .tokens import TokenClaims, TokenError, TokenService

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

BEARER_PREFIX: Final[str] = "Bearer "

DEFAULT_PUBLIC_PATHS: Final[frozenset[str]] = frozenset(
    {
        "/api/v1/users/login",
        "/docs",
        "/docs/oauth2-redirect",
        "/openapi.json",
        "/healthz",
    }
)

MSG_MISSING_HEADER: Final[str] = "Token de autorização não fornecido"
MSG_BAD_FORMAT: Final[str] = "Formato do token inválido. Use: Bearer <token>"
MSG_INVALID_TOKEN: Final[str] = "Token inválido: {reason}"
MSG_INVALID_SUBJECT: Final[str] = "Token não contém user_id válido"


class AuthenticationGateMiddleware(BaseHTTPMiddleware):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AuthenticationGateMiddleware

    Responsabilidades:
      - Rechazar requests no públicas sin un Bearer token válido.
      - Propagar TokenClaims en request.state.caller.

    Colaboradores:
      - TokenService (obtenido vía provider en cada request)
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        app,
        *,
        token_service_provider: Callable[[], TokenService],
        public_paths: Iterable[str] = DEFAULT_PUBLIC_PATHS,
    ):
        super().__init__(app)
        self._token_service_provider = token_service_provider
        self._public_paths = frozenset(public_paths)

    def is_public(self, path: str) -> bool:
        return path in self._public_paths

    async def dispatch(self, request: Request, call_next):
        if self.is_public(request.url.path):
            return await call_next(request)

        header = request.headers.get("authorization")
        if not header:
            return self._reject(request, MSG_MISSING_HEADER)

        if not header.startswith(BEARER_PREFIX):
            return self._reject(request, MSG_BAD_FORMAT)

        token = header[len(BEARER_PREFIX) :].strip()
        try:
            claims = self._token_service_provider().verify(token)
        except TokenError as exc:
            logger.info(
                "Token rechazado",
                extra={"reason_code": exc.code, "path": request.url.path},
            )
            return self._reject(request, MSG_INVALID_TOKEN.format(reason=exc.reason))

        request.state.caller = claims
        return await call_next(request)

    @staticmethod
    def _reject(request: Request, message: str):
        return build_error_response(
            status_code=401,
            code=ErrorCode.UNAUTHORIZED,
            message=message,
            request_id=request_id_from(request),
            headers={"WWW-Authenticate": "Bearer"},
        )


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def caller_from_claims(claims: TokenClaims | None) -> CallerIdentity | None:
    """Convierte claims verificados en CallerIdentity (None si el subject no es UUID)."""
    if claims is None or not claims.subject_id:
        return None
    try:
        user_id = UUID(claims.subject_id)
    except (TypeError, ValueError):
        return None
    return CallerIdentity(user_id=user_id, email=claims.email)


def require_caller(request: Request) -> CallerIdentity:
    """Dependencia: identidad del caller autenticado (401 si falta o es inválida)."""
    claims = getattr(request.state, "caller", None)
    caller = caller_from_claims(claims)
    if caller is None:
        raise unauthorized(MSG_INVALID_SUBJECT)
    return caller
