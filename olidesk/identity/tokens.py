"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Servicio de Tokens de Identidad (JWT HS256)

Responsabilidades:
    - Emitir access tokens firmados (sub, email, iat, nbf, exp).
    - Verificar firma, algoritmo y ventana temporal con un reloj inyectable.
    - Clasificar fallos en códigos estables (TokenError.code).

Colaboradores:
    - PyJWT: codificación/decodificación HS256.
    - crosscutting.exceptions.ConfigurationError: secreto vacío.
    - identity.auth_gate: consume verify().
    - application.usecases.users.login_user: consume issue().

Decisiones de diseño:
    - Solo HS256: cualquier otro algoritmo se trata como firma inválida.
    - exp/nbf se validan contra el reloj inyectado (tests deterministas).
    - El secreto es inmutable por instancia; no hay estado compartido.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Final

import jwt

from ..crosscutting.exceptions import ConfigurationError

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

JWT_ALGORITHM: Final[str] = "HS256"
TOKEN_TYPE: Final[str] = "Bearer"
DEFAULT_TTL: Final[timedelta] = timedelta(hours=24)

CLAIM_SUB: Final[str] = "sub"
CLAIM_EMAIL: Final[str] = "email"
CLAIM_IAT: Final[str] = "iat"
CLAIM_NBF: Final[str] = "nbf"
CLAIM_EXP: Final[str] = "exp"

# Códigos de fallo de verificación
INVALID_SIGNATURE: Final[str] = "INVALID_SIGNATURE"
EXPIRED: Final[str] = "EXPIRED"
NOT_YET_VALID: Final[str] = "NOT_YET_VALID"
MALFORMED: Final[str] = "MALFORMED"
MISSING_SUBJECT: Final[str] = "MISSING_SUBJECT"

_REASONS: Final[dict[str, str]] = {
    INVALID_SIGNATURE: "assinatura inválida",
    EXPIRED: "token expirado",
    NOT_YET_VALID: "token ainda não é válido",
    MALFORMED: "token malformado",
    MISSING_SUBJECT: "token sem subject",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Contratos
# ---------------------------------------------------------------------------


class TokenError(Exception):
    """Fallo de verificación con un código estable (ver constantes)."""

    def __init__(self, code: str, reason: str | None = None):
        self.code = code
        self.reason = reason or _REASONS.get(code, code.lower())
        super().__init__(self.reason)


@dataclass(frozen=True, slots=True)
class IssuedToken:
    access_token: str
    token_type: str = TOKEN_TYPE
    expires_in: int = int(DEFAULT_TTL.total_seconds())


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Claims verificados. subject_id aún no se valida como UUID."""

    subject_id: str
    email: str = ""


# ---------------------------------------------------------------------------
# Servicio
# ---------------------------------------------------------------------------


class TokenService:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      TokenService

    Responsabilidades:
      - issue(subject_id, email) -> IssuedToken
      - verify(token) -> TokenClaims | TokenError

    Colaboradores:
      - PyJWT
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] | None = None,
    ):
        if not secret:
            raise ConfigurationError("JWT_SECRET no configurado")
        if ttl.total_seconds() <= 0:
            raise ConfigurationError("TTL de token inválido")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock or _utcnow

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, subject_id: str, email: str = "") -> IssuedToken:
        now = self._clock()
        payload = {
            CLAIM_SUB: str(subject_id),
            CLAIM_EMAIL: email,
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_NBF: int(now.timestamp()),
            CLAIM_EXP: int((now + self._ttl).timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        return IssuedToken(
            access_token=token,
            token_type=TOKEN_TYPE,
            expires_in=self.ttl_seconds,
        )

    def verify(self, token: str) -> TokenClaims:
        if not token:
            raise TokenError(MALFORMED)

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                    "require": [CLAIM_EXP, CLAIM_IAT, CLAIM_NBF],
                },
            )
        # R: InvalidSignatureError hereda de DecodeError; va primero.
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
            raise TokenError(INVALID_SIGNATURE) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenError(MALFORMED) from exc

        exp = payload.get(CLAIM_EXP)
        nbf = payload.get(CLAIM_NBF)
        if not _is_number(exp) or not _is_number(nbf):
            raise TokenError(MALFORMED)

        now = self._clock().timestamp()
        if now >= float(exp):
            raise TokenError(EXPIRED)
        if now < float(nbf):
            raise TokenError(NOT_YET_VALID)

        subject = payload.get(CLAIM_SUB)
        if not isinstance(subject, str) or not subject.strip():
            raise TokenError(MISSING_SUBJECT)

        email = payload.get(CLAIM_EMAIL)
        return TokenClaims(
            subject_id=subject.strip(),
            email=email if isinstance(email, str) else "",
        )


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
