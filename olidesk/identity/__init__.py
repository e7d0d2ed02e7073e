"""
Identity: tokens JWT, hash de passwords y gate de autenticación.
"""

from .auth_gate import (
    DEFAULT_PUBLIC_PATHS,
    AuthenticationGateMiddleware,
    require_caller,
)
from .passwords import Argon2PasswordHasher
from .tokens import IssuedToken, TokenClaims, TokenError, TokenService

__all__ = [
    "DEFAULT_PUBLIC_PATHS",
    "Argon2PasswordHasher",
    "AuthenticationGateMiddleware",
    "IssuedToken",
    "TokenClaims",
    "TokenError",
    "TokenService",
    "require_caller",
]
