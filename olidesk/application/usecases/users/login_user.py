"""
USE CASE: Login (credenciales -> access token).

No distingue "usuario no existe" de "password incorrecto": ambos devuelven
NOT_AUTHENTICATED "invalid email or password".
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.errors import MSG_INVALID_CREDENTIALS
from ....domain.repositories import UserRepository
from ....domain.services import PasswordHasher
from ....identity.tokens import TokenService
from ...errors import ErrorKind, UseCaseError
from .register_user import normalize_email
from .user_results import LoginInput, LoginResult


class LoginUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ) -> None:
        self._users = user_repository
        self._hasher = password_hasher
        self._tokens = token_service

    def execute(self, data: LoginInput) -> LoginResult:
        email = normalize_email(data.email)
        user = self._users.get_user_by_email(email) if email else None

        if user is None or not self._hasher.verify(user.password_hash, data.password):
            logger.info("Login falhou", extra={"reason": "invalid_credentials"})
            return LoginResult(
                error=UseCaseError(
                    kind=ErrorKind.NOT_AUTHENTICATED, message=MSG_INVALID_CREDENTIALS
                )
            )

        issued = self._tokens.issue(str(user.id), user.email)
        logger.info("Login ok", extra={"user_id": str(user.id)})
        return LoginResult(
            access_token=issued.access_token,
            token_type=issued.token_type,
            expires_in=issued.expires_in,
        )
