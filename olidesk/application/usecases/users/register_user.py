"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Dar de alta un usuario (y su fila member) desde un caller autenticado.

Flow:
    normalize email -> validate -> hash password -> persist (user + member atómico)

Rules:
    - Email normalizado (trim + lower) antes de validar y persistir.
    - Email duplicado -> CONFLICT "duplicated email or username".
    - El password en claro nunca se loguea.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Collaborators:
    - UserRepository.create_user
    - PasswordHasher.hash (argon2)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.entities import CallerIdentity, User, validate_user_fields
from ....domain.errors import (
    MSG_DUPLICATED_EMAIL,
    DomainValidationError,
    DuplicateRecordError,
)
from ....domain.repositories import UserRepository
from ....domain.services import PasswordHasher
from ...errors import ErrorKind, UseCaseError, validation_failure
from .user_results import RegisterUserInput, RegisterUserResult


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class RegisterUserUseCase:
    def __init__(
        self, user_repository: UserRepository, password_hasher: PasswordHasher
    ) -> None:
        self._users = user_repository
        self._hasher = password_hasher

    def execute(
        self, caller: CallerIdentity | None, data: RegisterUserInput
    ) -> RegisterUserResult:
        email = normalize_email(data.email)
        name = (data.name or "").strip()
        role = (data.role or "").strip()

        try:
            validate_user_fields(
                name=name, email=email, role=role, password=data.password
            )
        except DomainValidationError as exc:
            return RegisterUserResult(error=validation_failure(exc))

        user = User(
            id=uuid4(),
            name=name,
            email=email,
            password_hash=self._hasher.hash(data.password),
            role=role,
        )

        try:
            created = self._users.create_user(user)
        except DuplicateRecordError:
            return RegisterUserResult(
                error=UseCaseError(
                    kind=ErrorKind.CONFLICT, message=MSG_DUPLICATED_EMAIL, field="email"
                )
            )

        logger.info(
            "Usuário criado",
            extra={
                "new_user_id": str(created.id),
                "user_id": str(caller.user_id) if caller else None,
            },
        )
        return RegisterUserResult(user=created)
