"""
===============================================================================
USE CASES: Self-service del usuario autenticado
===============================================================================

- GetCurrentUserUseCase: detalles del caller.
- UpdateCurrentUserUseCase: update parcial de name/role.
- DeleteCurrentUserUseCase: borrado idempotente de la propia cuenta.

Todas operan sobre caller.user_id (nunca sobre un id del body).
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.entities import CallerIdentity
from ....domain.errors import MSG_USER_NOT_FOUND
from ....domain.repositories import UserRepository
from ...errors import not_found
from .user_results import (
    DeleteUserResult,
    GetUserResult,
    UpdateUserInput,
    UpdateUserResult,
)


class GetCurrentUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, caller: CallerIdentity) -> GetUserResult:
        user = self._users.get_user_by_id(caller.user_id)
        if user is None:
            return GetUserResult(error=not_found(MSG_USER_NOT_FOUND))
        return GetUserResult(user=user)


class UpdateCurrentUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, caller: CallerIdentity, data: UpdateUserInput) -> UpdateUserResult:
        name = (data.name or "").strip() or None
        role = (data.role or "").strip() or None

        user = self._users.update_user(caller.user_id, name=name, role=role)
        if user is None:
            return UpdateUserResult(error=not_found(MSG_USER_NOT_FOUND))

        logger.info(
            "Usuário atualizado",
            extra={
                "user_id": str(caller.user_id),
                "fields": [k for k, v in (("name", name), ("role", role)) if v],
            },
        )
        return UpdateUserResult(user=user)


class DeleteCurrentUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, caller: CallerIdentity) -> DeleteUserResult:
        deleted = self._users.delete_user(caller.user_id)
        logger.info(
            "Usuário deletado",
            extra={"user_id": str(caller.user_id), "deleted": deleted},
        )
        return DeleteUserResult(deleted=deleted)
