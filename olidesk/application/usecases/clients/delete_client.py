"""
===============================================================================
USE CASE: Delete Client (idempotent)
===============================================================================

Rules:
    - Borrar un id inexistente (o ya borrado) NO es error: deleted=False.
    - Nunca afecta otros registros.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import CallerIdentity
from ....domain.repositories import ClientRepository
from .client_results import DeleteClientResult


class DeleteClientUseCase:
    def __init__(self, client_repository: ClientRepository) -> None:
        self._clients = client_repository

    def execute(self, caller: CallerIdentity, client_id: UUID) -> DeleteClientResult:
        deleted = self._clients.delete_client(client_id)
        logger.info(
            "Cliente deletado",
            extra={
                "client_id": str(client_id),
                "user_id": str(caller.user_id),
                "deleted": deleted,
            },
        )
        return DeleteClientResult(deleted=deleted)
