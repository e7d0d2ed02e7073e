"""
USE CASE: Get Client / List Clients (read-only projections).
"""

from __future__ import annotations

from uuid import UUID

from ....domain.entities import CallerIdentity
from ....domain.repositories import ClientRepository
from ...errors import not_found
from .client_results import MSG_CLIENT_NOT_FOUND, GetClientResult, ListClientsResult


class GetClientUseCase:
    def __init__(self, client_repository: ClientRepository) -> None:
        self._clients = client_repository

    def execute(self, caller: CallerIdentity, client_id: UUID) -> GetClientResult:
        client = self._clients.get_client(client_id)
        if client is None:
            return GetClientResult(error=not_found(MSG_CLIENT_NOT_FOUND))
        return GetClientResult(client=client)


class ListClientsUseCase:
    def __init__(self, client_repository: ClientRepository) -> None:
        self._clients = client_repository

    def execute(self, caller: CallerIdentity) -> ListClientsResult:
        return ListClientsResult(clients=self._clients.list_clients())
