"""USE CASE: List Members (técnicos disponibles para atendimentos)."""

from __future__ import annotations

from ....domain.entities import CallerIdentity
from ....domain.repositories import UserRepository
from .user_results import ListMembersResult


class ListMembersUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, caller: CallerIdentity) -> ListMembersResult:
        return ListMembersResult(members=self._users.list_members())
