"""
Resolución de referencias de un atendimento (cliente y técnicos).

- El cliente debe existir: si no, VALIDATION_ERROR "invalid client ID".
- Cada id de técnico debe resolver a un Member: si no,
  VALIDATION_ERROR "invalid technician responsible ID".
- Los ids repetidos colapsan preservando el primer orden visto.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple
from uuid import UUID

from ....domain.entities import NIL_UUID, ClientReference, Member
from ....domain.errors import MSG_CLIENT_ID, MSG_TECHNICIANS
from ....domain.repositories import ClientRepository, UserRepository
from ...errors import ErrorKind, UseCaseError


def dedupe_ids(ids: Iterable[UUID]) -> List[UUID]:
    return list(dict.fromkeys(ids))


def resolve_client(
    clients: ClientRepository, client_id: UUID | None
) -> Tuple[ClientReference | None, UseCaseError | None]:
    if client_id is None or client_id == NIL_UUID:
        return None, _invalid("cliente_id", MSG_CLIENT_ID)
    client = clients.get_client(client_id)
    if client is None:
        return None, _invalid("cliente_id", MSG_CLIENT_ID)
    return ClientReference(id=client.id, client_name=client.client_name), None


def resolve_technicians(
    users: UserRepository, technician_ids: Iterable[UUID]
) -> Tuple[List[Member], UseCaseError | None]:
    ids = dedupe_ids(technician_ids)
    if not ids:
        return [], _invalid("tecnicos_responsaveis", MSG_TECHNICIANS)

    by_id = {member.id: member for member in users.get_members_by_ids(ids)}
    if any(tid not in by_id for tid in ids):
        return [], _invalid("tecnicos_responsaveis", MSG_TECHNICIANS)
    return [by_id[tid] for tid in ids], None


def _invalid(field: str, message: str) -> UseCaseError:
    return UseCaseError(kind=ErrorKind.VALIDATION_ERROR, message=message, field=field)
