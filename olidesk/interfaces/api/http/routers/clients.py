"""
===============================================================================
TARJETA CRC — olidesk/interfaces/api/http/routers/clients.py
===============================================================================

Class/Module:
    Client Router

Responsibilities:
    - Exponer /clients/* (create, list, get, update, delete).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir UseCaseError -> HTTP (error_mapping).

Collaborators:
    - olidesk.application.usecases.clients
    - olidesk.identity.auth_gate.require_caller
    - olidesk.container (factories DI)
    - schemas.clients

Notas:
    - /list se declara antes de /{client_id} para que no lo capture el path param.
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from fastapi import APIRouter, Depends

from olidesk.application.usecases.clients import (
    CreateClientUseCase,
    DeleteClientUseCase,
    GetClientUseCase,
    ListClientsUseCase,
    UpdateClientUseCase,
)
from olidesk.container import (
    get_create_client_use_case,
    get_delete_client_use_case,
    get_get_client_use_case,
    get_list_clients_use_case,
    get_update_client_use_case,
)
from olidesk.crosscutting.error_responses import internal_error
from olidesk.domain.entities import CallerIdentity
from olidesk.identity.auth_gate import require_caller

from ..error_mapping import raise_use_case_error
from ..schemas.clients import ClientEnvelopeRes, ClientReq, ClientRes, ClientsListRes
from ..schemas.common import CreatedRes, MessageRes

MSG_CREATED: Final[str] = "Cliente criado com sucesso"
MSG_UPDATED: Final[str] = "Cliente atualizado com sucesso"
MSG_DELETED: Final[str] = "Cliente deletado com sucesso"

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("/create", response_model=CreatedRes, status_code=201)
def create_client(
    req: ClientReq,
    caller: CallerIdentity = Depends(require_caller),
    use_case: CreateClientUseCase = Depends(get_create_client_use_case),
):
    result = use_case.execute(caller, req.to_input())
    if result.error is not None:
        raise_use_case_error(result.error)
    if result.client is None:
        raise internal_error()
    return CreatedRes(id=result.client.id, message=MSG_CREATED)


@router.get("/list", response_model=ClientsListRes)
def list_clients(
    caller: CallerIdentity = Depends(require_caller),
    use_case: ListClientsUseCase = Depends(get_list_clients_use_case),
):
    result = use_case.execute(caller)
    if result.error is not None:
        raise_use_case_error(result.error)
    return ClientsListRes(clients=[ClientRes.from_entity(c) for c in result.clients])


@router.get("/{client_id}", response_model=ClientEnvelopeRes)
def get_client(
    client_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    use_case: GetClientUseCase = Depends(get_get_client_use_case),
):
    result = use_case.execute(caller, client_id)
    if result.error is not None:
        raise_use_case_error(result.error)
    return ClientEnvelopeRes(client=ClientRes.from_entity(result.client))


@router.put("/update/{client_id}", response_model=MessageRes)
def update_client(
    client_id: UUID,
    req: ClientReq,
    caller: CallerIdentity = Depends(require_caller),
    use_case: UpdateClientUseCase = Depends(get_update_client_use_case),
):
    result = use_case.execute(caller, client_id, req.to_input())
    if result.error is not None:
        raise_use_case_error(result.error)
    return MessageRes(message=MSG_UPDATED)


@router.delete("/delete/{client_id}", response_model=MessageRes)
def delete_client(
    client_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    use_case: DeleteClientUseCase = Depends(get_delete_client_use_case),
):
    result = use_case.execute(caller, client_id)
    if result.error is not None:
        raise_use_case_error(result.error)
    return MessageRes(message=MSG_DELETED)
