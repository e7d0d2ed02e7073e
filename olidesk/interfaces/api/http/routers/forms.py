"""
===============================================================================
TARJETA CRC — olidesk/interfaces/api/http/routers/forms.py
===============================================================================

Class/Module:
    Form (Atendimento) Router

Responsibilities:
    - Exponer /forms/* (create, list, get, update, delete).
    - Adapter HTTP -> UseCase y mapeo de errores.

Collaborators:
    - olidesk.application.usecases.forms
    - olidesk.identity.auth_gate.require_caller
    - olidesk.container
    - schemas.forms
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from fastapi import APIRouter, Depends

from olidesk.application.usecases.forms import (
    CreateFormUseCase,
    DeleteFormUseCase,
    GetFormUseCase,
    ListFormsUseCase,
    UpdateFormUseCase,
)
from olidesk.container import (
    get_create_form_use_case,
    get_delete_form_use_case,
    get_get_form_use_case,
    get_list_forms_use_case,
    get_update_form_use_case,
)
from olidesk.crosscutting.error_responses import internal_error
from olidesk.domain.entities import CallerIdentity
from olidesk.identity.auth_gate import require_caller

from ..error_mapping import raise_use_case_error
from ..schemas.common import CreatedRes, MessageRes
from ..schemas.forms import FormEnvelopeRes, FormReq, FormRes, FormsListRes

MSG_CREATED: Final[str] = "Formulário criado com sucesso"
MSG_UPDATED: Final[str] = "Formulário atualizado com sucesso"
MSG_DELETED: Final[str] = "Formulário deletado com sucesso"

router = APIRouter(prefix="/forms", tags=["forms"])


@router.post("/create", response_model=CreatedRes, status_code=201)
def create_form(
    req: FormReq,
    caller: CallerIdentity = Depends(require_caller),
    use_case: CreateFormUseCase = Depends(get_create_form_use_case),
):
    result = use_case.execute(caller, req.to_input())
    if result.error is not None:
        raise_use_case_error(result.error)
    if result.form is None:
        raise internal_error()
    return CreatedRes(id=result.form.id, message=MSG_CREATED)


@router.get("/list", response_model=FormsListRes)
def list_forms(
    caller: CallerIdentity = Depends(require_caller),
    use_case: ListFormsUseCase = Depends(get_list_forms_use_case),
):
    result = use_case.execute(caller)
    if result.error is not None:
        raise_use_case_error(result.error)
    return FormsListRes(forms=[FormRes.from_entity(f) for f in result.forms])


@router.get("/{form_id}", response_model=FormEnvelopeRes)
def get_form(
    form_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    use_case: GetFormUseCase = Depends(get_get_form_use_case),
):
    result = use_case.execute(caller, form_id)
    if result.error is not None:
        raise_use_case_error(result.error)
    return FormEnvelopeRes(form=FormRes.from_entity(result.form))


@router.put("/update/{form_id}", response_model=MessageRes)
def update_form(
    form_id: UUID,
    req: FormReq,
    caller: CallerIdentity = Depends(require_caller),
    use_case: UpdateFormUseCase = Depends(get_update_form_use_case),
):
    result = use_case.execute(caller, form_id, req.to_input())
    if result.error is not None:
        raise_use_case_error(result.error)
    return MessageRes(message=MSG_UPDATED)


@router.delete("/delete/{form_id}", response_model=MessageRes)
def delete_form(
    form_id: UUID,
    caller: CallerIdentity = Depends(require_caller),
    use_case: DeleteFormUseCase = Depends(get_delete_form_use_case),
):
    result = use_case.execute(caller, form_id)
    if result.error is not None:
        raise_use_case_error(result.error)
    return MessageRes(message=MSG_DELETED)
