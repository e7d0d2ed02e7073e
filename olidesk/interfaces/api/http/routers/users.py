"""
===============================================================================
TARJETA CRC — olidesk/interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    Users Router

Responsibilities:
    - /users/create (protegido), /users/login (público).
    - Self-service: /users/details, /users/update, /users/delete.

Collaborators:
    - olidesk.application.usecases.users
    - olidesk.identity.auth_gate.require_caller
    - olidesk.container
    - schemas.users

Notas:
    - /users/login figura en la lista de rutas públicas del gate; no usa
      require_caller.
===============================================================================
"""

from __future__ import annotations

from typing import Final

from fastapi import APIRouter, Depends

from olidesk.application.usecases.users import (
    DeleteCurrentUserUseCase,
    GetCurrentUserUseCase,
    LoginInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    UpdateCurrentUserUseCase,
    UpdateUserInput,
)
from olidesk.container import (
    get_current_user_use_case,
    get_delete_current_user_use_case,
    get_login_user_use_case,
    get_register_user_use_case,
    get_update_current_user_use_case,
)
from olidesk.crosscutting.error_responses import internal_error
from olidesk.domain.entities import CallerIdentity
from olidesk.identity.auth_gate import require_caller

from ..error_mapping import raise_use_case_error
from ..schemas.common import SUCCESS_MESSAGE, CreatedRes, MessageRes
from ..schemas.users import (
    LoginReq,
    LoginRes,
    RegisterUserReq,
    UpdateUserReq,
    UserEnvelopeRes,
    UserRes,
)

MSG_CREATED: Final[str] = "Usuário criado com sucesso"
MSG_UPDATED: Final[str] = "Usuário atualizado com sucesso"

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/create", response_model=CreatedRes, status_code=201)
def create_user(
    req: RegisterUserReq,
    caller: CallerIdentity = Depends(require_caller),
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    result = use_case.execute(
        caller,
        RegisterUserInput(
            name=req.name, email=req.email, role=req.role, password=req.password
        ),
    )
    if result.error is not None:
        raise_use_case_error(result.error)
    if result.user is None:
        raise internal_error()
    return CreatedRes(id=result.user.id, message=MSG_CREATED)


@router.post("/login", response_model=LoginRes)
def login(
    req: LoginReq,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    result = use_case.execute(LoginInput(email=req.email, password=req.password))
    if result.error is not None:
        raise_use_case_error(result.error)
    return LoginRes(
        access_token=result.access_token,
        token_type=result.token_type,
        expires_in=result.expires_in,
    )


@router.get("/details", response_model=UserEnvelopeRes)
def get_details(
    caller: CallerIdentity = Depends(require_caller),
    use_case: GetCurrentUserUseCase = Depends(get_current_user_use_case),
):
    result = use_case.execute(caller)
    if result.error is not None:
        raise_use_case_error(result.error)
    return UserEnvelopeRes(user=UserRes.from_entity(result.user))


@router.put("/update", response_model=MessageRes)
def update_user(
    req: UpdateUserReq,
    caller: CallerIdentity = Depends(require_caller),
    use_case: UpdateCurrentUserUseCase = Depends(get_update_current_user_use_case),
):
    result = use_case.execute(caller, UpdateUserInput(name=req.name, role=req.role))
    if result.error is not None:
        raise_use_case_error(result.error)
    return MessageRes(message=MSG_UPDATED)


@router.delete("/delete", response_model=MessageRes)
def delete_user(
    caller: CallerIdentity = Depends(require_caller),
    use_case: DeleteCurrentUserUseCase = Depends(get_delete_current_user_use_case),
):
    result = use_case.execute(caller)
    if result.error is not None:
        raise_use_case_error(result.error)
    return MessageRes(message=SUCCESS_MESSAGE)
