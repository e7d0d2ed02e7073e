"""Members Router: /members/list (técnicos disponibles)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from olidesk.application.usecases.users import ListMembersUseCase
from olidesk.container import get_list_members_use_case
from olidesk.domain.entities import CallerIdentity
from olidesk.identity.auth_gate import require_caller

from ..error_mapping import raise_use_case_error
from ..schemas.users import MemberRes, MembersListRes

router = APIRouter(prefix="/members", tags=["members"])


@router.get("/list", response_model=MembersListRes)
def list_members(
    caller: CallerIdentity = Depends(require_caller),
    use_case: ListMembersUseCase = Depends(get_list_members_use_case),
):
    result = use_case.execute(caller)
    if result.error is not None:
        raise_use_case_error(result.error)
    return MembersListRes(members=[MemberRes.from_entity(m) for m in result.members])
