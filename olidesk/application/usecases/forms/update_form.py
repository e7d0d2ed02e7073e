"""
===============================================================================
USE CASE: Update Form (sparse patch + replace-set de técnicos)
===============================================================================

Rules:
    - Campos None / vacíos dejan el valor almacenado intacto.
    - cliente_id provisto: el nuevo cliente debe existir.
    - Lista de técnicos provista y no vacía: REEMPLAZA el set completo
      (delete + insert en la misma transacción que el update escalar).
    - El form resultante se re-valida antes de persistir.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import NIL_UUID, CallerIdentity
from ....domain.errors import DomainValidationError
from ....domain.repositories import ClientRepository, FormRepository, UserRepository
from ...errors import not_found, validation_failure
from .form_references import dedupe_ids, resolve_client, resolve_technicians
from .form_results import MSG_FORM_NOT_FOUND, FormInput, UpdateFormResult

_TEXT_FIELDS = (
    "solicited_by",
    "difficulty_level",
    "defect_description",
    "solution_description",
)


class UpdateFormUseCase:
    def __init__(
        self,
        form_repository: FormRepository,
        client_repository: ClientRepository,
        user_repository: UserRepository,
    ) -> None:
        self._forms = form_repository
        self._clients = client_repository
        self._users = user_repository

    def execute(
        self, caller: CallerIdentity, form_id: UUID, data: FormInput
    ) -> UpdateFormResult:
        form = self._forms.get_form(form_id)
        if form is None:
            return UpdateFormResult(error=not_found(MSG_FORM_NOT_FOUND))

        for name in _TEXT_FIELDS:
            value = getattr(data, name)
            if value:
                setattr(form, name, value)
        if data.opened_at is not None:
            form.opened_at = data.opened_at

        if data.client_id is not None and data.client_id != NIL_UUID:
            client_ref, error = resolve_client(self._clients, data.client_id)
            if error is not None:
                return UpdateFormResult(error=error)
            form.client = client_ref

        replacement_ids = None
        if data.technician_ids:
            replacement_ids = dedupe_ids(data.technician_ids)
            technicians, error = resolve_technicians(self._users, replacement_ids)
            if error is not None:
                return UpdateFormResult(error=error)
            form.technicians = technicians

        try:
            form.validate()
        except DomainValidationError as exc:
            return UpdateFormResult(error=validation_failure(exc))

        form.touch()
        if not self._forms.update_form(form, technician_ids=replacement_ids):
            return UpdateFormResult(error=not_found(MSG_FORM_NOT_FOUND))

        logger.info(
            "Formulário atualizado",
            extra={
                "form_id": str(form_id),
                "user_id": str(caller.user_id),
                "technicians_replaced": replacement_ids is not None,
            },
        )
        return UpdateFormResult(form=form)
