"""
===============================================================================
USE CASE: Create Form (Atendimento)
===============================================================================

Business Goal:
    Abrir un atendimento para un cliente existente, asignado a uno o más
    técnicos.

Flow:
    validate -> resolve client -> resolve technicians -> persist (atómico)

Rules:
    - Técnicos repetidos colapsan preservando el orden.
    - El form y sus filas de técnicos se escriben en una única transacción.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateFormUseCase

Collaborators:
    - FormRepository.create_form
    - ClientRepository.get_client (vía resolve_client)
    - UserRepository.get_members_by_ids (vía resolve_technicians)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.entities import CallerIdentity, ClientReference, Form, Member
from ....domain.errors import DomainValidationError
from ....domain.repositories import ClientRepository, FormRepository, UserRepository
from ...errors import validation_failure
from .form_references import dedupe_ids, resolve_client, resolve_technicians
from .form_results import CreateFormResult, FormInput


class CreateFormUseCase:
    def __init__(
        self,
        form_repository: FormRepository,
        client_repository: ClientRepository,
        user_repository: UserRepository,
    ) -> None:
        self._forms = form_repository
        self._clients = client_repository
        self._users = user_repository

    def execute(self, caller: CallerIdentity, data: FormInput) -> CreateFormResult:
        technician_ids = dedupe_ids(data.technician_ids or [])
        form = Form(
            id=uuid4(),
            opened_at=data.opened_at,
            technicians=[Member(id=tid) for tid in technician_ids],
            client=ClientReference(id=data.client_id) if data.client_id else None,
            solicited_by=data.solicited_by or "",
            difficulty_level=data.difficulty_level or "",
            defect_description=data.defect_description or "",
            solution_description=data.solution_description or "",
        )

        # 1) Validación de campos
        try:
            form.validate()
        except DomainValidationError as exc:
            return CreateFormResult(error=validation_failure(exc))

        # 2) Referencias
        client_ref, error = resolve_client(self._clients, data.client_id)
        if error is not None:
            return CreateFormResult(error=error)

        technicians, error = resolve_technicians(self._users, technician_ids)
        if error is not None:
            return CreateFormResult(error=error)

        form.client = client_ref
        form.technicians = technicians

        # 3) Persistencia atómica (form + técnicos)
        created = self._forms.create_form(form)
        logger.info(
            "Formulário criado",
            extra={
                "form_id": str(created.id),
                "user_id": str(caller.user_id),
                "technicians": len(technicians),
            },
        )
        return CreateFormResult(form=created)
