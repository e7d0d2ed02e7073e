"""
===============================================================================
TARJETA CRC — schemas/forms.py
===============================================================================

Módulo:
    Schemas HTTP para Atendimentos (forms)

Responsabilidades:
    - DTOs de request/response para /forms/*.
    - Respetar los nombres de campo del contrato (data_de_abertura,
      tecnicos_responsaveis, cliente_id / cliente).
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from olidesk.application.usecases.forms import FormInput
from olidesk.domain.entities import Form


class FormReq(BaseModel):
    """Request de create (completo) y update (parcial)."""

    data_de_abertura: datetime | None = None
    tecnicos_responsaveis: list[UUID] | None = None
    cliente_id: UUID | None = None
    solicited_by: str | None = None
    difficulty_level: str | None = None
    defect_description: str | None = None
    solution_description: str | None = None

    def to_input(self) -> FormInput:
        return FormInput(
            opened_at=self.data_de_abertura,
            technician_ids=self.tecnicos_responsaveis,
            client_id=self.cliente_id,
            solicited_by=self.solicited_by,
            difficulty_level=self.difficulty_level,
            defect_description=self.defect_description,
            solution_description=self.solution_description,
        )


class TechnicianRes(BaseModel):
    id: UUID
    name: str


class ClientRefRes(BaseModel):
    id: UUID
    client_name: str


class FormRes(BaseModel):
    id: UUID
    data_de_abertura: datetime | None = None
    tecnicos_responsaveis: list[TechnicianRes]
    cliente: ClientRefRes | None = None
    solicited_by: str
    difficulty_level: str
    defect_description: str
    solution_description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, form: Form) -> "FormRes":
        return cls(
            id=form.id,
            data_de_abertura=form.opened_at,
            tecnicos_responsaveis=[
                TechnicianRes(id=m.id, name=m.name) for m in form.technicians
            ],
            cliente=(
                ClientRefRes(id=form.client.id, client_name=form.client.client_name)
                if form.client
                else None
            ),
            solicited_by=form.solicited_by,
            difficulty_level=form.difficulty_level,
            defect_description=form.defect_description,
            solution_description=form.solution_description,
            created_at=form.created_at,
            updated_at=form.updated_at,
        )


class FormsListRes(BaseModel):
    forms: list[FormRes]


class FormEnvelopeRes(BaseModel):
    form: FormRes
