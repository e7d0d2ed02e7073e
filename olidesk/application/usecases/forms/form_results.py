"""
===============================================================================
FORM USE CASE RESULTS
===============================================================================

Responsibilities:
    - DTO de entrada (FormInput) y resultados tipados por caso de uso.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final, List
from uuid import UUID

from ....domain.entities import Form
from ...errors import UseCaseError

MSG_FORM_NOT_FOUND: Final[str] = "form not found"


@dataclass
class FormInput:
    """None / vacío significa "no provisto" en updates parciales."""

    opened_at: datetime | None = None
    technician_ids: List[UUID] | None = None
    client_id: UUID | None = None
    solicited_by: str | None = None
    difficulty_level: str | None = None
    defect_description: str | None = None
    solution_description: str | None = None


@dataclass
class CreateFormResult:
    form: Form | None = None
    error: UseCaseError | None = None


@dataclass
class GetFormResult:
    form: Form | None = None
    error: UseCaseError | None = None


@dataclass
class ListFormsResult:
    forms: List[Form] = field(default_factory=list)
    error: UseCaseError | None = None


@dataclass
class UpdateFormResult:
    form: Form | None = None
    error: UseCaseError | None = None


@dataclass
class DeleteFormResult:
    deleted: bool = False
    error: UseCaseError | None = None
