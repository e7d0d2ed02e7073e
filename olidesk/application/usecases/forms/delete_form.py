"""
USE CASE: Delete Form.

Borra filas de técnicos y el form en una transacción. Idempotente:
un id inexistente devuelve deleted=False sin error.
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import CallerIdentity
from ....domain.repositories import FormRepository
from .form_results import DeleteFormResult


class DeleteFormUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    def execute(self, caller: CallerIdentity, form_id: UUID) -> DeleteFormResult:
        deleted = self._forms.delete_form(form_id)
        logger.info(
            "Formulário deletado",
            extra={
                "form_id": str(form_id),
                "user_id": str(caller.user_id),
                "deleted": deleted,
            },
        )
        return DeleteFormResult(deleted=deleted)
