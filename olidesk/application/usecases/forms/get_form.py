"""
USE CASE: Get Form / List Forms.

Técnicos y cliente llegan ya resueltos por el repositorio.
"""

from __future__ import annotations

from uuid import UUID

from ....domain.entities import CallerIdentity
from ....domain.repositories import FormRepository
from ...errors import not_found
from .form_results import MSG_FORM_NOT_FOUND, GetFormResult, ListFormsResult


class GetFormUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    def execute(self, caller: CallerIdentity, form_id: UUID) -> GetFormResult:
        form = self._forms.get_form(form_id)
        if form is None:
            return GetFormResult(error=not_found(MSG_FORM_NOT_FOUND))
        return GetFormResult(form=form)


class ListFormsUseCase:
    def __init__(self, form_repository: FormRepository) -> None:
        self._forms = form_repository

    def execute(self, caller: CallerIdentity) -> ListFormsResult:
        return ListFormsResult(forms=self._forms.list_forms())
