"""
Form (atendimento) use cases (public API del paquete).
"""

from .create_form import CreateFormUseCase
from .delete_form import DeleteFormUseCase
from .form_results import (
    CreateFormResult,
    DeleteFormResult,
    FormInput,
    GetFormResult,
    ListFormsResult,
    UpdateFormResult,
)
from .get_form import GetFormUseCase, ListFormsUseCase
from .update_form import UpdateFormUseCase

__all__ = [
    "CreateFormResult",
    "CreateFormUseCase",
    "DeleteFormResult",
    "DeleteFormUseCase",
    "FormInput",
    "GetFormResult",
    "GetFormUseCase",
    "ListFormsResult",
    "ListFormsUseCase",
    "UpdateFormResult",
    "UpdateFormUseCase",
]
