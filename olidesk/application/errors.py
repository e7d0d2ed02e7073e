"""
===============================================================================
USE CASE ERRORS (Shared Error Model)
===============================================================================

Name:
    ErrorKind / UseCaseError

Business Goal:
    Dar a todos los casos de uso un único vocabulario de fallos, para que la
    capa HTTP lo traduzca a status codes en un solo lugar.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    application.errors

Responsibilities:
    - Definir ErrorKind (categorías estables).
    - Definir UseCaseError (kind + mensaje + campo opcional).
    - Proveer helpers de construcción para los fallos frecuentes.

Collaborators:
    - application.usecases.*: devuelven UseCaseError dentro de sus Results.
    - interfaces.api.http.error_mapping: ErrorKind -> HTTP.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..domain.errors import DomainValidationError


class ErrorKind(str, Enum):
    """
    Categorías de error de los casos de uso.

      - VALIDATION_ERROR: input inválido/incompleto.
      - NOT_AUTHENTICATED: credenciales o identidad inválidas.
      - NOT_FOUND: recurso inexistente.
      - CONFLICT: colisión de unicidad.
      - UPSTREAM_FAILURE: dependencia externa (geocoding) falló.
      - INTERNAL_ERROR: fallo inesperado.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class UseCaseError:
    kind: ErrorKind
    message: str
    field: str | None = None


def validation_failure(exc: DomainValidationError) -> UseCaseError:
    return UseCaseError(
        kind=ErrorKind.VALIDATION_ERROR, message=exc.message, field=exc.field
    )


def not_found(message: str) -> UseCaseError:
    return UseCaseError(kind=ErrorKind.NOT_FOUND, message=message)
