"""
===============================================================================
TARJETA CRC — domain/errors.py
===============================================================================

Módulo:
    Errores de dominio (validación e integridad)

Responsabilidades:
    - Definir los mensajes estables de validación (contrato con la API).
    - Representar un fallo de invariante con el campo afectado.
    - Representar colisiones de unicidad detectadas por la persistencia.

Colaboradores:
    - domain.entities: Client/Form/User.validate()
    - infrastructure.repositories: DuplicateRecordError en unique violations
    - application.usecases: traducen a ErrorKind
===============================================================================
"""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Mensajes de validación (Client)
# ---------------------------------------------------------------------------
MSG_CLIENT_NAME: Final[str] = "client name is required"
MSG_CLIENT_TYPE: Final[str] = "client type is required"
MSG_CNPJ_OR_CPF: Final[str] = "cnpj or cpf is required"
MSG_CONTACT_NAME: Final[str] = "contact name is required"
MSG_CONTACT_EMAIL: Final[str] = "contact email is required"
MSG_CONTACT_PHONE: Final[str] = "contact phone is required"
MSG_POSTAL_CODE: Final[str] = "postal code is required"
MSG_COUNTRY: Final[str] = "country is required"
MSG_STATE: Final[str] = "state is required"
MSG_CITY: Final[str] = "city is required"
MSG_STREET: Final[str] = "street is required"
MSG_NUMBER: Final[str] = "number is required"

# ---------------------------------------------------------------------------
# Mensajes de validación (Form / Atendimento)
# ---------------------------------------------------------------------------
MSG_DEFECT_DESCRIPTION: Final[str] = "defect invalid"
MSG_DIFFICULTY_LEVEL: Final[str] = "invalid difficulty level"
MSG_SOLICITED_BY: Final[str] = "invalid solicited by"
MSG_CLIENT_ID: Final[str] = "invalid client ID"
MSG_TECHNICIANS: Final[str] = "invalid technician responsible ID"
MSG_OPEN_DATE: Final[str] = "invalid open date"
MSG_SOLUTION_DESCRIPTION: Final[str] = "solution description invalid"

# ---------------------------------------------------------------------------
# Mensajes de validación / negocio (User)
# ---------------------------------------------------------------------------
MSG_USER_NAME: Final[str] = "name is required"
MSG_USER_EMAIL: Final[str] = "email is required"
MSG_USER_ROLE: Final[str] = "role is required"
MSG_USER_PASSWORD: Final[str] = "password is required"
MSG_DUPLICATED_EMAIL: Final[str] = "duplicated email or username"
MSG_INVALID_CREDENTIALS: Final[str] = "invalid email or password"
MSG_USER_NOT_FOUND: Final[str] = "user not found"


class DomainValidationError(ValueError):
    """Invariante violada. `field` identifica el dato, `message` es estable."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class DuplicateRecordError(Exception):
    """La persistencia rechazó un registro por unicidad (ej: email repetido)."""
