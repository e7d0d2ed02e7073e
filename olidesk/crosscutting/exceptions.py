# olidesk/crosscutting/exceptions.py
"""
===============================================================================
TARJETA CRC — crosscutting/exceptions.py (Errores técnicos)
===============================================================================

Responsabilidades:
  - Errores de infraestructura/configuración que NO son errores de negocio.
  - Cada instancia lleva un error_id para cruzarla con el log.

Colaboradores:
  - infrastructure/repositories/postgres/base.py (DatabaseError)
  - identity/tokens.py, application/dev_seed_user.py (ConfigurationError)
  - api/exception_handlers.py (los traduce a 500)

Nota:
  - Los errores esperables del dominio (not found, conflict, geocoding) viajan
    como ApplicationError en los Result de los casos de uso.
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class OlideskError(Exception):
    """Base de errores técnicos; `message` nunca debe incluir secretos."""

    error_code = "OLIDESK_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.error_id = error_id if error_id else uuid4().hex

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class DatabaseError(OlideskError):
    error_code = "DATABASE_ERROR"


class ConfigurationError(OlideskError):
    """Config inutilizable; se levanta en startup y corta el arranque."""

    error_code = "CONFIGURATION_ERROR"
