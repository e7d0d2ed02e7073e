"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    Address,
    CallerIdentity,
    Client,
    ClientReference,
    ClientType,
    ContactPerson,
    Form,
    Member,
    User,
)
from .errors import DomainValidationError, DuplicateRecordError
from .repositories import ClientRepository, FormRepository, UserRepository
from .services import Coordinates, GeocodingError, GeocodingService, PasswordHasher

__all__ = [
    "Address",
    "CallerIdentity",
    "Client",
    "ClientReference",
    "ClientRepository",
    "ClientType",
    "ContactPerson",
    "Coordinates",
    "DomainValidationError",
    "DuplicateRecordError",
    "Form",
    "FormRepository",
    "GeocodingError",
    "GeocodingService",
    "Member",
    "PasswordHasher",
    "User",
    "UserRepository",
]
